"""
Unit tests for the pointing matcher
"""

import pytest

from whattheflight.core.matcher import match_aircraft, pointing_score
from whattheflight.models import AircraftSample


def make_aircraft(icao24, bearing, elevation, distance=20.0):
    return AircraftSample(
        icao24=icao24,
        callsign=icao24.upper(),
        latitude=51.5,
        longitude=-0.1,
        altitude=5000,
        bearing=bearing,
        distance=distance,
        elevation=elevation,
    )


class TestPointingScore:

    def test_heading_weighted(self):
        heading_diff, elevation_diff, score = pointing_score(90, 10, make_aircraft('a', 95, 12))
        assert heading_diff == pytest.approx(5)
        assert elevation_diff == pytest.approx(2)
        assert score == pytest.approx(9.5)

    def test_heading_diff_wraps(self):
        heading_diff, _, _ = pointing_score(355, 10, make_aircraft('a', 5, 10))
        assert heading_diff == pytest.approx(10)


class TestMatchAircraft:
    """Test cases for match_aircraft"""

    def test_picks_lowest_score(self):
        a = make_aircraft('a', 95, 12)
        b = make_aircraft('b', 100, 10)
        assert match_aircraft(90, 10, [b, a]) is a

    def test_heading_out_of_tolerance(self):
        """Perfect elevation does not rescue a heading miss"""
        aircraft = make_aircraft('a', 130, 10)
        assert match_aircraft(90, 10, [aircraft]) is None

    def test_elevation_out_of_tolerance(self):
        aircraft = make_aircraft('a', 90, 40)
        assert match_aircraft(90, 10, [aircraft]) is None

    def test_tolerance_is_strict(self):
        aircraft = make_aircraft('a', 120, 10)
        assert match_aircraft(90, 10, [aircraft]) is None
        assert match_aircraft(90, 10, [make_aircraft('b', 90, 30)]) is None

    def test_nearest_by_score_but_out_of_tolerance(self):
        """A low raw score alone is not enough when one axis is outside tolerance"""
        close_heading = make_aircraft('a', 90, 31)      # score 21, elevation diff 21
        farther = make_aircraft('b', 105, 12)           # score 24.5
        assert match_aircraft(90, 10, [close_heading, farther]) is farther

    def test_tie_keeps_first(self):
        first = make_aircraft('a', 95, 10)
        second = make_aircraft('b', 85, 10)
        assert match_aircraft(90, 10, [first, second]) is first
        assert match_aircraft(90, 10, [second, first]) is second

    def test_across_north(self):
        aircraft = make_aircraft('a', 355, 10)
        assert match_aircraft(5, 10, [aircraft]) is aircraft

    @pytest.mark.parametrize("heading, tilt", [(None, 10), (90, None), (None, None)])
    def test_unset_orientation(self, heading, tilt):
        assert match_aircraft(heading, tilt, [make_aircraft('a', 90, 10)]) is None

    def test_empty_list(self):
        assert match_aircraft(90, 10, []) is None

    def test_custom_tolerances(self):
        aircraft = make_aircraft('a', 100, 10)
        assert match_aircraft(90, 10, [aircraft], heading_tolerance=5) is None
        assert match_aircraft(90, 10, [aircraft], heading_tolerance=15) is aircraft

    def test_idempotent(self):
        aircraft_list = [make_aircraft('a', 95, 12), make_aircraft('b', 100, 10)]
        results = {id(match_aircraft(90, 10, aircraft_list)) for _ in range(5)}
        assert len(results) == 1
        assert [a.icao24 for a in aircraft_list] == ['a', 'b']
