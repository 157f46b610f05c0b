"""
Unit tests for the per-client tracking session
"""

import pytest

from whattheflight.core.exceptions import SessionError
from whattheflight.core.orientation import OrientationSmoother
from whattheflight.core.tracking_session import TrackingSession
from whattheflight.models import AircraftSample, FlightSnapshot, Observer, OrientationSample


OBSERVER = Observer(51.5074, -0.1278)


def make_aircraft(icao24, bearing, elevation):
    return AircraftSample(
        icao24=icao24,
        callsign=icao24.upper(),
        latitude=51.6,
        longitude=-0.1,
        altitude=6000,
        bearing=bearing,
        distance=15.0,
        elevation=elevation,
    )


def make_snapshot(flights, source='opensky', error=None, timestamp=1000.0):
    return FlightSnapshot(
        flights=flights,
        source=source,
        observer=OBSERVER,
        radius_km=150,
        timestamp=timestamp,
        raw_count=len(flights),
        error=error,
    )


@pytest.fixture
def session():
    session = TrackingSession(OrientationSmoother(factor=1.0))
    session.set_observer(OBSERVER.latitude, OBSERVER.longitude)
    return session


class TestObserver:

    def test_set_once(self):
        session = TrackingSession()
        observer = session.set_observer(10.0, 20.0)
        assert observer == Observer(10.0, 20.0)
        assert session.observer == observer

    def test_second_set_rejected(self, session):
        with pytest.raises(SessionError, match="already set"):
            session.set_observer(0, 0)
        assert session.observer == OBSERVER

    def test_tracking_requires_location(self):
        session = TrackingSession()
        with pytest.raises(SessionError, match="Location must be set"):
            session.start_tracking()
        assert not session.is_tracking


class TestSnapshots:

    def test_successful_poll_replaces_list(self, session):
        aircraft = [make_aircraft('a', 90, 10)]
        session.apply_snapshot(make_snapshot(aircraft))

        assert session.aircraft == aircraft
        assert session.last_update == 1000.0

        session.apply_snapshot(make_snapshot([], timestamp=1010.0))
        assert session.aircraft == []
        assert session.last_update == 1010.0

    def test_failed_poll_keeps_previous_list(self, session):
        aircraft = [make_aircraft('a', 90, 10)]
        session.apply_snapshot(make_snapshot(aircraft))

        session.apply_snapshot(make_snapshot([], error="Failed to fetch: opensky: request timed out",
                                             timestamp=1010.0))

        assert session.aircraft == aircraft
        assert session.last_update == 1000.0

    def test_snapshot_without_source_ignored(self, session):
        session.apply_snapshot(make_snapshot([make_aircraft('a', 90, 10)]))
        session.apply_snapshot(make_snapshot([], source=None,
                                             error="Failed to fetch: No aircraft provider configured"))
        assert len(session.aircraft) == 1

    def test_snapshot_while_not_tracking_has_no_match(self, session):
        assert session.apply_snapshot(make_snapshot([make_aircraft('a', 90, 10)])) is None


class TestTracking:

    def test_orientation_ignored_when_not_tracking(self, session):
        assert session.ingest_orientation(OrientationSample(heading=90, tilt=10)) is None
        assert session.heading is None

    def test_match_from_orientation(self, session):
        target = make_aircraft('a', 95, 12)
        session.apply_snapshot(make_snapshot([make_aircraft('b', 200, 10), target]))
        session.start_tracking()

        matched = session.ingest_orientation(OrientationSample(heading=90, tilt=10))

        assert matched is target
        assert session.current_match() is target

    def test_partial_sample_updates_heading_only(self, session):
        session.start_tracking()
        session.ingest_orientation(OrientationSample(heading=45))

        assert session.heading == 45
        assert session.tilt is None
        assert session.current_match() is None

    def test_match_recomputed_on_new_aircraft(self, session):
        session.start_tracking()
        session.ingest_orientation(OrientationSample(heading=90, tilt=10))
        assert session.current_match() is None

        target = make_aircraft('a', 92, 11)
        assert session.apply_snapshot(make_snapshot([target])) is target

        session.apply_snapshot(make_snapshot([make_aircraft('b', 270, 10)]))
        assert session.current_match() is None

    def test_failed_poll_keeps_match(self, session):
        target = make_aircraft('a', 92, 11)
        session.apply_snapshot(make_snapshot([target]))
        session.start_tracking()
        session.ingest_orientation(OrientationSample(heading=90, tilt=10))

        assert session.apply_snapshot(make_snapshot([], error="Failed to fetch: boom")) is target

    def test_stop_resets_smoothing(self, session):
        session.apply_snapshot(make_snapshot([make_aircraft('a', 92, 11)]))
        session.start_tracking()
        session.ingest_orientation(OrientationSample(heading=90, tilt=10))

        session.stop_tracking()

        assert not session.is_tracking
        assert session.heading is None
        assert session.tilt is None
        assert session.current_match() is None
        # Aircraft and observer survive a stop
        assert len(session.aircraft) == 1
        assert session.observer == OBSERVER

    def test_smoothing_applied(self):
        session = TrackingSession(OrientationSmoother(factor=0.5))
        session.set_observer(0, 0)
        session.start_tracking()

        session.ingest_orientation(OrientationSample(heading=0, tilt=0))
        session.ingest_orientation(OrientationSample(heading=20, tilt=10))

        assert session.heading == pytest.approx(10)
        assert session.tilt == pytest.approx(5)
