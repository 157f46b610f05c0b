"""
Pointing matcher: which aircraft is the phone pointed at?
"""

from typing import Optional, Sequence, Tuple

from whattheflight.models import AircraftSample
from whattheflight.utils.geometry import angle_diff

DEFAULT_HEADING_TOLERANCE = 30.0
DEFAULT_ELEVATION_TOLERANCE = 20.0

# Left/right pointing is more accurate than tilt, so heading error costs more
HEADING_WEIGHT = 1.5


def pointing_score(heading: float, tilt: float,
                   aircraft: AircraftSample) -> Tuple[float, float, float]:
    """
    Angular distance between the pointing direction and an aircraft.

    Returns:
        Tuple of (heading_diff, elevation_diff, score)
    """
    heading_diff = abs(angle_diff(heading, aircraft.bearing))
    elevation_diff = abs(tilt - aircraft.elevation)
    return heading_diff, elevation_diff, heading_diff * HEADING_WEIGHT + elevation_diff


def match_aircraft(heading: Optional[float], tilt: Optional[float],
                   aircraft_list: Sequence[AircraftSample],
                   heading_tolerance: float = DEFAULT_HEADING_TOLERANCE,
                   elevation_tolerance: float = DEFAULT_ELEVATION_TOLERANCE) -> Optional[AircraftSample]:
    """
    Select the aircraft closest to where the device is pointing.

    An aircraft is a candidate only when both its heading and elevation
    differences are strictly inside the tolerances. The lowest score wins;
    on a tie the earlier aircraft in the list is kept.

    Args:
        heading: Smoothed compass heading in degrees, or None
        tilt: Smoothed upward tilt in degrees, or None
        aircraft_list: Aircraft with bearing and elevation attached
        heading_tolerance: Maximum heading difference in degrees
        elevation_tolerance: Maximum elevation difference in degrees

    Returns:
        Best matching aircraft, or None
    """
    if heading is None or tilt is None or not aircraft_list:
        return None

    best_match = None
    best_score = float('inf')

    for aircraft in aircraft_list:
        heading_diff, elevation_diff, score = pointing_score(heading, tilt, aircraft)

        if (heading_diff < heading_tolerance
                and elevation_diff < elevation_tolerance
                and score < best_score):
            best_score = score
            best_match = aircraft

    return best_match
