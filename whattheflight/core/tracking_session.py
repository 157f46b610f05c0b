"""
Per-client tracking session.

One session per connected client. It owns the observer position, the
aircraft list from the latest successful poll and the smoothed orientation,
and recomputes the pointing match whenever any of them changes.
"""

import logging
from typing import List, Optional

from whattheflight.core.exceptions import SessionError
from whattheflight.core.matcher import (
    DEFAULT_ELEVATION_TOLERANCE,
    DEFAULT_HEADING_TOLERANCE,
    match_aircraft,
)
from whattheflight.core.orientation import OrientationSmoother
from whattheflight.models import AircraftSample, FlightSnapshot, Observer, OrientationSample

logger = logging.getLogger(__name__)


class TrackingSession:
    """Observer, aircraft list and orientation state for one client."""

    def __init__(self, smoother: Optional[OrientationSmoother] = None,
                 heading_tolerance: float = DEFAULT_HEADING_TOLERANCE,
                 elevation_tolerance: float = DEFAULT_ELEVATION_TOLERANCE):
        self.smoother = smoother or OrientationSmoother()
        self.heading_tolerance = heading_tolerance
        self.elevation_tolerance = elevation_tolerance
        self.observer: Optional[Observer] = None
        self.aircraft: List[AircraftSample] = []
        self.last_update: Optional[float] = None
        self.is_tracking = False
        self.matched: Optional[AircraftSample] = None

    def set_observer(self, latitude: float, longitude: float) -> Observer:
        """Fix the observer position. Only allowed once per session."""
        if self.observer is not None:
            raise SessionError("Location already set for this session")
        self.observer = Observer(latitude, longitude)
        logger.info(f"Session observer set to ({latitude:.4f}, {longitude:.4f})")
        return self.observer

    def apply_snapshot(self, snapshot: FlightSnapshot) -> Optional[AircraftSample]:
        """
        Replace the aircraft list with a fresh poll result.

        Failed polls are ignored so the previous list stays in place until
        the next successful one.
        """
        if not snapshot.ok:
            logger.debug(f"Keeping {len(self.aircraft)} aircraft after failed poll: {snapshot.error}")
            return self.matched

        self.aircraft = list(snapshot.flights)
        self.last_update = snapshot.timestamp
        return self._recompute()

    def start_tracking(self) -> None:
        """Begin accepting orientation samples."""
        if self.observer is None:
            raise SessionError("Location must be set before tracking")
        self.is_tracking = True
        logger.info("Tracking started")

    def stop_tracking(self) -> None:
        """Stop tracking and forget the smoothed orientation."""
        self.is_tracking = False
        self.smoother.reset()
        self.matched = None
        logger.info("Tracking stopped")

    def ingest_orientation(self, sample: OrientationSample) -> Optional[AircraftSample]:
        """Update the smoothed orientation and recompute the match."""
        if not self.is_tracking:
            return None
        self.smoother.update(sample)
        return self._recompute()

    @property
    def heading(self) -> Optional[float]:
        """Smoothed compass heading, or None before the first reading."""
        return self.smoother.heading

    @property
    def tilt(self) -> Optional[float]:
        """Smoothed upward tilt, or None before the first reading."""
        return self.smoother.tilt

    def current_match(self) -> Optional[AircraftSample]:
        """The matched aircraft for the current inputs."""
        return self.matched

    def _recompute(self) -> Optional[AircraftSample]:
        if not self.is_tracking:
            self.matched = None
            return None

        previous = self.matched
        self.matched = match_aircraft(
            self.smoother.heading,
            self.smoother.tilt,
            self.aircraft,
            self.heading_tolerance,
            self.elevation_tolerance,
        )

        if self.matched is not None and (previous is None or previous.icao24 != self.matched.icao24):
            logger.info(f"Pointing at {self.matched.callsign} ({self.matched.icao24}) "
                        f"bearing {self.matched.bearing:.1f}°, elevation {self.matched.elevation:.1f}°")
        return self.matched
