"""
Device orientation handling.

Turns raw deviceorientation readings (alpha/beta/webkitCompassHeading)
into a compass heading and an upward tilt, and smooths both with an
exponential moving average so the pointer does not jitter.
"""

import logging
from typing import Optional, Tuple

from whattheflight.models import OrientationSample
from whattheflight.utils.geometry import angle_diff, normalize_angle

logger = logging.getLogger(__name__)

DEFAULT_SMOOTHING_FACTOR = 0.3


def smooth_angle(current: Optional[float], target: float, factor: float,
                 dead_zone: float = 0.0) -> float:
    """
    Exponentially smooth a compass angle towards a new reading.

    The blend always goes the short way round, so smoothing from 359°
    towards 2° passes through 0° rather than sweeping back through 180°.

    Args:
        current: Previous smoothed angle, or None before the first reading
        target: New raw reading in degrees
        factor: Weight of the new reading, in (0, 1]
        dead_zone: Changes smaller than this (degrees) are ignored

    Returns:
        New smoothed angle in [0, 360)
    """
    if current is None:
        return normalize_angle(target)

    diff = angle_diff(target, current)
    if abs(diff) < dead_zone:
        return current

    return normalize_angle(current + diff * factor)


def smooth_value(current: Optional[float], target: float, factor: float,
                 dead_zone: float = 0.0) -> float:
    """Exponentially smooth a linear quantity such as tilt."""
    if current is None:
        return target

    diff = target - current
    if abs(diff) < dead_zone:
        return current

    return current + diff * factor


def heading_from_event(alpha: Optional[float] = None,
                       webkit_compass_heading: Optional[float] = None) -> Optional[float]:
    """
    Compass heading from a deviceorientation event.

    iOS reports a true compass heading directly. Everywhere else alpha
    grows counter-clockwise, so the heading is 360 - alpha.
    """
    if webkit_compass_heading is not None:
        return normalize_angle(webkit_compass_heading)
    if alpha is not None:
        return normalize_angle(360 - alpha)
    return None


def tilt_from_beta(beta: Optional[float]) -> Optional[float]:
    """
    Upward pointing angle from the device's front-to-back tilt.

    beta is 0 with the phone lying flat (camera pointing straight down,
    so the top edge points at the zenith) and 90 held upright (top edge
    on the horizon). The mapping is 90 - beta clamped to [0, 90]:

        beta <= 0        -> 90  (flat or face down)
        0 < beta < 90    -> 90 - beta
        beta >= 90       -> 0   (upright or tilted past vertical)

    Both joins (beta = 0 and beta = 90) are continuous.
    """
    if beta is None:
        return None
    return max(0.0, min(90.0, 90.0 - beta))


def sample_from_event(alpha: Optional[float] = None, beta: Optional[float] = None,
                      webkit_compass_heading: Optional[float] = None) -> OrientationSample:
    """Build an OrientationSample from raw event fields."""
    return OrientationSample(
        heading=heading_from_event(alpha, webkit_compass_heading),
        tilt=tilt_from_beta(beta),
    )


class OrientationSmoother:
    """
    Holds the smoothed heading and tilt for one tracking session.

    Heading and tilt are updated independently: a sample that only carries
    a heading still moves the heading.
    """

    def __init__(self, factor: float = DEFAULT_SMOOTHING_FACTOR, dead_zone: float = 0.0):
        if not 0 < factor <= 1:
            raise ValueError(f"Smoothing factor must be in (0, 1], got {factor}")
        self.factor = factor
        self.dead_zone = dead_zone
        self.heading: Optional[float] = None
        self.tilt: Optional[float] = None

    @property
    def is_ready(self) -> bool:
        """True once both heading and tilt have been seen."""
        return self.heading is not None and self.tilt is not None

    def update(self, sample: OrientationSample) -> Tuple[Optional[float], Optional[float]]:
        """Fold a new sample into the smoothed state and return (heading, tilt)."""
        if sample.heading is not None:
            self.heading = smooth_angle(self.heading, sample.heading,
                                        self.factor, self.dead_zone)
        if sample.tilt is not None:
            self.tilt = smooth_value(self.tilt, sample.tilt,
                                     self.factor, self.dead_zone)
        return self.heading, self.tilt

    def reset(self) -> None:
        """Forget the smoothed state."""
        self.heading = None
        self.tilt = None
        logger.debug("Orientation smoothing reset")
