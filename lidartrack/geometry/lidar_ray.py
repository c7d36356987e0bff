"""
LIDAR Boundary Ray

One polar sample (angle, range) and its projection into the sensor's
local Cartesian frame.

Coordinate Frame:
    lateral (x)      = range * sin(angle)
    longitudinal (y) = range * cos(angle)

    The same convention is used for every ray, centerpoint and
    projected position in the package.
"""

import math
from dataclasses import dataclass

from .angle import Angle

NO_RETURN = math.inf
"""Range value reported by the sensor when a ray hits nothing."""


@dataclass(frozen=True)
class Point2D:
    """
    2-D point in the sensor frame.

    Attributes:
        x: Lateral offset [m]
        y: Longitudinal offset [m]
    """

    x: float
    y: float

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point [m]."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def bearing(self) -> Angle:
        """Direction of the point seen from the sensor (0 = straight ahead)."""
        return Angle(math.atan2(self.x, self.y))


@dataclass(frozen=True)
class LidarRay:
    """
    Single LIDAR return.

    Attributes:
        angle: Ray bearing
        range: Measured range [m], NO_RETURN when nothing was hit
    """

    angle: Angle
    range: float

    @classmethod
    def from_polar(cls, angle_rad: float, range_m: float) -> "LidarRay":
        return cls(Angle(angle_rad), float(range_m))

    @property
    def lateral_dist(self) -> float:
        """Lateral offset of the return [m]."""
        return self.range * math.sin(self.angle.radians)

    @property
    def longitudinal_dist(self) -> float:
        """Longitudinal offset of the return [m]."""
        return self.range * math.cos(self.angle.radians)

    def to_point(self) -> Point2D:
        return Point2D(self.lateral_dist, self.longitudinal_dist)

    def is_valid(self) -> bool:
        """True for a finite, non-negative return."""
        return math.isfinite(self.range) and self.range >= 0.0
