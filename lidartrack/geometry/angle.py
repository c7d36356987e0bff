"""
Wraparound-safe Angle

Bounded angular value used by ray geometry and centerpoint estimation.
All values are normalized into (-π, π].

Sensor convention:
    0 rad = straight ahead (longitudinal axis), positive angles sweep
    towards the positive lateral axis.
"""

import math
from dataclasses import dataclass

TWO_PI = 2.0 * math.pi


def normalize(radians: float) -> float:
    """
    Normalize an angle into the canonical range (-π, π].

    Args:
        radians: Any finite angle in radians

    Returns:
        Equivalent angle in (-π, π]
    """
    wrapped = math.remainder(radians, TWO_PI)
    if wrapped <= -math.pi:
        wrapped += TWO_PI
    return wrapped


@dataclass(frozen=True)
class Angle:
    """
    Immutable angle value.

    Attributes:
        radians: Normalized angle in (-π, π]

    Example:
        >>> a = Angle.from_degrees(179.0)
        >>> b = Angle.from_degrees(-179.0)
        >>> round(abs(a.average(b).degrees), 6)
        180.0
    """

    radians: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "radians", normalize(float(self.radians)))

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        """Create angle from degrees."""
        return cls(math.radians(degrees))

    @property
    def degrees(self) -> float:
        """Angle in degrees, (-180, 180]."""
        return math.degrees(self.radians)

    def __add__(self, other: "Angle") -> "Angle":
        return Angle(self.radians + other.radians)

    def __sub__(self, other: "Angle") -> "Angle":
        return Angle(self.radians - other.radians)

    def __neg__(self) -> "Angle":
        return Angle(-self.radians)

    def __float__(self) -> float:
        return self.radians

    def average(self, other: "Angle") -> "Angle":
        """
        Midpoint of the minor arc between this angle and another.

        Handles wraparound: the average of 179° and -179° is 180°, not 0°.
        For exactly opposite angles the arc is taken counter-clockwise
        from this angle.
        """
        delta = normalize(other.radians - self.radians)
        return Angle(self.radians + delta / 2.0)

    def distance_to(self, other: "Angle") -> float:
        """Absolute angular distance along the minor arc [rad], in [0, π]."""
        return abs(normalize(other.radians - self.radians))

    def is_front_facing(self) -> bool:
        """True if the angle points into the forward half-plane."""
        return abs(self.radians) < math.pi / 2.0
