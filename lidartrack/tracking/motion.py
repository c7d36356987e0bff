"""
Motion Estimator

Exponential-smoothing velocity estimate with a distance-adaptive smoothing
factor, plus constant-velocity forward projection.

Velocity is expressed in meters per frame, per axis:
    v_new = alpha * (p_new - p_prev) + (1 - alpha) * v_prev
    alpha = max(0.1 + d * 0.005, 0.2 - d * 0.005)
"""

import math
from typing import Tuple

from ..geometry import Point2D
from .constants import ALPHA_BASE_FAR, ALPHA_BASE_NEAR, ALPHA_SLOPE


def smoothing_factor(dist: float) -> float:
    """
    Distance-adaptive smoothing factor.

    Args:
        dist: Measured range of the object [m]

    Returns:
        alpha applied to the raw per-frame displacement
    """
    return max(ALPHA_BASE_NEAR + dist * ALPHA_SLOPE, ALPHA_BASE_FAR - dist * ALPHA_SLOPE)


class MotionEstimator:
    """
    Per-axis exponential moving average of centerpoint displacement.

    Attributes:
        vx: Lateral velocity estimate [m/frame]
        vy: Longitudinal velocity estimate [m/frame]
    """

    def __init__(self, vx: float = 0.0, vy: float = 0.0) -> None:
        self.vx = vx
        self.vy = vy

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        """Speed magnitude [m/frame]."""
        return math.hypot(self.vx, self.vy)

    @property
    def heading_rad(self) -> float:
        """Heading of the velocity (0 = longitudinal axis, positive towards lateral)."""
        return math.atan2(self.vx, self.vy)

    def update(self, previous: Point2D, current: Point2D, dist: float) -> Tuple[float, float]:
        """
        Blend the latest displacement into the velocity estimate.

        Args:
            previous: Centerpoint of the previous frame
            current: Newly computed centerpoint
            dist: Measured range used for the smoothing factor [m]

        Returns:
            Updated (vx, vy)
        """
        alpha = smoothing_factor(dist)
        self.vx = alpha * (current.x - previous.x) + (1.0 - alpha) * self.vx
        self.vy = alpha * (current.y - previous.y) + (1.0 - alpha) * self.vy
        return self.velocity

    def project(self, center: Point2D, num_steps: int) -> Point2D:
        """Constant-velocity extrapolation of center by num_steps frames."""
        return Point2D(center.x + self.vx * num_steps, center.y + self.vy * num_steps)

    def estimate_next(self, center: Point2D) -> Point2D:
        """One-step-ahead position."""
        return self.project(center, 1)
