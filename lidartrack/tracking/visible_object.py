"""
Visible Object

An obstruction detected by LIDAR rays, tracked across sensor frames.
Each object carries a centerpoint, a smoothed velocity estimate and a
trajectory line so its motion can be predicted and it can be re-identified
in later sweeps.

Object Lifecycle:
    NEW -> TRACKED

    Objects are created from an unmatched (left, right, dist) detection and
    mutated in place whenever a later detection matches them. Eviction is
    left to the owning collection.
"""

from enum import Enum
from typing import Optional, Tuple

from ..geometry import Angle, LidarRay, Point2D, compute_centerpoint
from .constants import CONFIDENCE_STEP, INITIAL_CONFIDENCE, MAX_CONFIDENCE, UNCERTAINTY_RATIO
from .matcher import is_same_object
from .motion import MotionEstimator
from .trajectory import TrajectoryFitter


class ObjectState(Enum):
    """Visible object lifecycle states."""

    NEW = "new"  # Just constructed, no velocity history
    TRACKED = "tracked"  # At least one successful update


class VisibleObject:
    """
    Tracked obstruction hypothesis.

    Attributes:
        left: Left boundary ray of the latest detection
        right: Right boundary ray of the latest detection
        dist: Representative range of the latest detection [m]
        centerpoint: Centerpoint of the latest detection
        confidence: Track confidence in [0, 1]
        tracking: Whether planning currently follows this object
        estimated_direction: Bearing of the object when first detected
        object_id: Identifier assigned by the owning collection
        updates: Number of successful updates

    Example:
        >>> left = LidarRay.from_polar(0.17, 5.0)
        >>> right = LidarRay.from_polar(-0.17, 5.0)
        >>> obj = VisibleObject(left, right, 5.0)
        >>> obj.update(left, right, 4.9)
        >>> obj.state
        <ObjectState.TRACKED: 'tracked'>
    """

    def __init__(self, left: LidarRay, right: LidarRay, dist: float, object_id: int = 0):
        self.left = left
        self.right = right
        self.dist = dist
        self.object_id = object_id

        self.centerpoint = self.get_centerpoint()
        self.estimated_direction: Angle = left.angle.average(right.angle)
        self.confidence = INITIAL_CONFIDENCE
        self.tracking = False
        self.updates = 0

        self._motion = MotionEstimator()
        self._trajectory = TrajectoryFitter(self.centerpoint)

    def __repr__(self) -> str:
        return (
            f"VisibleObject(id={self.object_id}, center=({self.centerpoint.x:.2f}, "
            f"{self.centerpoint.y:.2f}), confidence={self.confidence:.2f})"
        )

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ObjectState:
        return ObjectState.TRACKED if self.updates > 0 else ObjectState.NEW

    @property
    def estimated_velocity(self) -> Tuple[float, float]:
        """Smoothed (vx, vy) [m/frame]."""
        return self._motion.velocity

    @property
    def speed(self) -> float:
        return self._motion.speed

    @property
    def heading_rad(self) -> float:
        return self._motion.heading_rad

    @property
    def line_slope(self) -> Optional[float]:
        return self._trajectory.slope

    @property
    def line_intercept(self) -> Optional[float]:
        return self._trajectory.intercept

    @property
    def history(self) -> Tuple[Point2D, ...]:
        """Centerpoints used for trajectory fitting, oldest first."""
        return self._trajectory.history

    def get_centerpoint(
        self,
        left: Optional[LidarRay] = None,
        right: Optional[LidarRay] = None,
        dist: Optional[float] = None,
    ) -> Point2D:
        """
        Centerpoint of the given rays, or of this object's own rays.
        """
        if left is None or right is None or dist is None:
            return compute_centerpoint(self.left, self.right, self.dist)
        return compute_centerpoint(left, right, dist)

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def estimate_update(self) -> Point2D:
        """Expected centerpoint in the next frame."""
        return self._motion.estimate_next(self.centerpoint)

    def get_projected_position(self, num_steps: int) -> Point2D:
        """Expected centerpoint num_steps frames ahead (constant velocity)."""
        return self._motion.project(self.centerpoint, num_steps)

    def is_same_object(self, other: "VisibleObject", ratio: float = UNCERTAINTY_RATIO) -> bool:
        """True if other is a plausible new position of this object."""
        return is_same_object(self, other, ratio)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def update(self, new_left: LidarRay, new_right: LidarRay, new_dist: float) -> None:
        """
        Fold a matching detection into this object's estimates.

        Steps:
            1. Raise confidence (clamped at 1.0)
            2. Compute the new centerpoint
            3. Refresh the smoothed velocity
            4. Refit the trajectory line and commit the point to history
            5. Replace the stored detection
        """
        self.confidence = min(MAX_CONFIDENCE, self.confidence + CONFIDENCE_STEP)

        new_centerpoint = self.get_centerpoint(new_left, new_right, new_dist)

        self._motion.update(self.centerpoint, new_centerpoint, new_dist)
        self._trajectory.update(new_centerpoint)

        self.centerpoint = new_centerpoint
        self.left = new_left
        self.right = new_right
        self.dist = new_dist
        self.updates += 1

    def update_from(self, other: "VisibleObject") -> None:
        """Merge a freshly constructed candidate into this track."""
        self.update(other.left, other.right, other.dist)

    def set_tracking(self, is_tracking: bool) -> None:
        self.tracking = is_tracking
