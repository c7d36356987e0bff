"""
Sensor Data Registry

Owned store of the latest LIDAR sweep per sensor position. Sensor
callbacks write sweeps in; the tracking pass reads consistent snapshots
out.

Buffers are allocated once per position by init_lidar() and overwritten in
place on every update_lidar(), so no per-frame allocation happens on the
write path.

Race Conditions:
    Front and back sensors may update from different threads. All buffer
    access is serialized by a single lock and readers always receive
    copies.
"""

import logging
import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

import numpy as np

from ..exceptions import SensorNotInitializedError, SweepSizeError
from ..geometry import NO_RETURN, LidarRay
from .grouping import DEFAULT_MIN_CLUSTER_SIZE, DEFAULT_RANGE_JUMP, group_rays

logger = logging.getLogger(__name__)


class LidarPosition(Enum):
    """Mounting positions of LIDAR sensors."""

    FRONT = "front"
    BACK = "back"
    TOP = "top"
    TOP_FORWARD = "top_forward"
    TOP_RIGHT = "top_right"
    TOP_BACKWARD = "top_backward"
    TOP_LEFT = "top_left"
    SIDE_LEFT = "side_left"
    SIDE_RIGHT = "side_right"
    SIDE_LEFT_FRONT = "side_left_front"
    SIDE_LEFT_BACK = "side_left_back"
    SIDE_RIGHT_FRONT = "side_right_front"
    SIDE_RIGHT_BACK = "side_right_back"


@dataclass
class LidarCalibration:
    """
    Static parameters of one LIDAR.

    Attributes:
        min_angle: Bearing of the first ray [rad]
        angle_resolution: Angular step between rays [rad]
        ray_count: Rays per sweep
        max_range: Returns at or beyond this range count as no return [m]
    """

    min_angle: float
    angle_resolution: float
    ray_count: int
    max_range: float = NO_RETURN

    def ray_angle(self, index: int) -> float:
        return self.min_angle + index * self.angle_resolution


class SensorData:
    """
    Per-position LIDAR sweep registry.

    Usage:
        >>> data = SensorData()
        >>> data.init_lidar(LidarPosition.FRONT, -0.5, 0.01, 101)
        >>> data.update_lidar(LidarPosition.FRONT, [math.inf] * 101)
        >>> data.get_blocked_front_rays()
        []
    """

    def __init__(
        self,
        range_jump: float = DEFAULT_RANGE_JUMP,
        min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE,
    ):
        self.range_jump = range_jump
        self.min_cluster_size = min_cluster_size

        self._calibration: Dict[LidarPosition, LidarCalibration] = {}
        self._rays: Dict[LidarPosition, np.ndarray] = {}
        self._last_update: Dict[LidarPosition, int] = {}
        self._lock = threading.Lock()

    def init_lidar(
        self,
        position: LidarPosition,
        min_angle: float,
        angle_resolution: float,
        ray_count: int,
        max_range: float = NO_RETURN,
    ) -> None:
        """
        Register (or recalibrate) the LIDAR at position.

        Args:
            position: Mounting position
            min_angle: Bearing of the first ray [rad]
            angle_resolution: Angular step between rays [rad]
            ray_count: Rays per sweep, fixes the buffer capacity
            max_range: Maximum valid range [m]
        """
        if ray_count <= 0:
            raise ValueError(f"ray_count must be positive, got {ray_count}")

        with self._lock:
            self._calibration[position] = LidarCalibration(
                min_angle=min_angle,
                angle_resolution=angle_resolution,
                ray_count=ray_count,
                max_range=max_range,
            )
            self._rays[position] = np.full(ray_count, NO_RETURN, dtype=np.float64)
            self._last_update[position] = 0

        logger.info(
            "Initialized %s lidar: %d rays from %.1f deg at %.3f deg resolution",
            position.value,
            ray_count,
            math.degrees(min_angle),
            math.degrees(angle_resolution),
        )

    def is_initialized(self, position: LidarPosition) -> bool:
        return position in self._calibration

    def get_calibration(self, position: LidarPosition) -> LidarCalibration:
        self._require(position)
        return self._calibration[position]

    def update_lidar(self, position: LidarPosition, rays: Sequence[float]) -> None:
        """
        Replace the sweep stored for position.

        Raises:
            SensorNotInitializedError: If init_lidar() was not called
            SweepSizeError: If the sweep length differs from ray_count
        """
        self._require(position)
        sweep = np.asarray(rays, dtype=np.float64)

        with self._lock:
            buffer = self._rays[position]
            if sweep.shape != buffer.shape:
                logger.warning("Dropped %s sweep of %d rays", position.value, sweep.size)
                raise SweepSizeError(
                    f"{position.value} sweep has {sweep.size} rays, expected {buffer.size}",
                    position=position,
                )
            np.copyto(buffer, sweep)
            max_range = self._calibration[position].max_range
            if math.isfinite(max_range):
                buffer[buffer >= max_range] = NO_RETURN
            self._last_update[position] += 1

    def get_lidar_rays(self, position: LidarPosition) -> np.ndarray:
        """Snapshot copy of the latest sweep ranges."""
        self._require(position)
        with self._lock:
            return self._rays[position].copy()

    def get_last_update(self, position: LidarPosition) -> int:
        """Number of sweeps received for position."""
        self._require(position)
        return self._last_update[position]

    def get_rays(self, position: LidarPosition) -> List[LidarRay]:
        """Latest sweep as angle-annotated rays in scan order."""
        calibration = self.get_calibration(position)
        ranges = self.get_lidar_rays(position)
        return [
            LidarRay.from_polar(calibration.ray_angle(i), r) for i, r in enumerate(ranges)
        ]

    def get_blocked_rays(self, position: LidarPosition) -> List[LidarRay]:
        """Rays of the latest sweep that hit something."""
        return [ray for ray in self.get_rays(position) if ray.is_valid()]

    def get_blocked_front_rays(self) -> List[LidarRay]:
        return self.get_blocked_rays(LidarPosition.FRONT)

    def get_blocked_back_rays(self) -> List[LidarRay]:
        return self.get_blocked_rays(LidarPosition.BACK)

    def get_objects_in_front(self) -> list:
        """
        Candidate visible objects detected by the front LIDAR.

        Returns:
            Freshly constructed VisibleObject instances, one per obstruction
        """
        # Import here to avoid circular dependencies
        from ..tracking.visible_object import VisibleObject

        triples = group_rays(
            self.get_rays(LidarPosition.FRONT), self.range_jump, self.min_cluster_size
        )
        return [VisibleObject(t.left, t.right, t.dist) for t in triples]

    def _require(self, position: LidarPosition) -> None:
        if position not in self._calibration:
            raise SensorNotInitializedError(
                f"Lidar at {position.value} has not been initialized", position=position
            )
