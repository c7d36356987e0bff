"""
Sensors Module

LIDAR sweep registry and sweep-to-obstruction grouping.

Components:
    - SensorData: Per-position sweep buffers with thread-safe snapshots
    - LidarPosition: Sensor mounting positions
    - group_rays: Sweep grouping into (left, right, dist) triples
"""

from .grouping import BoundaryTriple, group_rays
from .sensor_data import LidarCalibration, LidarPosition, SensorData

__all__ = ["SensorData", "LidarPosition", "LidarCalibration", "BoundaryTriple", "group_rays"]
