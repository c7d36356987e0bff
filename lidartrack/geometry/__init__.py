"""
Geometry Module

Angle arithmetic and polar/Cartesian projection for LIDAR rays.

Components:
    - Angle: Wraparound-safe angle value
    - LidarRay: Polar LIDAR sample with lateral/longitudinal projection
    - Point2D: Cartesian point in the sensor frame
    - compute_centerpoint: Obstruction centerpoint from a boundary ray pair
"""

from .angle import Angle, normalize
from .centerpoint import compute_centerpoint
from .lidar_ray import NO_RETURN, LidarRay, Point2D

__all__ = ["Angle", "normalize", "LidarRay", "Point2D", "NO_RETURN", "compute_centerpoint"]
