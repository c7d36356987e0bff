"""
LidarTrack Source Package

LIDAR obstruction tracking for a simulated self-driving car:
- Wraparound-safe angle and ray geometry
- Visible object tracking with velocity smoothing and trajectory fitting
- Sensor registry and sweep grouping
- Headless simulation against moving obstacles
"""

from lidartrack.exceptions import (
    DegenerateFitError,
    LidarTrackError,
    SensorNotInitializedError,
    SweepSizeError,
)
from lidartrack.geometry import Angle, LidarRay, Point2D, compute_centerpoint
from lidartrack.sensors import LidarPosition, SensorData, group_rays
from lidartrack.tracking import ObjectTracker, VisibleObject

__version__ = "1.0.0"
__author__ = "LidarTrack Contributors"

__all__ = [
    # Geometry
    "Angle",
    "LidarRay",
    "Point2D",
    "compute_centerpoint",
    # Tracking
    "VisibleObject",
    "ObjectTracker",
    # Sensors
    "SensorData",
    "LidarPosition",
    "group_rays",
    # Errors
    "LidarTrackError",
    "DegenerateFitError",
    "SensorNotInitializedError",
    "SweepSizeError",
]
