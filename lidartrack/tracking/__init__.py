"""
Tracking Module

Object tracking and motion estimation for LIDAR obstructions.

Components:
    - VisibleObject: Tracked obstruction with velocity and trajectory estimates
    - MotionEstimator: Distance-adaptive exponential velocity smoothing
    - TrajectoryFitter: Sliding-window least-squares line fit
    - is_same_object / find_match / associate: Confidence-scaled identity matching
    - ObjectTracker: Per-frame ingest of boundary triples

Example:
    >>> from lidartrack.tracking import ObjectTracker
    >>> tracker = ObjectTracker(max_misses=5)
    >>> objects = tracker.ingest(triples)
"""

from .matcher import associate, find_match, is_same_object
from .motion import MotionEstimator, smoothing_factor
from .tracker import ObjectTracker
from .trajectory import TrajectoryFitter, fit_line
from .visible_object import ObjectState, VisibleObject

__all__ = [
    "VisibleObject",
    "ObjectState",
    "MotionEstimator",
    "smoothing_factor",
    "TrajectoryFitter",
    "fit_line",
    "is_same_object",
    "find_match",
    "associate",
    "ObjectTracker",
]
