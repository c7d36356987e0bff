"""Custom exception classes for LidarTrack."""

from typing import Optional


class LidarTrackError(Exception):
    """Base exception for all LidarTrack errors."""

    pass


class DegenerateFitError(LidarTrackError):
    """Raised when a trajectory line cannot be fitted (zero variance in x)."""

    def __init__(self, message: str, n_points: int = 0):
        self.n_points = n_points
        super().__init__(message)


class SensorError(LidarTrackError):
    """Base exception for sensor registry errors."""

    def __init__(self, message: str, position: Optional[object] = None):
        self.position = position
        super().__init__(message)


class SensorNotInitializedError(SensorError):
    """Raised when a LIDAR position is used before init_lidar()."""

    pass


class SweepSizeError(SensorError):
    """Raised when a sweep does not match the calibrated ray count."""

    pass


class ConfigError(LidarTrackError):
    """Raised when a scenario file is malformed."""

    pass
