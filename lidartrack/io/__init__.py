"""
LidarTrack I/O Package

YAML scenario configuration loading.
"""

from .config_loader import (
    LidarConfig,
    ObstacleConfig,
    ScenarioLoader,
    SimulationConfig,
    TrackerConfig,
    load_scenario,
)

__all__ = [
    "ScenarioLoader",
    "load_scenario",
    "SimulationConfig",
    "LidarConfig",
    "TrackerConfig",
    "ObstacleConfig",
]
