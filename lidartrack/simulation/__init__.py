"""
LidarTrack Simulation Package

Simulated obstacles, simulated LIDAR sweeps and the headless runner.
"""

from .headless_runner import HeadlessRunner, ObjectSnapshot, SimulationResult
from .objects import LidarSimulator, SimulatedObstacle

__all__ = [
    "HeadlessRunner",
    "SimulationResult",
    "ObjectSnapshot",
    "LidarSimulator",
    "SimulatedObstacle",
]
