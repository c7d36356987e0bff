"""
Scenario Loader

YAML-based scenario configuration parser for LidarTrack.

Loads tracking scenarios from YAML files and creates configured
HeadlessRunner instances.

Supported scenario elements:
    - LIDAR calibration (mounting position, angular sweep, max range)
    - Tracker parameters (eviction, sweep grouping, matching threshold)
    - Circular obstacles with constant-velocity kinematics
    - Simulation parameters (frames, time step, range noise, seed)

Usage:
    loader = ScenarioLoader('scenarios/crossing_pedestrian.yaml')
    runner = loader.create_runner()
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import yaml

from ..exceptions import ConfigError
from ..sensors import LidarPosition
from ..tracking.constants import UNCERTAINTY_RATIO


@dataclass
class LidarConfig:
    """LIDAR configuration from scenario file."""

    position: LidarPosition = LidarPosition.FRONT
    min_angle_deg: float = -45.0
    angle_resolution_deg: float = 0.5
    ray_count: int = 181
    max_range_m: float = 50.0


@dataclass
class TrackerConfig:
    """Tracker configuration from scenario file."""

    max_misses: int = 5
    range_jump_m: float = 0.5
    min_cluster_size: int = 2
    uncertainty_ratio: float = UNCERTAINTY_RATIO


@dataclass
class ObstacleConfig:
    """Obstacle configuration from scenario file."""

    name: str
    position: np.ndarray
    velocity: np.ndarray
    radius_m: float = 0.5


@dataclass
class SimulationConfig:
    """Complete scenario configuration."""

    name: str = "Unnamed Scenario"
    description: str = ""
    frames: int = 50
    dt_s: float = 0.1
    range_noise_std_m: float = 0.0
    seed: Optional[int] = None
    lidar: LidarConfig = field(default_factory=LidarConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    obstacles: List[ObstacleConfig] = field(default_factory=list)


class ScenarioLoader:
    """
    Loads tracking scenarios from YAML files.

    Usage:
        loader = ScenarioLoader('scenarios/crossing_pedestrian.yaml')
        config = loader.get_config()
        runner = loader.create_runner()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize scenario loader.

        Args:
            filepath: Path to YAML scenario file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[SimulationConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load scenario from YAML file.

        Args:
            filepath: Path to YAML scenario file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigError: If the file is not a valid scenario
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Scenario file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {filepath}: {e}") from e

        self.load_dict(data or {})
        return True

    def load_dict(self, data: Dict[str, Any]) -> SimulationConfig:
        """Parse an already-loaded scenario mapping."""
        if not isinstance(data, dict):
            raise ConfigError(f"Scenario must be a mapping, got {type(data).__name__}")

        self.data = data
        try:
            self._config = self._parse_config()
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid scenario value: {e}") from e
        return self._config

    def _parse_config(self) -> SimulationConfig:
        """Parse loaded YAML data into SimulationConfig."""
        scenario = self.data.get("scenario", {})
        sim_params = self.data.get("simulation", {})

        config = SimulationConfig(
            name=scenario.get("name", "Unnamed Scenario"),
            description=scenario.get("description", ""),
            frames=int(sim_params.get("frames", 50)),
            dt_s=float(sim_params.get("dt_s", 0.1)),
            range_noise_std_m=float(sim_params.get("range_noise_std_m", 0.0)),
            seed=sim_params.get("seed"),
            lidar=self._parse_lidar(),
            tracker=self._parse_tracker(),
            obstacles=self._parse_obstacles(),
        )

        if config.frames <= 0:
            raise ValueError(f"simulation.frames must be positive, got {config.frames}")
        if config.dt_s <= 0:
            raise ValueError(f"simulation.dt_s must be positive, got {config.dt_s}")

        return config

    def _parse_lidar(self) -> LidarConfig:
        """Parse LIDAR configuration."""
        lidar = self.data.get("lidar", {})

        position_name = str(lidar.get("position", "front")).lower()
        try:
            position = LidarPosition(position_name)
        except ValueError:
            raise ValueError(f"Unknown lidar position '{position_name}'") from None

        config = LidarConfig(
            position=position,
            min_angle_deg=float(lidar.get("min_angle_deg", -45.0)),
            angle_resolution_deg=float(lidar.get("angle_resolution_deg", 0.5)),
            ray_count=int(lidar.get("ray_count", 181)),
            max_range_m=float(lidar.get("max_range_m", 50.0)),
        )

        if config.ray_count <= 0:
            raise ValueError(f"lidar.ray_count must be positive, got {config.ray_count}")

        return config

    def _parse_tracker(self) -> TrackerConfig:
        """Parse tracker configuration."""
        tracker = self.data.get("tracker", {})

        return TrackerConfig(
            max_misses=int(tracker.get("max_misses", 5)),
            range_jump_m=float(tracker.get("range_jump_m", 0.5)),
            min_cluster_size=int(tracker.get("min_cluster_size", 2)),
            uncertainty_ratio=float(tracker.get("uncertainty_ratio", UNCERTAINTY_RATIO)),
        )

    def _parse_obstacles(self) -> List[ObstacleConfig]:
        """Parse obstacle configurations."""
        obstacles = []

        for idx, o in enumerate(self.data.get("obstacles", [])):
            pos = o.get("position", {})
            vel = o.get("velocity", {})

            obstacles.append(
                ObstacleConfig(
                    name=o.get("name", f"Obstacle_{idx}"),
                    position=np.array([float(pos.get("x_m", 0)), float(pos.get("y_m", 0))]),
                    velocity=np.array([float(vel.get("vx_mps", 0)), float(vel.get("vy_mps", 0))]),
                    radius_m=float(o.get("radius_m", 0.5)),
                )
            )

        return obstacles

    def get_config(self) -> Optional[SimulationConfig]:
        """
        Get parsed scenario configuration.

        Returns:
            SimulationConfig or None if not loaded
        """
        return self._config

    def create_runner(self):
        """
        Create a HeadlessRunner from the loaded scenario.

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")

        # Import here to avoid circular dependencies
        from ..simulation.headless_runner import HeadlessRunner

        return HeadlessRunner(self._config)


def load_scenario(filepath: str) -> SimulationConfig:
    """
    Convenience function to load a scenario file.

    Args:
        filepath: Path to YAML scenario file

    Returns:
        SimulationConfig instance
    """
    loader = ScenarioLoader(filepath)
    return loader.get_config()
