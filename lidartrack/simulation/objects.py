"""
Simulation Objects

Circular obstacles moving through the sensor frame and the simulated
LIDAR that observes them.

Coordinate system (sensor frame):
    - x: Lateral [m]
    - y: Longitudinal [m] (forward)

    A ray at bearing θ points along (sin θ, cos θ).
"""

from typing import List, Optional, Sequence, Tuple

import numba
import numpy as np


@numba.jit(nopython=True, cache=True)
def _update_kinematics_cv(
    pos: np.ndarray, vel: np.ndarray, dt: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    JIT-compiled Constant Velocity (CV) motion model.

    x_new = x + v * dt
    v_new = v (unchanged)
    """
    new_pos = pos + vel * dt
    new_vel = vel.copy()
    return new_pos, new_vel


@numba.jit(nopython=True, cache=True)
def _cast_rays_jit(
    angles: np.ndarray, centers: np.ndarray, radii: np.ndarray, max_range: float
) -> np.ndarray:
    """
    JIT-compiled ray/circle intersection for a full sweep.

    For ray direction d and circle (c, r), the hit distance t solves
        t² - 2t(d·c) + |c|² - r² = 0

    Args:
        angles: Ray bearings [rad]
        centers: (N, 2) obstacle centers [m]
        radii: (N,) obstacle radii [m]
        max_range: Maximum sensor range [m]

    Returns:
        Range per ray, inf where nothing is hit within max_range
    """
    n_rays = angles.shape[0]
    ranges = np.full(n_rays, np.inf)

    for i in range(n_rays):
        dx = np.sin(angles[i])
        dy = np.cos(angles[i])
        best = np.inf

        for j in range(centers.shape[0]):
            b = dx * centers[j, 0] + dy * centers[j, 1]
            c = centers[j, 0] ** 2 + centers[j, 1] ** 2 - radii[j] ** 2
            disc = b * b - c
            if disc < 0.0:
                continue
            root = np.sqrt(disc)
            t = b - root
            if t < 0.0:
                # Sensor inside the obstacle
                t = b + root
            if t >= 0.0 and t < best:
                best = t

        if best <= max_range:
            ranges[i] = best

    return ranges


class SimulatedObstacle:
    """
    Circular obstacle with constant-velocity kinematics.

    Attributes:
        name: Obstacle label
        position: Center [x, y] [m]
        velocity: [vx, vy] [m/s]
        radius: Radius [m]
    """

    def __init__(
        self,
        name: str,
        position: Sequence[float],
        velocity: Optional[Sequence[float]] = None,
        radius: float = 0.5,
    ):
        self.name = name
        self.position = np.asarray(position, dtype=np.float64)
        self.velocity = (
            np.zeros(2) if velocity is None else np.asarray(velocity, dtype=np.float64)
        )
        self.radius = radius

    def update(self, dt: float) -> None:
        """Advance the obstacle by dt seconds."""
        self.position, self.velocity = _update_kinematics_cv(self.position, self.velocity, dt)

    @property
    def range_m(self) -> float:
        """Distance from the sensor to the obstacle center [m]."""
        return float(np.hypot(self.position[0], self.position[1]))


class LidarSimulator:
    """
    Planar LIDAR producing range sweeps of simulated obstacles.

    Example:
        >>> lidar = LidarSimulator(math.radians(-45), math.radians(0.5), 181, max_range=50.0)
        >>> sweep = lidar.render([SimulatedObstacle("car", [0.0, 10.0], radius=1.0)])
    """

    def __init__(
        self,
        min_angle: float,
        angle_resolution: float,
        ray_count: int,
        max_range: float = 50.0,
        range_noise_std: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ):
        self.min_angle = min_angle
        self.angle_resolution = angle_resolution
        self.ray_count = ray_count
        self.max_range = max_range
        self.range_noise_std = range_noise_std
        self.rng = rng if rng is not None else np.random.default_rng()

        self.angles = min_angle + np.arange(ray_count, dtype=np.float64) * angle_resolution

    def render(self, obstacles: List[SimulatedObstacle]) -> np.ndarray:
        """
        Cast one sweep.

        Returns:
            (ray_count,) ranges [m], inf for rays that hit nothing
        """
        if obstacles:
            centers = np.array([o.position for o in obstacles], dtype=np.float64)
            radii = np.array([o.radius for o in obstacles], dtype=np.float64)
        else:
            centers = np.zeros((0, 2), dtype=np.float64)
            radii = np.zeros(0, dtype=np.float64)

        ranges = _cast_rays_jit(self.angles, centers, radii, self.max_range)

        if self.range_noise_std > 0.0:
            hit = np.isfinite(ranges)
            noise = self.rng.normal(0.0, self.range_noise_std, size=int(hit.sum()))
            ranges[hit] = np.maximum(ranges[hit] + noise, 0.0)

        return ranges
