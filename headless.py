#!/usr/bin/env python3
"""
Headless Tracking CLI

Run a single LIDAR tracking simulation without GUI.

Usage:
    python headless.py                                   # Default scenario
    python headless.py --distance 15 --speed -2          # Custom obstacle
    python headless.py --config scenarios/crossing.yaml  # From file

Examples:
    # Quick test
    python headless.py --distance 10 --frames 30

    # Debug matching decisions
    python headless.py --config scenarios/two_vehicles.yaml --verbose
"""

import argparse
import logging
import os
import sys

import numpy as np

from lidartrack.exceptions import LidarTrackError
from lidartrack.io.config_loader import ObstacleConfig, ScenarioLoader, SimulationConfig
from lidartrack.simulation.headless_runner import HeadlessRunner


def main():
    parser = argparse.ArgumentParser(description="Run headless LIDAR tracking simulation")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML scenario file")

    # Obstacle parameters
    parser.add_argument(
        "--distance", type=float, default=10.0, help="Obstacle distance ahead in m (default: 10)"
    )
    parser.add_argument(
        "--lateral", type=float, default=0.0, help="Obstacle lateral offset in m (default: 0)"
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=-1.0,
        help="Obstacle longitudinal speed in m/s (default: -1, approaching)",
    )
    parser.add_argument(
        "--radius", type=float, default=0.5, help="Obstacle radius in m (default: 0.5)"
    )

    # Simulation parameters
    parser.add_argument(
        "--frames", type=int, default=None, help="Number of frames (default: 50, or from config)"
    )
    parser.add_argument(
        "--noise", type=float, default=0.0, help="Range noise std in m (default: 0)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Options
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load config
    if args.config:
        if not os.path.exists(args.config):
            print(f"Error: Config file not found: {args.config}")
            return 1
        try:
            config = ScenarioLoader(args.config).get_config()
        except LidarTrackError as e:
            print(f"Error: {e}")
            return 1
    else:
        config = SimulationConfig(
            name="CLI Obstacle",
            range_noise_std_m=args.noise,
            seed=args.seed,
            obstacles=[
                ObstacleConfig(
                    name="obstacle",
                    position=np.array([args.lateral, args.distance]),
                    velocity=np.array([0.0, args.speed]),
                    radius_m=args.radius,
                )
            ],
        )

    if args.frames is not None:
        config.frames = args.frames

    if not args.quiet:
        print("=" * 60)
        print("LidarTrack Headless Mode")
        print("=" * 60)
        print(f"Scenario: {config.name}")
        print(f"Obstacles: {len(config.obstacles)}")
        print(
            f"Lidar: {config.lidar.ray_count} rays from {config.lidar.min_angle_deg:.1f}° "
            f"at {config.lidar.angle_resolution_deg:.2f}°"
        )
        print(f"Frames: {config.frames} @ {config.dt_s * 1000:.0f} ms")
        print("=" * 60)

    # Run simulation
    runner = HeadlessRunner(config)
    result = runner.run()

    if not args.quiet:
        print("\n--- RESULTS ---")
        print(f"Objects created: {result.objects_created}")
        print(f"Objects evicted: {result.objects_evicted}")
        print(f"Mean objects per frame: {result.mean_object_count:.2f}")
        for snap in result.final_objects:
            marker = "*" if snap.tracking else " "
            print(
                f"{marker} #{snap.object_id}: pos=({snap.x_m:.2f}, {snap.y_m:.2f}) m  "
                f"speed={snap.speed:.3f} m/frame hdg={snap.heading_deg:.1f}°  conf={snap.confidence:.2f}"
            )
        print(f"Runtime: {result.runtime_s * 1000:.1f} ms")
        print("=" * 60)
    else:
        # Machine-readable output
        print(f"{len(result.final_objects)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
