#!/usr/bin/env python3
"""
Batch Run Script - Monte Carlo Tracking Executor

Runs every scenario file under several random seeds in parallel using
multiprocessing. Outputs results to CSV for analysis.

Usage:
    python batch_run.py                             # All bundled scenarios, 5 seeds each
    python batch_run.py --runs 20                   # 20 seeds per scenario
    python batch_run.py --scenarios scenarios/two_vehicles.yaml --output results.csv
"""

import argparse
import copy
import csv
import glob
import os
import sys
import time
from datetime import datetime
from multiprocessing import Pool, cpu_count
from typing import List

from tqdm import tqdm

from lidartrack.exceptions import LidarTrackError
from lidartrack.io.config_loader import SimulationConfig, load_scenario
from lidartrack.simulation.headless_runner import SimulationResult, run_single_simulation

DEFAULT_SCENARIO_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "scenarios")


def expand_seeds(configs: List[SimulationConfig], n_runs: int) -> List[SimulationConfig]:
    """One copy of each config per seed 0..n_runs-1."""
    expanded = []
    for config in configs:
        for seed in range(n_runs):
            run_config = copy.deepcopy(config)
            run_config.seed = seed
            expanded.append(run_config)
    return expanded


def run_batch(
    configs: List[SimulationConfig],
    n_workers: int = None,
    output_file: str = "output/batch_results.csv",
) -> List[SimulationResult]:
    """
    Run batch of simulations in parallel.

    Args:
        configs: List of simulation configurations
        n_workers: Number of parallel workers (default: CPU count - 1)
        output_file: Output CSV file path

    Returns:
        List of simulation results
    """
    if n_workers is None:
        n_workers = max(1, cpu_count() - 1)

    print("=" * 60)
    print("LidarTrack Batch Processor")
    print("=" * 60)
    print(f"Configurations: {len(configs)}")
    print(f"Workers: {n_workers}")
    print(f"Output: {output_file}")
    print("=" * 60)

    start_time = time.perf_counter()

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    results = []
    with Pool(n_workers) as pool:
        iterator = pool.imap_unordered(run_single_simulation, configs)
        for result in tqdm(iterator, total=len(configs), desc="Simulating"):
            results.append(result)

    total_time = time.perf_counter() - start_time

    _save_results_csv(results, output_file)
    _print_summary(results, total_time)

    return results


def _save_results_csv(results: List[SimulationResult], filepath: str) -> None:
    """Save results to CSV file."""
    if not results:
        return

    fieldnames = ["seed"] + list(results[0].to_dict().keys())

    with open(filepath, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for result in results:
            writer.writerow({"seed": result.config.seed, **result.to_dict()})

    print(f"\nResults saved to: {filepath}")


def _print_summary(results: List[SimulationResult], total_time: float) -> None:
    """Print batch run summary."""
    if not results:
        print("No results to summarize")
        return

    total_frames = sum(r.n_frames for r in results)
    total_created = sum(r.objects_created for r in results)
    total_obstacles = sum(len(r.config.obstacles) for r in results)
    avg_count = sum(r.mean_object_count for r in results) / len(results)

    print("\n" + "=" * 60)
    print("BATCH COMPLETE")
    print("=" * 60)
    print(f"Total simulations: {len(results)}")
    print(f"Total frames: {total_frames:,}")
    print(f"Objects created: {total_created:,} for {total_obstacles:,} obstacles")
    print(f"Average objects per frame: {avg_count:.2f}")
    print(f"Total time: {total_time:.2f}s")
    print(f"Sims/second: {len(results) / total_time:.1f}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(description="Run Monte Carlo LIDAR tracking simulations")
    parser.add_argument(
        "--scenarios",
        nargs="+",
        default=None,
        help="Scenario YAML files (default: every file in scenarios/)",
    )
    parser.add_argument(
        "--runs", type=int, default=5, help="Monte Carlo runs per scenario (default: 5)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: CPU count - 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output CSV file (default: output/batch_YYYYMMDD_HHMMSS.csv)",
    )

    args = parser.parse_args()

    if args.output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        args.output = f"output/batch_{timestamp}.csv"

    paths = args.scenarios or sorted(glob.glob(os.path.join(DEFAULT_SCENARIO_DIR, "*.yaml")))
    if not paths:
        print("Error: No scenario files found")
        return 1

    try:
        configs = [load_scenario(path) for path in paths]
    except (FileNotFoundError, LidarTrackError) as e:
        print(f"Error: {e}")
        return 1

    run_batch(
        configs=expand_seeds(configs, args.runs), n_workers=args.workers, output_file=args.output
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
