"""
Sweep Grouping

Splits a LIDAR sweep into contiguous obstructions and reduces each one to
a (left, right, dist) boundary triple for the tracking core.

A new obstruction starts wherever the sweep has a gap (rays with no
return) or a range discontinuity larger than range_jump.
"""

from typing import List, NamedTuple, Sequence

import numpy as np

from ..geometry import LidarRay

DEFAULT_RANGE_JUMP = 0.5
DEFAULT_MIN_CLUSTER_SIZE = 1


class BoundaryTriple(NamedTuple):
    """Edges and representative range of one obstruction."""

    left: LidarRay
    right: LidarRay
    dist: float


def split_runs(indices: np.ndarray, ranges: np.ndarray, range_jump: float) -> List[np.ndarray]:
    """Split sorted ray indices into runs by index gap or range discontinuity."""
    if indices.size == 0:
        return []
    breaks = np.where((np.diff(indices) > 1) | (np.abs(np.diff(ranges)) > range_jump))[0] + 1
    return np.split(np.arange(indices.size), breaks)


def group_rays(
    rays: Sequence[LidarRay],
    range_jump: float = DEFAULT_RANGE_JUMP,
    min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE,
) -> List[BoundaryTriple]:
    """
    Group a sweep into boundary triples.

    Args:
        rays: Full sweep in scan order (smallest angle first), including
              rays with no return
        range_jump: Range discontinuity that separates obstructions [m]
        min_cluster_size: Minimum number of returns per obstruction

    Returns:
        One BoundaryTriple per obstruction. right is the first ray of the
        run, left the last, dist the closest return.
    """
    if not rays:
        return []

    ranges = np.array([ray.range for ray in rays], dtype=np.float64)
    valid = np.flatnonzero(np.isfinite(ranges) & (ranges >= 0.0))
    valid_ranges = ranges[valid]

    triples = []
    for run in split_runs(valid, valid_ranges, range_jump):
        if len(run) < min_cluster_size:
            continue
        right = rays[valid[run[0]]]
        left = rays[valid[run[-1]]]
        dist = float(np.min(valid_ranges[run]))
        triples.append(BoundaryTriple(left, right, dist))

    return triples
