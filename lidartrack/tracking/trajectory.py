"""
Trajectory Fitter

Ordinary least-squares line fit y = slope * x + intercept over a bounded
sliding window of recent centerpoints plus the incoming point.

Closed form:
    x_mean = Σx / n,  y_mean = Σy / n
    slope  = (Σxy - Σx * y_mean) / (Σx² - Σx * x_mean)
    intercept = y_mean - slope * x_mean

A window whose x-values are all identical (e.g. an object moving straight
along the longitudinal axis) has a zero denominator. That case raises
DegenerateFitError; TrajectoryFitter keeps the previous line when it occurs.
"""

import logging
import math
from collections import deque
from typing import Deque, Optional, Sequence, Tuple

import numba
import numpy as np

from ..exceptions import DegenerateFitError
from ..geometry import Point2D
from .constants import DEGENERATE_FIT_TOLERANCE, HISTORY_SIZE

logger = logging.getLogger(__name__)


@numba.jit(nopython=True, cache=True)
def _line_sums_jit(xs: np.ndarray, ys: np.ndarray) -> Tuple[float, float, float, float]:
    """
    JIT-compiled accumulation of the least-squares sums.

    Args:
        xs: Lateral coordinates
        ys: Longitudinal coordinates

    Returns:
        Tuple of (Σx, Σy, Σxy, Σx²)
    """
    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_x2 = 0.0
    for i in range(xs.shape[0]):
        sum_x += xs[i]
        sum_y += ys[i]
        sum_xy += xs[i] * ys[i]
        sum_x2 += xs[i] * xs[i]
    return sum_x, sum_y, sum_xy, sum_x2


def fit_line(points: Sequence[Point2D], new_point: Point2D) -> Tuple[float, float]:
    """
    Fit a line through the window points and the incoming point.

    Args:
        points: Previously committed centerpoints (oldest first)
        new_point: Centerpoint about to be committed

    Returns:
        Tuple of (slope, intercept)

    Raises:
        DegenerateFitError: If the x-variance of the points is zero
    """
    n = len(points) + 1
    xs = np.empty(n, dtype=np.float64)
    ys = np.empty(n, dtype=np.float64)
    for i, p in enumerate(points):
        xs[i] = p.x
        ys[i] = p.y
    xs[-1] = new_point.x
    ys[-1] = new_point.y

    sum_x, sum_y, sum_xy, sum_x2 = _line_sums_jit(xs, ys)

    x_mean = sum_x / n
    y_mean = sum_y / n
    denom = sum_x2 - sum_x * x_mean

    if abs(denom) <= DEGENERATE_FIT_TOLERANCE * max(sum_x2, 1.0):
        raise DegenerateFitError(f"Zero x-variance across {n} points", n_points=n)

    slope = (sum_xy - sum_x * y_mean) / denom
    intercept = y_mean - slope * x_mean

    if not (math.isfinite(slope) and math.isfinite(intercept)):
        raise DegenerateFitError(f"Non-finite line fit across {n} points", n_points=n)

    return float(slope), float(intercept)


class TrajectoryFitter:
    """
    Incremental line fitter over a sliding window of centerpoints.

    Attributes:
        slope: Last successfully fitted slope (None before the first fit)
        intercept: Last successfully fitted intercept
        history_size: Maximum number of committed points

    Example:
        >>> fitter = TrajectoryFitter(Point2D(0.0, 0.0))
        >>> fitter.update(Point2D(1.0, 2.0))
        True
        >>> fitter.slope
        2.0
    """

    def __init__(self, initial_point: Optional[Point2D] = None, history_size: int = HISTORY_SIZE):
        self.history_size = history_size
        self._history: Deque[Point2D] = deque(maxlen=history_size)
        self.slope: Optional[float] = None
        self.intercept: Optional[float] = None

        if initial_point is not None:
            self._history.append(initial_point)

    @property
    def history(self) -> Tuple[Point2D, ...]:
        """Committed centerpoints, oldest first."""
        return tuple(self._history)

    def update(self, new_point: Point2D) -> bool:
        """
        Refit the line including new_point, then commit it to the window.

        The oldest point is evicted once the window is full.

        Returns:
            True if the line was refitted, False if the previous fit was kept
        """
        refitted = True
        try:
            self.slope, self.intercept = fit_line(self._history, new_point)
        except DegenerateFitError as e:
            logger.debug("Keeping previous trajectory fit: %s", e)
            refitted = False

        self._history.append(new_point)
        return refitted

    def has_fit(self) -> bool:
        return self.slope is not None
