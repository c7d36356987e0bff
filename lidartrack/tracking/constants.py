"""
Tracking Constants

Calibrated tuning values for object identity matching, velocity smoothing
and trajectory fitting.
"""

from typing import Final

# =============================================================================
# IDENTITY MATCHING
# =============================================================================

UNCERTAINTY_RATIO: Final[float] = 0.3
"""Max confidence-scaled discrepancy [m] between a prediction and a candidate"""

INITIAL_CONFIDENCE: Final[float] = 0.01
"""Confidence of a newly created object"""

CONFIDENCE_STEP: Final[float] = 0.01
"""Confidence gained per successful update"""

MAX_CONFIDENCE: Final[float] = 1.0

# =============================================================================
# VELOCITY SMOOTHING
# alpha = max(ALPHA_BASE_NEAR + d * ALPHA_SLOPE, ALPHA_BASE_FAR - d * ALPHA_SLOPE)
# =============================================================================

ALPHA_BASE_NEAR: Final[float] = 0.1
ALPHA_BASE_FAR: Final[float] = 0.2
ALPHA_SLOPE: Final[float] = 0.005

# =============================================================================
# TRAJECTORY FITTING
# =============================================================================

HISTORY_SIZE: Final[int] = 16
"""Centerpoints kept for line fitting (fit uses history + incoming point)"""

DEGENERATE_FIT_TOLERANCE: Final[float] = 1e-12
"""Relative tolerance below which the x-variance is treated as zero"""
