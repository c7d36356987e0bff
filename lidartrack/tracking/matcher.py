"""
Object Identity Matcher

Decides whether an incoming detection continues a tracked object.

A candidate matches when

    |estimate_update(tracked) - candidate.centerpoint| * tracked.confidence < ratio

so well-established tracks (high confidence) demand tight spatial
continuity while new tracks (confidence ~0.01) are matched loosely.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from .constants import UNCERTAINTY_RATIO

if TYPE_CHECKING:
    from .visible_object import VisibleObject

logger = logging.getLogger(__name__)


def prediction_error(tracked: "VisibleObject", candidate: "VisibleObject") -> float:
    """Distance [m] between tracked's one-step prediction and candidate's centerpoint."""
    return tracked.estimate_update().distance_to(candidate.centerpoint)


def is_same_object(
    tracked: "VisibleObject", candidate: "VisibleObject", ratio: float = UNCERTAINTY_RATIO
) -> bool:
    """
    Confidence-scaled proximity test.

    Args:
        tracked: Existing tracked object
        candidate: Freshly constructed detection
        ratio: Uncertainty ratio threshold

    Returns:
        True if candidate is a possible new position of tracked
    """
    return prediction_error(tracked, candidate) * tracked.confidence < ratio


def find_match(
    objects: Iterable["VisibleObject"],
    candidate: "VisibleObject",
    ratio: float = UNCERTAINTY_RATIO,
) -> Optional["VisibleObject"]:
    """
    Nearest-candidate matching.

    Args:
        objects: Tracked objects eligible for this candidate
        candidate: Freshly constructed detection
        ratio: Uncertainty ratio threshold

    Returns:
        The matching object with the smallest prediction error, or None
    """
    best = None
    best_error = float("inf")

    for obj in objects:
        error = prediction_error(obj, candidate)
        if error * obj.confidence < ratio and error < best_error:
            best = obj
            best_error = error

    if best is not None:
        logger.debug(
            "Candidate at (%.2f, %.2f) matched object %d (error %.3f m)",
            candidate.centerpoint.x,
            candidate.centerpoint.y,
            best.object_id,
            best_error,
        )
    return best


def associate(
    objects: Iterable["VisibleObject"],
    candidates: Sequence["VisibleObject"],
    ratio: float = UNCERTAINTY_RATIO,
) -> List[Tuple["VisibleObject", int]]:
    """
    Greedy nearest-neighbor association over a whole frame.

    Every gated (object, candidate) pair is ranked by prediction error and
    assigned smallest first, so each object and each candidate is used at
    most once and the result does not depend on scan order.

    Args:
        objects: Tracked objects eligible this frame
        candidates: Detections of the frame
        ratio: Uncertainty ratio threshold

    Returns:
        (object, candidate index) pairs
    """
    pairs = []
    for obj in objects:
        for idx, candidate in enumerate(candidates):
            error = prediction_error(obj, candidate)
            if error * obj.confidence < ratio:
                pairs.append((error, obj.object_id, idx, obj))

    pairs.sort(key=lambda p: (p[0], p[1], p[2]))

    assignments = []
    used_objects = set()
    used_candidates = set()
    for error, object_id, idx, obj in pairs:
        if object_id in used_objects or idx in used_candidates:
            continue
        used_objects.add(object_id)
        used_candidates.add(idx)
        assignments.append((obj, idx))
        logger.debug("Object %d matched candidate %d (error %.3f m)", object_id, idx, error)

    return assignments
