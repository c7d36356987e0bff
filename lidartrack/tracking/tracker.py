"""
Object Tracker

Owns the collection of visible objects and runs one tracking pass per
LIDAR frame: boundary triples in, updated object set out.

Steps per frame:
    1. Build a candidate VisibleObject per boundary triple
    2. Pair candidates and tracked objects, smallest prediction error first
    3. Update matched objects in place
    4. Create new objects from unmatched candidates
    5. Evict objects that went unmatched for too many frames

Each tracked object and each candidate is used at most once per frame.
Objects created in the current frame are not eligible for matching until
the next one.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..geometry import Point2D
from ..sensors.grouping import BoundaryTriple, group_rays
from ..sensors.sensor_data import LidarPosition, SensorData
from .constants import UNCERTAINTY_RATIO
from .matcher import associate
from .visible_object import VisibleObject

logger = logging.getLogger(__name__)

ORIGIN = Point2D(0.0, 0.0)


class ObjectTracker:
    """
    Frame-by-frame tracker for visible objects.

    Example:
        >>> tracker = ObjectTracker(max_misses=3)
        >>> objects = tracker.ingest(triples)
        >>> for obj in objects:
        ...     print(obj.object_id, obj.get_projected_position(5))
    """

    def __init__(self, max_misses: int = 5, uncertainty_ratio: float = UNCERTAINTY_RATIO) -> None:
        """
        Initialize Object Tracker.

        Args:
            max_misses: Evict an object after this many consecutive unmatched frames
            uncertainty_ratio: Identity matcher threshold
        """
        self.max_misses = max_misses
        self.uncertainty_ratio = uncertainty_ratio

        self.objects: Dict[int, VisibleObject] = {}
        self._misses: Dict[int, int] = {}
        self._next_id = 1

        self.frame_count = 0
        self.objects_created = 0
        self.objects_evicted = 0

    def ingest(self, triples: Iterable[BoundaryTriple]) -> List[VisibleObject]:
        """
        Process the boundary triples of one frame.

        Args:
            triples: (left, right, dist) detections of the current frame

        Returns:
            All tracked objects after the update
        """
        self.frame_count += 1
        candidates = [VisibleObject(left, right, dist) for left, right, dist in triples]

        assignments = associate(self.objects.values(), candidates, self.uncertainty_ratio)
        matched_ids = set()

        for obj, idx in assignments:
            obj.update_from(candidates[idx])
            self._misses[obj.object_id] = 0
            matched_ids.add(obj.object_id)

        for object_id in self.objects:
            if object_id not in matched_ids:
                self._misses[object_id] += 1

        assigned = {idx for _, idx in assignments}
        for idx, candidate in enumerate(candidates):
            if idx not in assigned:
                self._add(candidate)

        self._evict_stale()

        logger.debug(
            "Frame %d: %d detections, %d matched, %d tracked",
            self.frame_count,
            len(candidates),
            len(matched_ids),
            len(self.objects),
        )
        return list(self.objects.values())

    def ingest_frame(
        self, sensor_data: SensorData, position: LidarPosition = LidarPosition.FRONT
    ) -> List[VisibleObject]:
        """
        Group the latest sweep at position and ingest it.

        Args:
            sensor_data: Registry holding the latest sweeps
            position: LIDAR to read

        Returns:
            All tracked objects after the update
        """
        triples = group_rays(
            sensor_data.get_rays(position), sensor_data.range_jump, sensor_data.min_cluster_size
        )
        return self.ingest(triples)

    def update_tracking_flag(self) -> Optional[VisibleObject]:
        """
        Mark the nearest object ahead of the sensor as the tracking object.

        Returns:
            The object now being tracked, or None if nothing is ahead
        """
        ahead = [
            obj for obj in self.objects.values() if obj.centerpoint.bearing().is_front_facing()
        ]
        nearest = min(ahead, key=lambda o: o.centerpoint.distance_to(ORIGIN), default=None)

        for obj in self.objects.values():
            obj.set_tracking(obj is nearest)
        return nearest

    def get_tracking_object(self) -> Optional[VisibleObject]:
        for obj in self.objects.values():
            if obj.tracking:
                return obj
        return None

    def get_object(self, object_id: int) -> Optional[VisibleObject]:
        """Get object by ID."""
        return self.objects.get(object_id)

    def clear(self) -> None:
        """Clear all objects."""
        self.objects.clear()
        self._misses.clear()
        self._next_id = 1
        self.frame_count = 0
        self.objects_created = 0
        self.objects_evicted = 0

    def _add(self, candidate: VisibleObject) -> VisibleObject:
        candidate.object_id = self._next_id
        self.objects[self._next_id] = candidate
        self._misses[self._next_id] = 0
        self._next_id += 1
        self.objects_created += 1

        logger.info(
            "New object %d at (%.2f, %.2f)",
            candidate.object_id,
            candidate.centerpoint.x,
            candidate.centerpoint.y,
        )
        return candidate

    def _evict_stale(self) -> None:
        stale = [oid for oid, misses in self._misses.items() if misses > self.max_misses]
        for object_id in stale:
            del self.objects[object_id]
            del self._misses[object_id]
            self.objects_evicted += 1
            logger.info("Evicted object %d after %d missed frames", object_id, self.max_misses + 1)
