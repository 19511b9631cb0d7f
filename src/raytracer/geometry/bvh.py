# geometry/bvh.py
import logging
from typing import List, Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

# Relative cost of one extra traversal step against one primitive test.
TRAVERSAL_COST = 0.125


class BVHNode(Hittable):
    """
    Bounding-volume hierarchy over objects[start:end]. Every node stores the
    union box of its subtree; leaves hold exactly one object.
    """
    def __init__(self, objects: List[Hittable], start: int = 0, end: Optional[int] = None,
                 max_bin_count: int = 16):
        if end is None:
            end = len(objects)
        object_span = end - start
        if object_span <= 0:
            raise ValueError("BVHNode needs at least one object")

        # Compute the bounding box of all objects for this node
        self.box = objects[start].bounding_box()
        for i in range(start + 1, end):
            self.box = AABB.surrounding_box(self.box, objects[i].bounding_box())

        if object_span == 1:
            self.left = self.right = None
            self.is_leaf = True
            self.object = objects[start]
            return

        split_axis, split = self._binned_sah_split(objects, start, end, max_bin_count)

        # Sort along the chosen axis by centroid; the split index is valid in that order.
        objects[start:end] = sorted(
            objects[start:end], key=lambda obj: obj.bounding_box().centroid(split_axis))

        self.left = BVHNode(objects, start, split, max_bin_count)
        self.right = BVHNode(objects, split, end, max_bin_count)
        self.is_leaf = False
        self.object = None

    def _binned_sah_split(self, objects, start: int, end: int, max_bin_count: int):
        object_span = end - start
        best_cost = float('inf')
        best_axis = self.box.longest_axis()
        best_split = start + object_span // 2  # Default split in the middle

        for axis in range(3):
            centroids = [objects[i].bounding_box().centroid(axis) for i in range(start, end)]
            min_val = min(centroids)
            max_val = max(centroids)
            # Skip if the extent is too small
            if max_val - min_val < 1e-9:
                continue

            bin_count = min(max_bin_count, object_span)
            bin_width = (max_val - min_val) / bin_count
            counts = [0] * bin_count
            boxes: List[Optional[AABB]] = [None] * bin_count

            for offset, centroid in enumerate(centroids):
                bin_idx = min(bin_count - 1, int((centroid - min_val) / bin_width))
                box = objects[start + offset].bounding_box()
                counts[bin_idx] += 1
                boxes[bin_idx] = box if boxes[bin_idx] is None else AABB.surrounding_box(boxes[bin_idx], box)

            # Right-to-left sweep of accumulated boxes
            right_areas = [0.0] * bin_count
            right_counts = [0] * bin_count
            running_box = None
            running_count = 0
            for i in range(bin_count - 1, -1, -1):
                if boxes[i] is not None:
                    running_box = boxes[i] if running_box is None else AABB.surrounding_box(running_box, boxes[i])
                running_count += counts[i]
                right_areas[i] = running_box.surface_area() if running_box is not None else 0.0
                right_counts[i] = running_count

            # Left-to-right sweep, evaluating the cost of splitting before bin i
            running_box = None
            running_count = 0
            parent_area = self.box.surface_area()
            for i in range(1, bin_count):
                if boxes[i - 1] is not None:
                    running_box = boxes[i - 1] if running_box is None else AABB.surrounding_box(running_box, boxes[i - 1])
                running_count += counts[i - 1]
                if running_count == 0 or right_counts[i] == 0:
                    continue
                cost = TRAVERSAL_COST + (
                    running_count * running_box.surface_area() + right_counts[i] * right_areas[i]
                ) / parent_area
                if cost < best_cost:
                    best_cost = cost
                    best_axis = axis
                    best_split = start + running_count

        return best_axis, best_split

    def bounding_box(self) -> AABB:
        return self.box

    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if not self.box.hit(ray, ray_t):
            return None

        if self.is_leaf:
            return self.object.intersect(ray, ray_t)

        hit_left = self.left.intersect(ray, ray_t)

        # Only a hit closer than the left one can matter on the right.
        right_t = ray_t.with_max(hit_left.t) if hit_left else ray_t
        hit_right = self.right.intersect(ray, right_t)

        # Return the closer hit
        return hit_right or hit_left

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def leaves(self) -> List[Hittable]:
        if self.is_leaf:
            return [self.object]
        return self.left.leaves() + self.right.leaves()
