# geometry/world.py
import logging
from typing import Iterable, List, Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.geometry.bvh import BVHNode
from raytracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class HittableList(Hittable):
    """
    A list of Hittable objects. Once build_bvh() has been called intersection
    goes through the tree; otherwise every object is tested in turn.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = []
        self.bvh_root: Optional[BVHNode] = None
        self._box: Optional[AABB] = None
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable):
        self.objects.append(obj)
        box = obj.bounding_box()
        self._box = box if self._box is None else AABB.surrounding_box(self._box, box)
        # The tree no longer covers every object.
        self.bvh_root = None

    def __len__(self) -> int:
        return len(self.objects)

    def build_bvh(self) -> Optional[BVHNode]:
        if len(self.objects) == 0:
            self.bvh_root = None
            return None
        # The builder reorders its input, so give it a copy.
        self.bvh_root = BVHNode(list(self.objects))
        logger.info("Built BVH over %d objects (depth %d)", len(self.objects), self.bvh_root.depth())
        return self.bvh_root

    def bounding_box(self) -> AABB:
        if self._box is None:
            raise ValueError("An empty HittableList has no bounding box")
        return self._box

    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.bvh_root is not None:
            return self.bvh_root.intersect(ray, ray_t)
        return self.intersect_brute_force(ray, ray_t)

    def intersect_brute_force(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = ray_t.max
        for obj in self.objects:
            rec = obj.intersect(ray, Interval(ray_t.min, closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
