# core/aabb.py
from raytracer.core.interval import Interval
from raytracer.core.vector import Vector3

# Minimum thickness along each axis, so that flat primitives (an axis-aligned
# triangle) still produce a box the slab test can hit.
MIN_EXTENT = 1e-4


class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = Vector3(
            min(minimum.x, maximum.x), min(minimum.y, maximum.y), min(minimum.z, maximum.z)
        )
        self.maximum = Vector3(
            max(minimum.x, maximum.x), max(minimum.y, maximum.y), max(minimum.z, maximum.z)
        )
        self._pad_to_minimums()

    def _pad_to_minimums(self):
        lo = [self.minimum.x, self.minimum.y, self.minimum.z]
        hi = [self.maximum.x, self.maximum.y, self.maximum.z]
        for axis in range(3):
            if hi[axis] - lo[axis] < MIN_EXTENT:
                lo[axis] -= MIN_EXTENT / 2
                hi[axis] += MIN_EXTENT / 2
        self.minimum = Vector3(*lo)
        self.maximum = Vector3(*hi)

    def hit(self, ray, ray_t: Interval) -> bool:
        # Slab method: for each axis, narrow the parametric window.
        t_min = ray_t.min
        t_max = ray_t.max
        for axis in range(3):
            origin = ray.origin[axis]
            direction = ray.direction[axis]
            lo = self.minimum[axis]
            hi = self.maximum[axis]
            if direction == 0.0:
                # Parallel to the slab: inside it or never.
                if origin < lo or origin > hi:
                    return False
                continue
            invD = 1.0 / direction
            t0 = (lo - origin) * invD
            t1 = (hi - origin) * invD
            if invD < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    def longest_axis(self) -> int:
        d = self.maximum - self.minimum
        if d.x > d.y:
            return 0 if d.x > d.z else 2
        return 1 if d.y > d.z else 2

    def centroid(self, axis: int) -> float:
        return (self.minimum[axis] + self.maximum[axis]) * 0.5

    def contains_box(self, other: "AABB") -> bool:
        return all(
            self.minimum[a] <= other.minimum[a] and other.maximum[a] <= self.maximum[a]
            for a in range(3)
        )

    def surface_area(self) -> float:
        d = self.maximum - self.minimum
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
