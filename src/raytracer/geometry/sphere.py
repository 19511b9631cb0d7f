# geometry/sphere.py
import math
from typing import Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material
        # The bounding box of a sphere is center ± radius
        offset = Vector3(radius, radius, radius)
        self._box = AABB(center - offset, center + offset)

    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        # A grazing ray (zero discriminant) does not count as a hit.
        if discriminant <= 0 or a == 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if not ray_t.surrounds(root):
            root = (-half_b + sqrt_disc) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        if self.material is not None and self.material.is_textured():
            rec.uv = sphere_uv(outward_normal)
        return rec

    def bounding_box(self) -> AABB:
        return self._box


def sphere_uv(p: Vector3) -> UV:
    """
    Latitude/longitude mapping of a point on the unit sphere.
    u in [0, 1] runs around the y axis from -x; v in [0, 1] runs from -y to +y.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return UV(phi / (2 * math.pi), theta / math.pi)
