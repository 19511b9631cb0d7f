# geometry/cylinder.py
import math
from typing import Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import Hittable, HitRecord

_BASIS = (Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1))


def basis_axis_index(axis: Vector3) -> int:
    """
    Index of the coordinate axis that `axis` lies along. Only axis-aligned unit
    vectors (of either sign) are accepted.
    """
    components = [abs(axis.x), abs(axis.y), abs(axis.z)]
    for index, value in enumerate(components):
        others = [c for i, c in enumerate(components) if i != index]
        if value == 1.0 and all(c == 0.0 for c in others):
            return index
    raise ValueError(f"Cylinder axis must be a unit basis vector, got {axis!r}")


class Cylinder(Hittable):
    """
    Finite capped cylinder around an axis-aligned direction. `height` is the
    half-length: the caps sit at center ± height * axis.
    """
    def __init__(self, center: Vector3, axis: Vector3, radius: float, height: float, material):
        if radius <= 0 or height <= 0:
            raise ValueError(f"Cylinder radius and height must be positive, got {radius}, {height}")
        self.axis_index = basis_axis_index(axis)
        self.axis = _BASIS[self.axis_index]
        self.center = center
        self.radius = radius
        self.height = height
        self.material = material

        extent = [radius, radius, radius]
        extent[self.axis_index] = height
        extent = Vector3(*extent)
        self._box = AABB(center - extent, center + extent)

    def bounding_box(self) -> AABB:
        return self._box

    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        best_t = math.inf
        best_point = None
        best_normal = None

        # Body: infinite cylinder quadratic, then clip to the finite length.
        oc = ray.origin - self.center
        d_dot_axis = ray.direction.dot(self.axis)
        oc_dot_axis = oc.dot(self.axis)
        a = ray.direction.length_squared() - d_dot_axis * d_dot_axis
        b = 2.0 * (oc.dot(ray.direction) - oc_dot_axis * d_dot_axis)
        c = oc.length_squared() - oc_dot_axis * oc_dot_axis - self.radius * self.radius

        if a > 1e-12:
            discriminant = b * b - 4 * a * c
            if discriminant > 0:
                sqrt_disc = math.sqrt(discriminant)
                for root in ((-b - sqrt_disc) / (2.0 * a), (-b + sqrt_disc) / (2.0 * a)):
                    if not ray_t.surrounds(root) or root >= best_t:
                        continue
                    point = ray.at(root)
                    projection = (point - self.center).dot(self.axis)
                    if -self.height <= projection <= self.height:
                        best_t = root
                        best_point = point
                        best_normal = (point - self.center - self.axis * projection).normalize()
                        break

        # Caps: only when the ray is not parallel to the cap planes.
        if d_dot_axis != 0:
            for sign in (-1.0, 1.0):
                cap_center = self.center + self.axis * (sign * self.height)
                root = self.axis.dot(cap_center - ray.origin) / d_dot_axis
                if not ray_t.surrounds(root) or root >= best_t:
                    continue
                point = ray.at(root)
                if (point - cap_center).length_squared() <= self.radius * self.radius:
                    best_t = root
                    best_point = point
                    best_normal = self.axis * sign

        if best_point is None:
            return None

        rec = HitRecord()
        rec.t = best_t
        rec.p = best_point
        rec.set_face_normal(ray, best_normal)
        rec.material = self.material
        if self.material is not None and self.material.is_textured():
            rec.uv = self._uv(best_point)
        return rec

    def _uv(self, p: Vector3) -> UV:
        # Azimuth around the axis for u, position along the axis for v.
        local = p - self.center
        if self.axis_index == 0:
            phi = math.atan2(local.y, local.z)
        elif self.axis_index == 1:
            phi = math.atan2(local.x, local.z)
        else:
            phi = math.atan2(local.y, local.x)
        v = (local.dot(self.axis) / self.height + 1) / 2
        return UV((phi + math.pi) / (2 * math.pi), min(1.0, max(0.0, v)))
