# geometry/triangle.py
import math
from typing import List, Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import Hittable, HitRecord

# Fixed texture coordinates of the (sorted) vertices. Triangles carry no
# per-vertex UVs of their own.
UV_BASIS = (UV(0.0, 0.0), UV(0.0, 1.0), UV(1.0, 1.0))

PARALLEL_EPSILON = 1e-12


def sort_by_azimuth(vertices: List[Vector3]) -> List[Vector3]:
    """
    Order vertices by polar angle (in the xy-plane) around their centroid so
    every triangle has a deterministic winding regardless of input order.
    """
    centroid = (vertices[0] + vertices[1] + vertices[2]) / 3
    return sorted(vertices, key=lambda v: math.atan2(v.y - centroid.y, v.x - centroid.x))


class Triangle(Hittable):
    """Represents a single triangle in 3D space."""
    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3, material):
        self.v0, self.v1, self.v2 = sort_by_azimuth([v0, v1, v2])
        self.material = material

        # Unnormalized face normal; its squared length is twice the area, squared.
        self.normal = (self.v1 - self.v0).cross(self.v2 - self.v0)
        self.area2 = self.normal.length_squared()
        self.unit_normal = self.normal.normalize()

        # Compute the bounding box for the triangle.
        min_x = min(self.v0.x, self.v1.x, self.v2.x)
        min_y = min(self.v0.y, self.v1.y, self.v2.y)
        min_z = min(self.v0.z, self.v1.z, self.v2.z)
        max_x = max(self.v0.x, self.v1.x, self.v2.x)
        max_y = max(self.v0.y, self.v1.y, self.v2.y)
        max_z = max(self.v0.z, self.v1.z, self.v2.z)
        self._box = AABB(Vector3(min_x, min_y, min_z), Vector3(max_x, max_y, max_z))

    def bounding_box(self) -> AABB:
        return self._box

    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.area2 == 0.0:
            return None

        # Ray parallel to the plane of the triangle
        n_dot_dir = self.normal.dot(ray.direction)
        if abs(n_dot_dir) < PARALLEL_EPSILON:
            return None

        d = -self.normal.dot(self.v0)
        t = -(self.normal.dot(ray.origin) + d) / n_dot_dir
        if not ray_t.surrounds(t):
            return None

        p = ray.at(t)

        # Same-side test against each edge.
        c0 = (self.v1 - self.v0).cross(p - self.v0)
        if self.normal.dot(c0) < 0:
            return None
        c1 = (self.v2 - self.v1).cross(p - self.v1)
        alpha = self.normal.dot(c1)
        if alpha < 0:
            return None
        c2 = (self.v0 - self.v2).cross(p - self.v2)
        beta = self.normal.dot(c2)
        if beta < 0:
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = p
        rec.set_face_normal(ray, -self.unit_normal)
        rec.material = self.material
        if self.material is not None and self.material.is_textured():
            alpha /= self.area2
            beta /= self.area2
            gamma = 1.0 - alpha - beta
            uv0, uv1, uv2 = UV_BASIS
            rec.uv = uv0 * alpha + uv1 * beta + uv2 * gamma
        return rec
