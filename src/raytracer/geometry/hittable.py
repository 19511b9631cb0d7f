# geometry/hittable.py
from typing import Optional

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval
from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Vector3


class HitRecord:
    """
    Records details of a ray-object intersection. A fresh record is returned by
    every successful intersect() call and never reused.
    """
    __slots__ = ['p', 'normal', 't', 'front_face', 'material', 'uv']

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material=None,
                 uv: UV = None):
        self.p = p              # Intersection point
        self.normal = normal    # Unit surface normal, facing the incoming ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material
        self.uv = uv if uv is not None else UV(0.0, 0.0)

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal must have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, front_face={self.front_face})"


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def intersect(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """
        Return the nearest hit with ray_t.min < t < ray_t.max, or None.
        """
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
