from raytracer.geometry.bvh import BVHNode
from raytracer.geometry.cylinder import Cylinder
from raytracer.geometry.hittable import Hittable, HitRecord
from raytracer.geometry.sphere import Sphere
from raytracer.geometry.triangle import Triangle
from raytracer.geometry.world import HittableList

__all__ = ["BVHNode", "Cylinder", "Hittable", "HitRecord", "HittableList", "Sphere", "Triangle"]
