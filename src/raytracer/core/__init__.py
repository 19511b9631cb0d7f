from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval, ray_interval
from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Color, Point3, Vector3

__all__ = [
    "AABB",
    "Color",
    "Interval",
    "Point3",
    "Ray",
    "UV",
    "Vector3",
    "ray_interval",
]
