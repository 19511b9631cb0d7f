# lights/light.py
import random

from raytracer.core.interval import ray_interval
from raytracer.core.ray import Ray
from raytracer.core.vector import Color, Vector3


class Light:
    """
    Abstract light source. sample_light() returns the radiance a surface point
    receives from this light, already accounting for occlusion.
    """
    def __init__(self, intensity: Color):
        self.intensity = intensity

    @property
    def position(self) -> Vector3:
        raise NotImplementedError("position must be implemented by subclasses.")

    def sample_light(self, rec, world, rng: random.Random) -> Color:
        raise NotImplementedError("sample_light() must be implemented by subclasses.")


def is_shadowed(point: Vector3, direction: Vector3, world) -> bool:
    """
    Shadow test from a surface point. Any occluder along the ray counts, including
    ones beyond the light itself.
    """
    return world.intersect(Ray(point, direction), ray_interval()) is not None
