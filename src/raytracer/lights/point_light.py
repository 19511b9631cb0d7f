# lights/point_light.py
import random

from raytracer.core.vector import Color, Vector3
from raytracer.lights.light import Light, is_shadowed


class PointLight(Light):
    def __init__(self, position: Vector3, intensity: Color):
        super().__init__(intensity)
        self._position = position

    @property
    def position(self) -> Vector3:
        return self._position

    def sample_light(self, rec, world, rng: random.Random = None) -> Color:
        to_light = self._position - rec.p
        distance_squared = to_light.length_squared()
        if distance_squared == 0.0:
            return Color(0, 0, 0)
        light_dir = to_light.normalize()

        if is_shadowed(rec.p, light_dir, world):
            return Color(0, 0, 0)

        n_dot_l = max(0.0, rec.normal.dot(light_dir))
        return self.intensity * (n_dot_l * 2 / distance_squared)

    def __repr__(self) -> str:
        return f"PointLight({self._position!r}, {self.intensity!r})"
