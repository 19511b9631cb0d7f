# lights/area_light.py
import random

from raytracer.core.vector import Color, Vector3
from raytracer.lights.light import Light, is_shadowed


class AreaLight(Light):
    """
    Parallelogram emitter spanned by corner + u * edge1 + v * edge2, estimated
    with num_samples uniformly drawn points per shading call.
    """
    def __init__(self, corner: Vector3, edge1: Vector3, edge2: Vector3, intensity: Color,
                 num_samples: int):
        super().__init__(intensity)
        if num_samples < 1:
            raise ValueError(f"AreaLight needs at least one sample, got {num_samples}")
        self.corner = corner
        self.edge1 = edge1
        self.edge2 = edge2
        self.num_samples = num_samples

    @property
    def position(self) -> Vector3:
        return self.corner

    def sample_point(self, rng: random.Random) -> Vector3:
        u = rng.random()
        v = rng.random()
        return self.corner + self.edge1 * u + self.edge2 * v

    def sample_light(self, rec, world, rng: random.Random) -> Color:
        total = Color(0, 0, 0)

        for _ in range(self.num_samples):
            to_light = self.sample_point(rng) - rec.p
            distance_squared = to_light.length_squared()
            if distance_squared == 0.0:
                continue
            light_dir = to_light.normalize()

            if is_shadowed(rec.p, light_dir, world):
                continue

            cos_theta = max(0.0, rec.normal.dot(light_dir))
            # Softer than inverse-square: 1 / (1 + 0.1 d + 0.01 d^2) on squared distance d.
            attenuation = 1.0 / (1.0 + 0.1 * distance_squared + 0.01 * distance_squared * distance_squared)
            total = total + self.intensity * (attenuation * cos_theta * 2)

        return total / self.num_samples

    def __repr__(self) -> str:
        return f"AreaLight({self.corner!r}, {self.edge1!r}, {self.edge2!r}, {self.intensity!r}, {self.num_samples})"
