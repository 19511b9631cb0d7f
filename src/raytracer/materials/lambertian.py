# materials/lambertian.py
import random
from typing import Optional, Tuple

from raytracer.core.ray import Ray
from raytracer.core.utils import random_unit_vector
from raytracer.core.vector import Color
from raytracer.materials.material import Material
from raytracer.materials.textures import Texture


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Color, texture: Optional[Texture] = None):
        super().__init__(texture)
        self.albedo = albedo

    def reflectance(self, rec) -> Color:
        # Fetch the base color (albedo) from the texture or solid color.
        texture_color = self.get_texture_color(rec.uv)
        return texture_color if texture_color is not None else self.albedo

    def evaluate(self, ray_in: Ray, rec, rng: random.Random) -> Tuple[Ray, Color]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation).
        """
        # Cosine-weighted direction: normal plus a random unit vector.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.reflectance(rec)

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r}, textured={self.is_textured()})"
