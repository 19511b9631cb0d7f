# materials/material.py
import random
from typing import Optional, Sequence, Tuple

from raytracer.core.ray import Ray
from raytracer.core.uv import UV
from raytracer.core.vector import Color
from raytracer.materials.textures import Texture


class Material:
    """
    Abstract material class. BRDF materials implement evaluate(); direct-shading
    materials implement get_shading(). Either may carry a texture that replaces
    its solid base color.
    """
    def __init__(self, texture: Optional[Texture] = None):
        self.texture = texture

    def is_textured(self) -> bool:
        return self.texture is not None

    def is_reflective(self) -> bool:
        return False

    def is_refractive(self) -> bool:
        return False

    def get_texture_color(self, uv: UV) -> Optional[Color]:
        """
        Get the color from the texture at the given UV coordinates.
        If no texture is set, returns None.
        """
        if self.texture is None:
            return None
        return self.texture.sample(uv)

    def reflectance(self, rec) -> Color:
        return Color(0, 0, 0)

    def evaluate(self, ray_in: Ray, rec, rng: random.Random) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the surface absorbs.
        """
        return None

    def get_shading(self, world, lights: Sequence, ray_in: Ray, background: Color, rec,
                    depth: int, rng: random.Random) -> Color:
        """Full local + recursive shading of a hit. Non-shading materials are black."""
        return Color(0, 0, 0)
