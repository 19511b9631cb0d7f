# materials/blinn_phong.py
import math
import random
from typing import Optional, Sequence

from raytracer.core.interval import ray_interval
from raytracer.core.ray import Ray
from raytracer.core.utils import cannot_refract, reflect, refract, schlick
from raytracer.core.vector import Color
from raytracer.materials.material import Material
from raytracer.materials.textures import Texture

AMBIENT = Color(0.2, 0.2, 0.2)


class BlinnPhong(Material):
    """
    Direct-lighting material. Shades a hit with per-light diffuse + specular
    terms plus a constant ambient term, and recurses on its own for mirror
    reflection and refraction.
    """

    def __init__(self, diffuse_color: Color, specular_color: Color, specular_exponent: float,
                 ks: float, kd: float, reflectivity: float = 0.0, refractive_index: float = 1.0,
                 is_reflective: bool = False, is_refractive: bool = False,
                 transparency: float = 0.0, texture: Optional[Texture] = None):
        super().__init__(texture)
        self.diffuse_color = diffuse_color
        self.specular_color = specular_color
        self.specular_exponent = specular_exponent
        self.ks = ks
        self.kd = kd
        self.reflectivity = reflectivity
        self.refractive_index = refractive_index
        self._is_reflective = is_reflective
        self._is_refractive = is_refractive
        self.transparency = transparency

    def is_reflective(self) -> bool:
        return self._is_reflective

    def is_refractive(self) -> bool:
        return self._is_refractive

    def reflectance(self, rec) -> Color:
        texture_color = self.get_texture_color(rec.uv)
        return texture_color if texture_color is not None else self.diffuse_color

    def get_shading(self, world, lights: Sequence, ray_in: Ray, background: Color, rec,
                    depth: int, rng: random.Random) -> Color:
        view_direction = (-ray_in.direction).normalize()  # Direction from hit point to camera

        diffuse = Color(0, 0, 0)
        specular = Color(0, 0, 0)

        for light in lights:
            to_light = light.position - rec.p
            distance = to_light.length_squared()
            if distance == 0.0:
                continue
            light_direction = to_light.normalize()

            # Halfway vector between view direction and light direction
            half = view_direction + light_direction
            if half.near_zero():
                specular_angle = 0.0
            else:
                specular_angle = max(0.0, rec.normal.dot(half.normalize()))
            lambertian = max(0.0, rec.normal.dot(light_direction))
            intensity = light.sample_light(rec, world, rng)

            diffuse = diffuse + intensity * (lambertian * 2 / distance)
            highlight = math.pow(specular_angle, self.specular_exponent) if specular_angle > 0.0 else 0.0
            specular = specular + self.specular_color * intensity * (highlight * 2 / distance)

        base_color = self.reflectance(rec)
        shading = diffuse * base_color * self.kd + specular * self.ks + AMBIENT * base_color

        # The reflection and refraction branches replace the local term.
        if self.is_reflective() and depth > 0 and self.reflectivity > 0:
            reflected = Ray(rec.p, reflect(ray_in.direction.normalize(), rec.normal))
            shading = self._trace(world, lights, reflected, background, depth - 1, rng) * self.reflectivity

        if self.is_refractive() and depth > 0:
            eta_ratio = 1.0 / self.refractive_index if rec.front_face else self.refractive_index
            unit_direction = ray_in.direction.normalize()
            cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
            attenuation = math.exp(-self.transparency * rec.t)

            if cannot_refract(cos_theta, eta_ratio) or schlick(cos_theta, eta_ratio) > rng.random():
                bounced = Ray(rec.p, reflect(unit_direction, rec.normal))
            else:
                bounced = Ray(rec.p, refract(unit_direction, rec.normal, eta_ratio))
            shading = self._trace(world, lights, bounced, background, depth - 1, rng) * attenuation

        return shading

    @staticmethod
    def _trace(world, lights, ray: Ray, background: Color, depth: int, rng: random.Random) -> Color:
        hit = world.intersect(ray, ray_interval())
        if hit is None:
            return background
        return hit.material.get_shading(world, lights, ray, background, hit, depth, rng)

    def __repr__(self) -> str:
        return (f"BlinnPhong(diffuse={self.diffuse_color!r}, specular={self.specular_color!r}, "
                f"reflective={self._is_reflective}, refractive={self._is_refractive})")
