# materials/schlick.py
import math
import random
from typing import Tuple

from raytracer.core.ray import Ray
from raytracer.core.utils import cannot_refract, fresnel_schlick, reflect, refract
from raytracer.core.vector import Color
from raytracer.materials.material import Material

# Index of refraction of the transmissive side (glass).
GLASS_IOR = 1.5
# Beer's-law absorption coefficient, applied to the distance travelled by the incoming ray.
ABSORPTION = 0.2

WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def _fresnel_weight(ray_in: Ray, rec, reflectance: float) -> float:
    cos_theta = (-ray_in.direction).normalize().dot(rec.normal)
    return fresnel_schlick(cos_theta, reflectance)


class SchlickBRDF(Material):
    """
    Mirror-like surface whose reflection probability follows Schlick's
    approximation. Rays that are not reflected are absorbed: the bounce is
    returned with zero attenuation, so nothing reaches the eye through it.
    """
    def __init__(self, reflectance: float):
        super().__init__()
        self.fresnel_reflectance = reflectance

    def is_reflective(self) -> bool:
        return True

    def reflectance(self, rec) -> Color:
        return WHITE

    def evaluate(self, ray_in: Ray, rec, rng: random.Random) -> Tuple[Ray, Color]:
        reflected = Ray(rec.p, reflect(ray_in.direction, rec.normal))
        f = _fresnel_weight(ray_in, rec, self.fresnel_reflectance)
        if rng.random() < f:
            return reflected, WHITE
        # Not reflected: the path carries no more energy.
        return reflected, BLACK

    def __repr__(self) -> str:
        return f"SchlickBRDF({self.fresnel_reflectance})"


class SchlickRefractionsBRDF(SchlickBRDF):
    """
    Dielectric variant: the Fresnel weight chooses stochastically between a
    mirror reflection and a Snell refraction attenuated by Beer's law.
    """
    def is_refractive(self) -> bool:
        return True

    def evaluate(self, ray_in: Ray, rec, rng: random.Random) -> Tuple[Ray, Color]:
        reflected = reflect(ray_in.direction, rec.normal)
        f = _fresnel_weight(ray_in, rec, self.fresnel_reflectance)
        if rng.random() < f:
            return Ray(rec.p, reflected), WHITE

        eta_ratio = 1.0 / GLASS_IOR if rec.front_face else GLASS_IOR
        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        beers_law = math.exp(-ABSORPTION * rec.t)

        if cannot_refract(cos_theta, eta_ratio):
            # Total internal reflection
            return Ray(rec.p, reflected), WHITE * beers_law

        refracted = refract(unit_direction, rec.normal, eta_ratio)
        return Ray(rec.p, refracted), WHITE * beers_law

    def __repr__(self) -> str:
        return f"SchlickRefractionsBRDF({self.fresnel_reflectance})"
