# core/utils.py
import math
import random

from raytracer.core.vector import Vector3


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def random_in_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if 1e-160 < p.dot(p) < 1.0:
            return p


def random_unit_vector(rng: random.Random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()


def sample_unit_disk(rng: random.Random) -> Vector3:
    """
    Uniform point on the unit disk in the xy-plane (polar mapping, no rejection).
    """
    r = math.sqrt(rng.random())
    theta = 2.0 * math.pi * rng.random()
    return Vector3(r * math.cos(theta), r * math.sin(theta), 0.0)


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, eta_ratio: float) -> Vector3:
    """
    Snell's-law refraction of the unit direction uv through a surface with unit
    normal n. Callers must rule out total internal reflection first.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * eta_ratio
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def sin_from_cos(cos_theta: float) -> float:
    return math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))


def cannot_refract(cos_theta: float, eta_ratio: float) -> bool:
    """Total internal reflection test."""
    return eta_ratio * sin_from_cos(cos_theta) > 1.0


def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick reflectance from a ratio of refractive indices."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cos_theta, 5)


def fresnel_schlick(cos_theta: float, reflectance: float) -> float:
    """Schlick reflectance from a known normal-incidence reflectance."""
    return reflectance + (1.0 - reflectance) * math.pow(max(0.0, 1.0 - cos_theta), 5)
