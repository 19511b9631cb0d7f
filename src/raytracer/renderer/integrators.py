# renderer/integrators.py
"""
Radiance estimators for one camera ray.

binary       -- fixed color on any hit, a geometry debug view
blinn_phong  -- hands the hit to the material's own recursive shading
pathtrace    -- Monte-Carlo path tracing with direct lighting at every bounce
"""
import random
from typing import Sequence

from raytracer.core.interval import ray_interval
from raytracer.core.ray import Ray
from raytracer.core.vector import Color

HIT_COLOR = Color(1.0, 0.0, 0.0)


def binary(ray: Ray, world, background: Color) -> Color:
    if world.intersect(ray, ray_interval()) is not None:
        return HIT_COLOR
    return background


def blinn_phong(ray: Ray, world, lights: Sequence, background: Color, depth: int,
                rng: random.Random) -> Color:
    rec = world.intersect(ray, ray_interval())
    if rec is None:
        return background
    return rec.material.get_shading(world, lights, ray, background, rec, depth, rng)


def direct_lighting(world, rec, lights: Sequence, rng: random.Random) -> Color:
    total = Color(0, 0, 0)
    for light in lights:
        total = total + light.sample_light(rec, world, rng)
    return total


def pathtrace(ray: Ray, depth: int, world, lights: Sequence, background: Color,
              rng: random.Random) -> Color:
    """
    Iterative form of
        L(ray, d) = 0                                   if d <= 0
                  = background                          if ray misses
                  = a * direct + a * L(scattered, d-1)  if the material scatters
                  = direct                              otherwise
    A primary ray that misses sees the background even when depth is 0.
    """
    radiance = Color(0, 0, 0)
    throughput = Color(1, 1, 1)
    primary = True

    while primary or depth > 0:
        rec = world.intersect(ray, ray_interval())
        if rec is None:
            radiance = radiance + throughput * background
            break
        if depth <= 0:
            break
        primary = False

        direct = direct_lighting(world, rec, lights, rng)
        scatter = rec.material.evaluate(ray, rec, rng)
        if scatter is None:
            # Surface is non-reflective, only consider direct lighting
            radiance = radiance + throughput * direct
            break

        ray, attenuation = scatter
        throughput = throughput * attenuation
        radiance = radiance + throughput * direct
        if throughput.length_squared() == 0.0:
            # Absorbed; later bounces cannot contribute.
            break
        depth -= 1

    return radiance
