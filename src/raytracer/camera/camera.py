# camera/camera.py
import math
import random
from enum import Enum
from typing import Sequence

from raytracer.core.ray import Ray
from raytracer.core.utils import degrees_to_radians, sample_unit_disk
from raytracer.core.vector import Color, Point3, Vector3
from raytracer.renderer import integrators
from raytracer.renderer.sampling import precompute_halton_tables


class RenderMode(str, Enum):
    BINARY = "binary"
    PHONG = "phong"
    PATHTRACER = "pathtracer"


class Camera:
    """
    Pinhole / thin-lens camera. Holds the per-render settings, derives the
    viewport at unit focal distance and turns (column, row, sample) into rays.
    """
    def __init__(self, image_width: int = 100, image_height: int = 100,
                 lookfrom: Point3 = None, lookat: Point3 = None, vup: Vector3 = None,
                 vfov: float = 90.0, exposure: float = 0.1, lens_radius: float = 0.0,
                 samples_per_pixel: int = 20, nbounces: int = 1,
                 background: Color = None, render_mode: RenderMode = RenderMode.PHONG):
        self.render_mode = RenderMode(render_mode)
        self.background = background if background is not None else Color(0, 0, 0)
        self.nbounces = nbounces
        self.image_width = image_width
        self.image_height = image_height
        self.samples_per_pixel = samples_per_pixel
        self.vfov = vfov
        self.exposure = exposure
        self.lookfrom = lookfrom if lookfrom is not None else Point3(0, 0, -1)
        self.lookat = lookat if lookat is not None else Point3(0, 0, 0)
        self.vup = vup if vup is not None else Vector3(0, 1, 0)
        self.lens_radius = lens_radius
        self.update_camera()

    def update_camera(self):
        """Derives the camera basis, viewport and per-sample jitter tables."""
        if self.image_width < 1 or self.image_height < 1:
            raise ValueError(f"Image size must be positive, got {self.image_width}x{self.image_height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if not 0 < self.vfov < 180:
            raise ValueError(f"Vertical field of view must be in (0, 180) degrees, got {self.vfov}")

        self.origin = self.lookfrom

        # Viewport at unit focal distance
        focal_length = 1.0
        h = math.tan(degrees_to_radians(self.vfov) / 2)
        viewport_height = 2.0 * h
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal basis; w points backwards, away from the scene.
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        if self.w.near_zero() or self.u.near_zero():
            raise ValueError("lookfrom, lookat and vup must define a camera frame")
        self.v = self.w.cross(self.u)

        viewport_u = self.u * viewport_width      # Across the horizontal edge
        viewport_v = -self.v * viewport_height    # Down the vertical edge

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = self.origin - self.w * focal_length - viewport_u / 2 - viewport_v / 2
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        self.defocus_disk_u = self.u * self.lens_radius
        self.defocus_disk_v = self.v * self.lens_radius

        self.halton_x, self.halton_y = precompute_halton_tables(self.samples_per_pixel)

    def pixel_center(self, i: int, j: int) -> Point3:
        return self.pixel00_loc + self.pixel_delta_u * i + self.pixel_delta_v * j

    def get_ray(self, i: int, j: int, sample_index: int, rng: random.Random) -> Ray:
        """
        Ray for column i, row j. Only the path tracer perturbs rays: the origin is
        sampled on the lens disk and the target is jittered within the pixel by the
        (2, 3) Halton point of this sample.
        """
        pixel_center = self.pixel_center(i, j)

        if self.render_mode is not RenderMode.PATHTRACER:
            return Ray(self.origin, pixel_center - self.origin)

        lens_point = sample_unit_disk(rng)
        ray_origin = self.origin + self.defocus_disk_u * lens_point.x + self.defocus_disk_v * lens_point.y

        jitter_x = self.halton_x[sample_index] - 0.5
        jitter_y = self.halton_y[sample_index] - 0.5
        target = pixel_center + self.pixel_delta_u * jitter_x + self.pixel_delta_v * jitter_y

        return Ray(ray_origin, target - ray_origin)

    @property
    def effective_exposure(self) -> float:
        # The debug view is written without exposure scaling.
        return 1.0 if self.render_mode is RenderMode.BINARY else self.exposure

    def render_pixel(self, i: int, j: int, world, lights: Sequence, rng: random.Random) -> Color:
        """Mean radiance over all samples of one pixel."""
        if self.render_mode is RenderMode.BINARY:
            return integrators.binary(self.get_ray(i, j, 0, rng), world, self.background)

        total = Color(0, 0, 0)
        for sample in range(self.samples_per_pixel):
            ray = self.get_ray(i, j, sample, rng)
            if self.render_mode is RenderMode.PHONG:
                total = total + integrators.blinn_phong(
                    ray, world, lights, self.background, self.nbounces, rng)
            else:
                total = total + integrators.pathtrace(
                    ray, self.nbounces, world, lights, self.background, rng)
        return total / self.samples_per_pixel

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, mode={self.render_mode.value}, "
                f"spp={self.samples_per_pixel}, nbounces={self.nbounces})")
