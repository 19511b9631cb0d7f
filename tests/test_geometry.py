"""Tests for sphere, cylinder and triangle intersection."""

import numpy as np
import pytest

from raytracer.core.interval import Interval, ray_interval
from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3
from raytracer.geometry.cylinder import Cylinder, basis_axis_index
from raytracer.geometry.sphere import Sphere, sphere_uv
from raytracer.geometry.triangle import Triangle
from raytracer.materials.lambertian import Lambertian
from raytracer.materials.textures import ImageTexture


def random_rays(rng, count, spread=4.0):
    rays = []
    for _ in range(count):
        origin = Vector3(rng.uniform(-spread, spread), rng.uniform(-spread, spread), rng.uniform(-spread, spread))
        direction = Vector3(rng.gauss(0, 1), rng.gauss(0, 1), rng.gauss(0, 1))
        rays.append(Ray(origin, direction))
    return rays


class TestSphere:
    def test_head_on_hit(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        rec = sphere.intersect(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), ray_interval())
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert rec.p.z == pytest.approx(-1.0)
        assert rec.front_face
        assert rec.normal.z == pytest.approx(-1.0)
        assert rec.material is gray

    def test_miss(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        assert sphere.intersect(Ray(Vector3(0, 2, -5), Vector3(0, 0, 1)), ray_interval()) is None

    def test_grazing_ray_is_a_miss(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        assert sphere.intersect(Ray(Vector3(0, 1, -5), Vector3(0, 0, 1)), ray_interval()) is None

    def test_hit_from_inside_uses_far_root(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        rec = sphere.intersect(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), ray_interval())
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert rec.normal.x == pytest.approx(-1.0)

    def test_interval_excludes_hit(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        ray = Ray(Vector3(0, 0, -5), Vector3(0, 0, 1))
        assert sphere.intersect(ray, Interval(0.001, 3.0)) is None

    def test_non_positive_radius_rejected(self, gray):
        with pytest.raises(ValueError):
            Sphere(Vector3(0, 0, 0), 0.0, gray)

    def test_uv_in_unit_square(self):
        for p in (Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, -1, 0), Vector3(0, 0, 1)):
            uv = sphere_uv(p)
            assert 0.0 <= uv.u <= 1.0
            assert 0.0 <= uv.v <= 1.0
        assert sphere_uv(Vector3(0, -1, 0)).v == pytest.approx(0.0)
        assert sphere_uv(Vector3(0, 1, 0)).v == pytest.approx(1.0)

    def test_hits_stay_in_interval_with_unit_normals(self, gray, rng):
        sphere = Sphere(Vector3(0.2, -0.1, 0.3), 1.3, gray)
        window = Interval(0.001, 6.0)
        for ray in random_rays(rng, 300):
            rec = sphere.intersect(ray, window)
            if rec is not None:
                assert window.surrounds(rec.t)
                assert rec.normal.length() == pytest.approx(1.0)


class TestCylinder:
    def test_only_basis_axes(self):
        assert basis_axis_index(Vector3(0, 1, 0)) == 1
        assert basis_axis_index(Vector3(0, 0, -1)) == 2
        with pytest.raises(ValueError):
            basis_axis_index(Vector3(1, 1, 0))

    def test_body_hit(self, gray):
        cylinder = Cylinder(Vector3(0, 0, 0), Vector3(0, 1, 0), 1.0, 2.0, gray)
        rec = cylinder.intersect(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), ray_interval())
        assert rec.t == pytest.approx(4.0)
        assert rec.normal.z == pytest.approx(-1.0)

    def test_cap_hit(self, gray):
        cylinder = Cylinder(Vector3(0, 0, 0), Vector3(0, 1, 0), 1.0, 2.0, gray)
        rec = cylinder.intersect(Ray(Vector3(0.3, 10, 0), Vector3(0, -1, 0)), ray_interval())
        assert rec.t == pytest.approx(8.0)
        assert rec.normal.y == pytest.approx(1.0)
        assert rec.front_face

    def test_beyond_length_misses(self, gray):
        cylinder = Cylinder(Vector3(0, 0, 0), Vector3(0, 1, 0), 1.0, 2.0, gray)
        assert cylinder.intersect(Ray(Vector3(0, 3, -5), Vector3(0, 0, 1)), ray_interval()) is None

    def test_bounding_box_follows_axis(self, gray):
        cylinder = Cylinder(Vector3(0, 0, 0), Vector3(1, 0, 0), 0.5, 3.0, gray)
        box = cylinder.bounding_box()
        assert box.maximum.x == pytest.approx(3.0)
        assert box.maximum.y == pytest.approx(0.5)

    def test_hits_stay_in_interval_with_unit_normals(self, gray, rng):
        cylinder = Cylinder(Vector3(0, 0, 0), Vector3(0, 0, 1), 1.0, 1.5, gray)
        window = Interval(0.001, 8.0)
        hits = 0
        for ray in random_rays(rng, 400):
            rec = cylinder.intersect(ray, window)
            if rec is not None:
                hits += 1
                assert window.surrounds(rec.t)
                assert rec.normal.length() == pytest.approx(1.0)
                assert rec.normal.dot(ray.direction) <= 0
        assert hits > 0


class TestTriangle:
    def make(self, material):
        return Triangle(Vector3(-1, -1, 0), Vector3(1, -1, 0), Vector3(0, 1, 0), material)

    def test_hit_inside(self, gray):
        rec = self.make(gray).intersect(Ray(Vector3(0, 0, -3), Vector3(0, 0, 1)), ray_interval())
        assert rec.t == pytest.approx(3.0)
        assert rec.normal.length() == pytest.approx(1.0)
        assert rec.normal.dot(Vector3(0, 0, 1)) < 0

    def test_hit_from_either_side(self, gray):
        rec = self.make(gray).intersect(Ray(Vector3(0, 0, 3), Vector3(0, 0, -1)), ray_interval())
        assert rec is not None
        assert rec.normal.z == pytest.approx(1.0)

    def test_miss_outside(self, gray):
        assert self.make(gray).intersect(Ray(Vector3(2, 2, -3), Vector3(0, 0, 1)), ray_interval()) is None

    def test_parallel_ray_misses(self, gray):
        assert self.make(gray).intersect(Ray(Vector3(0, 0, -1), Vector3(1, 0, 0)), ray_interval()) is None

    def test_vertex_order_does_not_matter(self, gray):
        a, b, c = Vector3(-1, -1, 0), Vector3(1, -1, 0), Vector3(0, 1, 0)
        ray = Ray(Vector3(0.1, 0, -3), Vector3(0, 0, 1))
        t1 = Triangle(a, b, c, gray).intersect(ray, ray_interval()).t
        t2 = Triangle(c, a, b, gray).intersect(ray, ray_interval()).t
        t3 = Triangle(b, a, c, gray).intersect(ray, ray_interval()).t
        assert t1 == pytest.approx(t2) == pytest.approx(t3)

    def test_textured_hit_gets_uv(self):
        texture = ImageTexture(np.zeros((2, 2, 3), dtype=np.uint8))
        tri = self.make(Lambertian(Vector3(1, 1, 1), texture))
        rec = tri.intersect(Ray(Vector3(0, -0.5, -3), Vector3(0, 0, 1)), ray_interval())
        assert 0.0 <= rec.uv.u <= 1.0
        assert 0.0 <= rec.uv.v <= 1.0
