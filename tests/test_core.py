"""Tests for vectors, intervals and bounding boxes."""

import math

import pytest

from raytracer.core.aabb import AABB
from raytracer.core.interval import Interval, ray_interval
from raytracer.core.ray import Ray
from raytracer.core.utils import cannot_refract, reflect, refract, sample_unit_disk, schlick
from raytracer.core.vector import Vector3


class TestVector3:
    def test_arithmetic(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert -a == Vector3(-1, -2, -3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert a * b == Vector3(4, 10, 18)
        assert b / 2 == Vector3(2, 2.5, 3)

    def test_dot_and_cross(self):
        x = Vector3(1, 0, 0)
        y = Vector3(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y) == Vector3(0, 0, 1)

    def test_normalize(self):
        v = Vector3(3, 4, 0).normalize()
        assert v.length() == pytest.approx(1.0)
        assert Vector3().normalize() == Vector3(0, 0, 0)

    def test_indexing(self):
        v = Vector3(7, 8, 9)
        assert (v[0], v[1], v[2]) == (7, 8, 9)
        with pytest.raises(IndexError):
            v[3]


class TestInterval:
    def test_surrounds_is_strict(self):
        i = Interval(0.0, 1.0)
        assert not i.surrounds(0.0)
        assert not i.surrounds(1.0)
        assert i.surrounds(0.5)

    def test_ray_interval_starts_after_surface(self):
        i = ray_interval()
        assert i.min == pytest.approx(0.001)
        assert i.max == math.inf

    def test_clamp(self):
        i = Interval(0.0, 1.0)
        assert i.clamp(-3) == 0.0
        assert i.clamp(3) == 1.0
        assert i.clamp(0.25) == 0.25


class TestAABB:
    def test_hit_and_miss(self):
        box = AABB(Vector3(-1, -1, -1), Vector3(1, 1, 1))
        assert box.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), ray_interval())
        assert not box.hit(Ray(Vector3(0, 3, -5), Vector3(0, 0, 1)), ray_interval())

    def test_interval_limits_hit(self):
        box = AABB(Vector3(-1, -1, -1), Vector3(1, 1, 1))
        ray = Ray(Vector3(0, 0, -5), Vector3(0, 0, 1))
        assert not box.hit(ray, Interval(0.001, 2.0))

    def test_flat_box_is_padded(self):
        box = AABB(Vector3(-1, 0, -1), Vector3(1, 0, 1))
        assert box.maximum.y > box.minimum.y
        assert box.hit(Ray(Vector3(0, 5, 0), Vector3(0, -1, 0)), ray_interval())

    def test_corners_are_normalized(self):
        box = AABB(Vector3(1, 1, 1), Vector3(-1, -1, -1))
        assert box.minimum == Vector3(-1, -1, -1)

    def test_surrounding_box(self):
        a = AABB(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = AABB(Vector3(2, -1, 0), Vector3(3, 1, 4))
        union = AABB.surrounding_box(a, b)
        assert union.contains_box(a) and union.contains_box(b)
        assert union.longest_axis() == 2


class TestOptics:
    def test_reflect(self):
        assert reflect(Vector3(1, -1, 0), Vector3(0, 1, 0)) == Vector3(1, 1, 0)

    def test_refract_straight_through(self):
        out = refract(Vector3(0, 0, -1), Vector3(0, 0, 1), 1 / 1.5)
        assert out.x == pytest.approx(0.0)
        assert out.z == pytest.approx(-1.0)

    def test_total_internal_reflection(self):
        grazing = math.cos(math.radians(80))
        assert cannot_refract(grazing, 1.5)
        assert not cannot_refract(1.0, 1.5)

    def test_schlick_at_normal_incidence(self):
        assert schlick(1.0, 1.5) == pytest.approx(0.04)

    def test_unit_disk(self, rng):
        for _ in range(100):
            p = sample_unit_disk(rng)
            assert p.z == 0.0
            assert p.x * p.x + p.y * p.y <= 1.0
