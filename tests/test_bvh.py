"""Tests for the flat object list and the bounding-volume hierarchy."""

import pytest

from raytracer.core.interval import ray_interval
from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3
from raytracer.geometry.bvh import BVHNode
from raytracer.geometry.cylinder import Cylinder
from raytracer.geometry.sphere import Sphere
from raytracer.geometry.triangle import Triangle
from raytracer.geometry.world import HittableList


@pytest.fixture
def mixed_world(gray, rng):
    world = HittableList()
    for _ in range(25):
        center = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
        world.add(Sphere(center, rng.uniform(0.2, 1.0), gray))
    for _ in range(10):
        base = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
        world.add(Triangle(base, base + Vector3(1, 0, 0), base + Vector3(0, 1, 0.5), gray))
    world.add(Cylinder(Vector3(0, 0, 0), Vector3(0, 1, 0), 0.5, 1.0, gray))
    world.add(Triangle(Vector3(-6, -6, 0), Vector3(6, -6, 0), Vector3(0, 6, 0), gray))
    return world


class TestHittableList:
    def test_nearest_hit_wins(self, gray):
        near = Sphere(Vector3(0, 0, -2), 0.5, gray)
        far = Sphere(Vector3(0, 0, -6), 0.5, gray)
        world = HittableList([far, near])
        rec = world.intersect(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ray_interval())
        assert rec.t == pytest.approx(1.5)

    def test_empty_world_misses(self):
        world = HittableList()
        assert world.intersect(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ray_interval()) is None
        with pytest.raises(ValueError):
            world.bounding_box()

    def test_add_invalidates_tree(self, gray):
        world = HittableList([Sphere(Vector3(0, 0, -2), 0.5, gray)])
        world.build_bvh()
        assert world.bvh_root is not None
        world.add(Sphere(Vector3(0, 0, 2), 0.5, gray))
        assert world.bvh_root is None


class TestBVH:
    def test_every_object_is_a_leaf(self, mixed_world):
        root = BVHNode(list(mixed_world.objects))
        leaves = root.leaves()
        assert len(leaves) == len(mixed_world)
        assert {id(o) for o in leaves} == {id(o) for o in mixed_world.objects}

    def test_node_boxes_contain_children(self, mixed_world):
        def check(node):
            if node.is_leaf:
                assert node.box.contains_box(node.object.bounding_box())
                return
            assert node.box.contains_box(node.left.box)
            assert node.box.contains_box(node.right.box)
            check(node.left)
            check(node.right)

        check(BVHNode(list(mixed_world.objects)))

    def test_matches_brute_force(self, mixed_world, rng):
        mixed_world.build_bvh()
        for _ in range(500):
            origin = Vector3(rng.uniform(-8, 8), rng.uniform(-8, 8), rng.uniform(-8, 8))
            direction = Vector3(rng.gauss(0, 1), rng.gauss(0, 1), rng.gauss(0, 1))
            ray = Ray(origin, direction)
            expected = mixed_world.intersect_brute_force(ray, ray_interval())
            actual = mixed_world.intersect(ray, ray_interval())
            if expected is None:
                assert actual is None
            else:
                assert actual is not None
                assert actual.t == pytest.approx(expected.t, rel=1e-9, abs=1e-9)

    def test_axis_aligned_rays_match_brute_force(self, mixed_world):
        mixed_world.build_bvh()
        for x in range(-6, 7, 2):
            for y in range(-6, 7, 2):
                ray = Ray(Vector3(x + 0.1, y + 0.2, 20), Vector3(0, 0, -1))
                expected = mixed_world.intersect_brute_force(ray, ray_interval())
                actual = mixed_world.intersect(ray, ray_interval())
                assert (actual is None) == (expected is None)
                if expected is not None:
                    assert actual.t == pytest.approx(expected.t)

    def test_box_hit_is_not_surface_hit(self, gray):
        big = Sphere(Vector3(0, 0, 0), 2.0, gray)
        # Inside the big sphere's box corner, outside its surface.
        small = Sphere(Vector3(1.7, 1.7, 0), 0.2, gray)
        world = HittableList([big, small])
        world.build_bvh()

        # Passes through the box corner region but misses both surfaces.
        ray = Ray(Vector3(1.95, 1.2, -10), Vector3(0, 0, 1))
        assert world.intersect(ray, ray_interval()) is None

        ray = Ray(Vector3(1.7, 1.7, -10), Vector3(0, 0, 1))
        rec = world.intersect(ray, ray_interval())
        assert rec is not None
        assert rec.t == pytest.approx(9.8)

    def test_single_object_tree(self, gray):
        root = BVHNode([Sphere(Vector3(0, 0, 0), 1.0, gray)])
        assert root.is_leaf
        assert root.depth() == 1
