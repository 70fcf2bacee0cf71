"""Unit tests for the bounding volume hierarchy.

Tests cover:
- Build failures (empty input, unbounded objects)
- Tree shape: leaves, split axis, cached boxes
- Traversal equivalence with a brute-force scan over random scenes
- Closest-hit ordering across left and right subtrees
"""

import logging
import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.bvh import BVHBuildError, BVHNode
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.triangle import Triangle
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


class InfinitePlane(Hittable):
    """An unbounded object; it has no bounding box."""

    def hit(self, ray, t_min, t_max):
        return None

    def bounding_box(self, time0, time1):
        return None

    def __repr__(self):
        return "InfinitePlane(y=0)"


def random_point(rng, scale=10.0):
    return Vector3(rng.uniform(-scale, scale), rng.uniform(-scale, scale), rng.uniform(-scale, scale))


def random_scene(rng, count):
    objects = []
    for i in range(count):
        material = Lambertian(Color(rng.random(), rng.random(), rng.random()))
        kind = i % 3
        if kind == 0:
            objects.append(Sphere(random_point(rng), rng.uniform(0.2, 2.0), material))
        elif kind == 1:
            center = random_point(rng)
            objects.append(MovingSphere(center, center + random_point(rng, 1.0), 0.0, 1.0,
                                        rng.uniform(0.2, 1.0), material))
        else:
            a = random_point(rng)
            objects.append(Triangle(a, a + random_point(rng, 2.0), a + random_point(rng, 2.0), material))
    return objects


def random_ray(rng):
    origin = random_point(rng, 15.0)
    # Aim roughly at the scene so a good share of rays hit something
    target = random_point(rng, 8.0)
    return Ray(origin, target - origin, rng.random())


class TestBuild:
    def test_empty_list_fails(self):
        with pytest.raises(BVHBuildError, match="empty"):
            BVHNode([], 0.0, 1.0)

    def test_unbounded_object_fails_with_its_name(self, grey):
        objects = [Sphere(Vector3(0, 0, 0), 1.0, grey), InfinitePlane()]
        with pytest.raises(BVHBuildError, match=r"InfinitePlane\(y=0\)"):
            BVHNode(objects, 0.0, 1.0)

    def test_build_error_is_value_error(self):
        assert issubclass(BVHBuildError, ValueError)

    def test_single_object_is_leaf(self, grey):
        sphere = Sphere(Vector3(1, 2, 3), 1.0, grey)
        bvh = BVHNode([sphere], 0.0, 1.0)
        assert bvh.is_leaf
        assert bvh.object is sphere
        assert bvh.box.minimum.to_tuple() == pytest.approx((0, 1, 2))

    def test_every_object_in_exactly_one_leaf(self, rng):
        objects = random_scene(rng, 37)
        bvh = BVHNode(objects, 0.0, 1.0)
        leaves = bvh.leaves()
        assert len(leaves) == len(objects)
        assert {id(o) for o in leaves} == {id(o) for o in objects}
        assert bvh.node_count() == 2 * len(objects) - 1

    def test_balanced_depth(self, rng):
        bvh = BVHNode(random_scene(rng, 64), 0.0, 1.0)
        assert bvh.depth() == 7

    def test_input_list_not_reordered(self, rng):
        objects = random_scene(rng, 20)
        before = list(objects)
        BVHNode(objects, 0.0, 1.0)
        assert all(a is b for a, b in zip(objects, before))

    def test_node_boxes_bound_children(self, rng):
        bvh = BVHNode(random_scene(rng, 30), 0.0, 1.0)
        stack = [bvh]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                continue
            assert node.box.contains(node.left.box)
            assert node.box.contains(node.right.box)
            stack.extend((node.left, node.right))

    def test_split_along_widest_axis(self, grey):
        # Spread along z only: the first split must separate low z from high z
        spheres = [Sphere(Vector3(0, 0, 10.0 * k), 0.5, grey) for k in (3, 0, 2, 1)]
        bvh = BVHNode(spheres, 0.0, 1.0)
        left_z = sorted(s.center.z for s in bvh.left.leaves())
        right_z = sorted(s.center.z for s in bvh.right.leaves())
        assert left_z == [0.0, 10.0]
        assert right_z == [20.0, 30.0]

    def test_axis_tie_prefers_x(self, grey):
        a = Sphere(Vector3(0, 10, 0), 0.5, grey)
        b = Sphere(Vector3(10, 0, 0), 0.5, grey)
        bvh = BVHNode([b, a], 0.0, 1.0)
        # x and y span the same range; sorting by x puts a first
        assert bvh.left.object is a
        assert bvh.right.object is b

    def test_summary_logged_only_at_debug(self, rng, caplog, monkeypatch):
        objects = random_scene(rng, 8)
        with caplog.at_level(logging.DEBUG, logger="pathtracer.geometry.bvh"):
            BVHNode(objects, 0.0, 1.0)
        assert "Built BVH over 8 objects (15 nodes" in caplog.text

        def walk(self):
            raise AssertionError("tree walked with DEBUG disabled")

        monkeypatch.setattr(BVHNode, "node_count", walk)
        monkeypatch.setattr(BVHNode, "depth", walk)
        with caplog.at_level(logging.INFO, logger="pathtracer.geometry.bvh"):
            BVHNode(objects, 0.0, 1.0)

    def test_bounding_box_is_cached(self, rng):
        bvh = BVHNode(random_scene(rng, 10), 0.0, 1.0)
        assert bvh.bounding_box(0.0, 1.0) is bvh.box
        assert bvh.bounding_box(5.0, 9.0) is bvh.box


class TestTraversal:
    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_matches_brute_force(self, seed):
        rng = random.Random(seed)
        objects = random_scene(rng, 60)
        brute_force = HittableList(objects)
        bvh = brute_force.build_bvh(0.0, 1.0)

        hits = 0
        for _ in range(300):
            ray = random_ray(rng)
            expected = brute_force.hit(ray, 0.001, math.inf)
            actual = bvh.hit(ray, 0.001, math.inf)
            if expected is None:
                assert actual is None
                continue
            hits += 1
            assert actual is not None
            assert actual.t == pytest.approx(expected.t)
            assert actual.p.to_tuple() == pytest.approx(expected.p.to_tuple())
            assert actual.normal.to_tuple() == pytest.approx(expected.normal.to_tuple())
            assert actual.front_face == expected.front_face
            assert actual.material is expected.material
        assert hits > 0

    def test_closer_left_hit_not_shadowed_by_right(self, grey):
        near = Lambertian(Color(1, 0, 0))
        far = Lambertian(Color(0, 0, 1))
        # Sorted along x: near sphere ends up on the left, far on the right
        spheres = [Sphere(Vector3(5, 0, 0), 1.0, far), Sphere(Vector3(0, 0, 0), 1.0, near)]
        bvh = BVHNode(spheres, 0.0, 1.0)
        rec = bvh.hit(Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf)
        assert rec.material is near
        assert rec.t == pytest.approx(4.0)

    def test_closer_right_hit_wins(self):
        near = Lambertian(Color(1, 0, 0))
        far = Lambertian(Color(0, 0, 1))
        spheres = [Sphere(Vector3(5, 0, 0), 1.0, near), Sphere(Vector3(0, 0, 0), 1.0, far)]
        bvh = BVHNode(spheres, 0.0, 1.0)
        rec = bvh.hit(Ray(Vector3(10, 0, 0), Vector3(-1, 0, 0)), 0.001, math.inf)
        assert rec.material is near
        assert rec.t == pytest.approx(4.0)

    def test_miss_outside_root_box(self, rng):
        bvh = BVHNode(random_scene(rng, 20), 0.0, 1.0)
        ray = Ray(Vector3(100, 100, 100), Vector3(1, 1, 1))
        assert bvh.hit(ray, 0.001, math.inf) is None

    def test_flat_triangle_reachable_through_tree(self, grey):
        tri = Triangle(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0), grey)
        other = Sphere(Vector3(5, 5, 5), 0.5, grey)
        bvh = BVHNode([tri, other], 0.0, 1.0)
        rec = bvh.hit(Ray(Vector3(0.25, 0.25, 3), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(3.0)

    def test_nested_bvh(self, rng):
        objects = random_scene(rng, 12)
        inner = BVHNode(objects[:6], 0.0, 1.0)
        outer = BVHNode([inner] + objects[6:], 0.0, 1.0)
        brute_force = HittableList(objects)
        for _ in range(100):
            ray = random_ray(rng)
            expected = brute_force.hit(ray, 0.001, math.inf)
            actual = outer.hit(ray, 0.001, math.inf)
            assert (expected is None) == (actual is None)
            if expected is not None:
                assert actual.t == pytest.approx(expected.t)
