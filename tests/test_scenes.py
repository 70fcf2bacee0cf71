"""Tests for the built-in scenes."""

import random

import pytest

from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.triangle import Triangle
from pathtracer.scenes import SCENES, build_scene, random_spheres


@pytest.mark.parametrize("name", sorted(SCENES))
def test_scenes_build_into_bvh(name):
    world = build_scene(name, random.Random(0))
    assert len(world) > 0
    bvh = world.build_bvh(0.0, 1.0)
    assert isinstance(bvh, BVHNode)
    assert len(bvh.leaves()) == len(world)


def test_demo_scene_is_seeded():
    a = random_spheres(random.Random(5))
    b = random_spheres(random.Random(5))
    assert [repr(o) for o in a] == [repr(o) for o in b]


def test_demo_scene_contents():
    world = random_spheres(random.Random(1))
    objects = list(world)
    # Ground, three feature spheres and up to 23x23 small ones
    assert 4 < len(objects) <= 4 + 23 * 23
    assert objects[0].radius == 1000
    assert any(isinstance(o, MovingSphere) for o in objects)


def test_demo_scene_without_motion_blur():
    world = random_spheres(random.Random(1), motion_blur=False)
    assert not any(isinstance(o, MovingSphere) for o in world)
    assert all(isinstance(o, Sphere) for o in world)


def test_mesh_scene(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    world = build_scene("demo", obj_path=str(path))
    triangles = [o for o in world if isinstance(o, Triangle)]
    assert len(triangles) == 1
    assert len(world) == 2


def test_unknown_scene():
    with pytest.raises(ValueError, match="Unknown scene"):
        build_scene("nowhere")
