# pathtracer/scenes.py
"""Built-in scenes. Each builder returns a HittableList ready for build_bvh()."""
import random
from typing import Callable, Dict, Optional

from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.mesh import load_obj
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import ColorPresets, DielectricPresets, MetalPresets, TexturePresets


def _random_color(rng, lo: float = 0.0, hi: float = 1.0) -> Color:
    return Color(rng.uniform(lo, hi), rng.uniform(lo, hi), rng.uniform(lo, hi))


def random_spheres(rng=None, motion_blur: bool = True) -> HittableList:
    """
    Ground plane sphere, a 23x23 grid of small random spheres and three large
    feature spheres. With motion_blur the diffuse spheres bounce upward over
    the shutter interval [0, 1].
    """
    rng = rng or random.Random()
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(ColorPresets.GRAY)))

    glass = DielectricPresets.glass()
    for a in range(-11, 12):
        for b in range(-11, 12):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = _random_color(rng) * _random_color(rng)
                material = Lambertian(albedo)
                if motion_blur:
                    center1 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                    world.add(MovingSphere(center, center1, 0.0, 1.0, 0.2, material))
                else:
                    world.add(Sphere(center, 0.2, material))
            elif choose_mat < 0.95:
                material = Metal(_random_color(rng, 0.5, 1.0), rng.uniform(0, 0.5))
                world.add(Sphere(center, 0.2, material))
            else:
                world.add(Sphere(center, 0.2, glass))

    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(ColorPresets.BROWN)))
    world.add(Sphere(Point3(4, 1, 0), 1.0, MetalPresets.mirror()))
    return world


def simple(rng=None) -> HittableList:
    """A single diffuse unit sphere at the origin."""
    return HittableList([Sphere(Point3(0, 0, 0), 1.0, Lambertian(ColorPresets.GRAY))])


def checker_spheres(rng=None) -> HittableList:
    """Two large spheres sharing one checker texture."""
    checker = Lambertian(TexturePresets.checkerboard())
    return HittableList([
        Sphere(Point3(0, -10, 0), 10, checker),
        Sphere(Point3(0, 10, 0), 10, checker),
    ])


def mesh_scene(obj_path: str, rng=None) -> HittableList:
    """An OBJ mesh resting on a ground sphere."""
    world = HittableList(load_obj(obj_path))
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(ColorPresets.GRAY)))
    return world


SCENES: Dict[str, Callable[..., HittableList]] = {
    "demo": random_spheres,
    "simple": simple,
    "checker": checker_spheres,
}


def build_scene(name: str, rng=None, obj_path: Optional[str] = None) -> HittableList:
    """Build a named scene, or the mesh scene when obj_path is given."""
    if obj_path is not None:
        return mesh_scene(obj_path, rng)
    try:
        builder = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}; choose from {', '.join(sorted(SCENES))}") from None
    return builder(rng)
