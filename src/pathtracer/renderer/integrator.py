# pathtracer/renderer/integrator.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

# Near clip for secondary rays, keeps a surface from re-hitting itself
T_MIN = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """Vertical white-to-sky-blue gradient seen by rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng=random) -> Color:
    """
    Returns the color seen along the ray. On a hit the material scatters
    the ray, up to 'depth' bounces; the attenuation of every bounce is
    multiplied into a running throughput, so long paths do not grow the stack.

    ``world`` may be None for an empty scene, in which case every ray sees
    the background.
    """
    throughput = WHITE
    for _ in range(depth):
        rec = world.hit(ray, T_MIN, math.inf) if world is not None else None
        if rec is None:
            return throughput * background(ray)

        scatter_result = rec.material.scatter(ray, rec, rng)
        if scatter_result is None:
            return BLACK
        attenuation, ray = scatter_result
        throughput = throughput * attenuation

    return BLACK  # Bounce budget exhausted
