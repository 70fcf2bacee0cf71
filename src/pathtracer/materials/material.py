# pathtracer/materials/material.py
import random
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials are shared by every primitive that uses them and are never
    modified while rendering.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Color, Ray]]:
        """
        Computes the attenuation and the scattered ray.
        Returns a tuple (attenuation, scattered_ray) or None if the ray is absorbed.
        ``rng`` is the caller's random stream (anything with random() and uniform()).
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
