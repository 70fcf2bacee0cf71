# pathtracer/materials/metal.py
import random
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Metal(Material):
    """
    Metal material: mirror reflection blurred by ``fuzz`` in [0, 1].
    """
    def __init__(self, albedo: Color, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Color, Ray]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        direction = (reflected + random_in_unit_sphere(rng) * self.fuzz).normalize()

        if direction.dot(rec.normal) > 0:
            return self.albedo, Ray(rec.p, direction, ray_in.time)

        return None  # Absorb the ray if it is scattered below the surface

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
