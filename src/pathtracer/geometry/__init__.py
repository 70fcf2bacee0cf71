from pathtracer.geometry.bvh import BVHBuildError, BVHNode
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.triangle import Triangle
from pathtracer.geometry.world import HittableList

__all__ = [
    "BVHBuildError",
    "BVHNode",
    "HitRecord",
    "Hittable",
    "HittableList",
    "MovingSphere",
    "Sphere",
    "Triangle",
]
