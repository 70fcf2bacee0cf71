# pathtracer/geometry/triangle.py
from typing import Optional, Sequence

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable

# Rays whose determinant falls below this are treated as parallel to the plane
PARALLEL_EPSILON = 1e-8
# Minimum thickness of a triangle's bounding box along any axis
BOX_PADDING = 1e-4


class Triangle(Hittable):
    """
    A single triangle intersected with the Möller–Trumbore algorithm.

    Shading is flat by default: the normal is the normalized cross product of
    the two edges from v0, or the explicitly supplied ``normal``. Per-vertex
    normals are only interpolated when ``smooth`` is requested; the hit
    record's (u, v) are the barycentric weights of v1 and v2.
    """
    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3, material,
                 normal: Optional[Vector3] = None,
                 vertex_normals: Optional[Sequence[Vector3]] = None,
                 smooth: bool = False):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material
        self.edge1 = v1 - v0
        self.edge2 = v2 - v0

        if normal is not None:
            self.normal = normal.normalize()
        else:
            self.normal = self.edge1.cross(self.edge2).normalize()

        if smooth and vertex_normals is None:
            raise ValueError("smooth shading requires vertex_normals")
        self.vertex_normals = (
            tuple(n.normalize() for n in vertex_normals) if vertex_normals is not None else None
        )
        self.smooth = smooth

    def shading_normal(self, u: float, v: float) -> Vector3:
        """Normal at the given barycentric coordinates."""
        if not self.smooth:
            return self.normal
        n0, n1, n2 = self.vertex_normals
        w = 1.0 - u - v
        return (n0 * w + n1 * u + n2 * v).normalize()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        h = ray.direction.cross(self.edge2)
        a = self.edge1.dot(h)

        # Ray is parallel to the triangle's plane
        if abs(a) < PARALLEL_EPSILON:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(self.edge1)
        v = f * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * self.edge2.dot(q)
        if t < t_min or t > t_max:
            return None

        rec = HitRecord(t=t, u=u, v=v, material=self.material)
        rec.p = ray.at(t)
        rec.set_face_normal(ray, self.shading_normal(u, v))
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        """
        Compute the bounding box for the triangle. Axes along which the
        triangle is flat are padded so the box never has zero thickness.
        """
        lo = [min(self.v0[a], self.v1[a], self.v2[a]) for a in range(3)]
        hi = [max(self.v0[a], self.v1[a], self.v2[a]) for a in range(3)]
        for a in range(3):
            if hi[a] - lo[a] < BOX_PADDING:
                lo[a] -= BOX_PADDING / 2
                hi[a] += BOX_PADDING / 2
        return AABB(Vector3(*lo), Vector3(*hi))

    def __repr__(self) -> str:
        return f"Triangle({self.v0!r}, {self.v1!r}, {self.v2!r})"
