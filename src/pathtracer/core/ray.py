# pathtracer/core/ray.py
import numpy as np

from pathtracer.core.vector import Vector3


class Ray:
    """
    Represents a ray in 3D space with an origin, a direction and the time
    at which it was emitted (used by moving geometry for motion blur).
    """
    __slots__ = ("origin", "direction", "time", "_inv_direction")

    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time
        self._inv_direction = None

    @property
    def inv_direction(self):
        """
        Component-wise reciprocal of the direction, computed on first use.
        IEEE-754 division: a zero component yields a signed infinity, which
        the AABB slab test relies on for axis-aligned rays.
        """
        if self._inv_direction is None:
            d = self.direction
            with np.errstate(divide="ignore"):
                self._inv_direction = np.reciprocal(
                    np.array((d.x, d.y, d.z), dtype=np.float64)
                ).tolist()
        return self._inv_direction

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r}, time={self.time})"
