# pathtracer/camera/camera.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Point3, Vector3


class Camera:
    """
    Thin-lens camera looking from ``lookfrom`` towards ``lookat``.

    ``vfov`` is the vertical field of view in degrees. Rays carry a time
    drawn uniformly from the shutter interval [time0, time1].
    """
    def __init__(self, lookfrom: Point3, lookat: Point3, vup: Vector3, vfov: float,
                 aspect_ratio: float, aperture: float = 0.0, focus_dist: float = 10.0,
                 time0: float = 0.0, time1: float = 0.0):
        self.position = lookfrom
        self.lookat = lookat
        self.vup = vup
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        viewport_height = 2.0 * math.tan(math.radians(self.vfov) / 2)
        viewport_width = self.aspect_ratio * viewport_height

        self.w = (self.position - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Viewport lies on the plane of perfect focus
        self.horizontal = self.u * (viewport_width * self.focus_dist)
        self.vertical = self.v * (viewport_height * self.focus_dist)
        self.lower_left_corner = (self.position -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, s: float, t: float, rng=random) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]²."""
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0.0, 0.0, 0.0)

        origin = self.position + offset
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        time = self.time0 if self.time1 <= self.time0 else rng.uniform(self.time0, self.time1)
        return Ray(origin, direction, time)
