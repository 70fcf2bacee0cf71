from pathtracer.renderer.image_io import save_image, write_png, write_ppm
from pathtracer.renderer.integrator import background, ray_color
from pathtracer.renderer.sampler import render, render_scanline
from pathtracer.renderer.tone_mapping import reinhard, to_rgb8

__all__ = [
    "background",
    "ray_color",
    "reinhard",
    "render",
    "render_scanline",
    "save_image",
    "to_rgb8",
    "write_png",
    "write_ppm",
]
