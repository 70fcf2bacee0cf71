# pathtracer/materials/textures.py
import math

import numpy as np
from PIL import Image

from pathtracer.core.vector import Color, Point3


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Point3) -> Color:
        """Color at surface coordinates (u, v) and hit point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"


class CheckerTexture(Texture):
    """
    A 3D checker pattern: the sign of sin(sx)·sin(sy)·sin(sz) at the hit
    point selects between the odd and even textures.
    """
    def __init__(self, odd, even, scale: float = 10.0):
        self.odd = odd if isinstance(odd, Texture) else SolidColor(odd)
        self.even = even if isinstance(even, Texture) else SolidColor(even)
        self.scale = scale

    def value(self, u: float, v: float, p: Point3) -> Color:
        sines = (math.sin(self.scale * p.x) *
                 math.sin(self.scale * p.y) *
                 math.sin(self.scale * p.z))
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class ImageTexture(Texture):
    """A texture from an image file."""
    def __init__(self, image_path: str):
        # Load image using PIL; missing files propagate FileNotFoundError
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            # Convert to numpy array for faster access, normalized to [0,1]
            self.data = np.asarray(img, dtype=np.float64) / 255.0
            self.width = img.width
            self.height = img.height
        self.path = image_path

    def value(self, u: float, v: float, p: Point3) -> Color:
        # Handle texture wrapping
        u = u % 1.0
        v = 1.0 - (v % 1.0)  # Image rows run top to bottom

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        r, g, b = self.data[y, x].tolist()
        return Color(r, g, b)

    def __repr__(self) -> str:
        return f"ImageTexture({self.path!r}, {self.width}x{self.height})"
