# pathtracer/materials/presets.py
from pathtracer.core.vector import Color
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture


class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Color(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Color(0.8, 0.8, 0.8), fuzz=0.3)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)


class ColorPresets:
    """Common color presets for materials."""

    RED = Color(0.9, 0.2, 0.2)
    BLUE = Color(0.2, 0.3, 0.9)
    GREEN = Color(0.2, 0.8, 0.2)
    BROWN = Color(0.4, 0.2, 0.1)

    WHITE = Color(0.9, 0.9, 0.9)
    GRAY = Color(0.5, 0.5, 0.5)
    DARK_GREEN = Color(0.2, 0.3, 0.1)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)


class TexturePresets:
    """Predefined texture presets."""

    @staticmethod
    def checkerboard(odd: Color = None, even: Color = None, scale: float = 10.0) -> CheckerTexture:
        """Create a checker texture with default or custom colors."""
        if odd is None:
            odd = ColorPresets.DARK_GREEN
        if even is None:
            even = ColorPresets.WHITE
        return CheckerTexture(odd, even, scale)
