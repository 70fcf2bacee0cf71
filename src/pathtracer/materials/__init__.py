from pathtracer.materials.dielectric import Dielectric, schlick
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, ImageTexture, SolidColor, Texture

__all__ = [
    "CheckerTexture",
    "Dielectric",
    "ImageTexture",
    "Lambertian",
    "Material",
    "Metal",
    "SolidColor",
    "Texture",
    "schlick",
]
