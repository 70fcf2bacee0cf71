# pathtracer/renderer/image_io.py
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _check_rgb8(rgb8: np.ndarray):
    if rgb8.ndim != 3 or rgb8.shape[2] != 3 or rgb8.dtype != np.uint8:
        raise ValueError(f"expected a (height, width, 3) uint8 image, got {rgb8.shape} {rgb8.dtype}")


def write_ppm(path: PathLike, rgb8: np.ndarray):
    """Write an ASCII (P3) PPM, top row first."""
    _check_rgb8(rgb8)
    height, width, _ = rgb8.shape
    with open(path, "w") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in rgb8:
            for r, g, b in row.tolist():
                f.write(f"{r} {g} {b}\n")


def write_png(path: PathLike, rgb8: np.ndarray):
    _check_rgb8(rgb8)
    Image.fromarray(rgb8).save(path, format="PNG")


def save_image(path: PathLike, rgb8: np.ndarray):
    """Write the image in the format named by the file suffix (.ppm or .png)."""
    suffix = Path(path).suffix.lower()
    if suffix == ".ppm":
        write_ppm(path, rgb8)
    elif suffix == ".png":
        write_png(path, rgb8)
    else:
        raise ValueError(f"Unsupported image format {suffix!r}; use .png or .ppm")
    logger.info("Wrote %s", path)
