# pathtracer/renderer/tone_mapping.py
import logging

import numpy as np

logger = logging.getLogger(__name__)


def to_rgb8(linear: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Map a linear radiance image to 8-bit RGB: gamma-correct, clamp to
    [0, 0.999] and scale to [0, 256).
    """
    linear = np.asarray(linear, dtype=np.float64)
    nan_mask = np.isnan(linear)
    if nan_mask.any():
        logger.warning("%d NaN color components in image, writing them as 0", int(nan_mask.sum()))
        linear = np.where(nan_mask, 0.0, linear)
    corrected = np.power(np.clip(linear, 0.0, None), 1.0 / gamma)
    return (256 * np.clip(corrected, 0.0, 0.999)).astype(np.uint8)


def reinhard(linear: np.ndarray, exposure: float = 1.0, white_point: float = 1.0) -> np.ndarray:
    """
    Apply Reinhard tone mapping to a linear radiance image. The result stays linear.
    """
    scaled = np.asarray(linear, dtype=np.float64) * exposure
    return scaled / (1.0 + scaled / white_point)
