# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit

from raytracer.core.vector import Color

# Largest linear value fed to the operator; keeps r / (1 + L) finite.
_MAX_RADIANCE = 1e300


@njit
def _encode_channel(value):
    # Gamma 2 and quantize to [0, 255].
    value = math.sqrt(value)
    if value > 0.9999:
        value = 0.9999
    return int(256.0 * value)


@njit
def _sanitize(value, exposure):
    if value != value or value <= 0.0:
        return 0.0
    value = value * exposure
    if value > _MAX_RADIANCE:
        return _MAX_RADIANCE
    return value


@njit
def tone_mapping_kernel(linear_image, output_image, exposure):
    """
    Luminance-based Reinhard operator followed by gamma correction. Every
    channel is divided by (1 + luminance) of the exposed pixel.
    """
    height, width = linear_image.shape[0], linear_image.shape[1]
    for y in range(height):
        for x in range(width):
            r = _sanitize(linear_image[y, x, 0], exposure)
            g = _sanitize(linear_image[y, x, 1], exposure)
            b = _sanitize(linear_image[y, x, 2], exposure)

            luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b

            output_image[y, x, 0] = _encode_channel(r / (1.0 + luminance))
            output_image[y, x, 1] = _encode_channel(g / (1.0 + luminance))
            output_image[y, x, 2] = _encode_channel(b / (1.0 + luminance))


def reinhard_tone_mapping(accumulated: np.ndarray, exposure: float = 1.0) -> np.ndarray:
    """
    Apply tone mapping to a linear radiance image of shape (height, width, 3).
    Returns a uint8 image of the same shape.
    """
    linear = np.ascontiguousarray(accumulated, dtype=np.float64)
    if linear.ndim != 3 or linear.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {linear.shape}")
    output = np.zeros(linear.shape, dtype=np.uint8)
    tone_mapping_kernel(linear, output, float(exposure))
    return output


def tone_map_color(color: Color, exposure: float = 1.0) -> tuple:
    """Tone-map a single linear color to an (r, g, b) byte triple."""
    pixel = np.array([[[color.x, color.y, color.z]]], dtype=np.float64)
    r, g, b = reinhard_tone_mapping(pixel, exposure)[0, 0]
    return int(r), int(g), int(b)
