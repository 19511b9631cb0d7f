# renderer/output.py
import io
import logging
import os
from pathlib import Path
from typing import TextIO, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def _check_image(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 image of shape (height, width, 3), got {image.dtype} {image.shape}")
    return image


def write_ppm(target: Union[str, os.PathLike, TextIO], image: np.ndarray):
    """
    Write a plain-text (P3) PPM: three header lines, then one "r g b" line per
    pixel in row-major order.
    """
    image = _check_image(image)
    if isinstance(target, (str, os.PathLike)):
        with open(target, "w", newline="\n") as f:
            write_ppm(f, image)
        logger.info("Wrote %s", target)
        return

    height, width = image.shape[:2]
    buffer = io.StringIO()
    buffer.write(f"P3\n{width} {height}\n255\n")
    for r, g, b in image.reshape(-1, 3):
        buffer.write(f"{r} {g} {b}\n")
    target.write(buffer.getvalue())


def save_image(path: Union[str, os.PathLike], image: np.ndarray):
    """Save by file suffix: .ppm as plain-text P3, anything else through Pillow."""
    image = _check_image(image)
    suffix = Path(path).suffix.lower()
    if suffix == ".ppm":
        write_ppm(path, image)
        return
    if suffix not in Image.registered_extensions():
        raise ValueError(f"Unsupported image format {suffix or repr('')} for {path}")
    Image.fromarray(image).save(path)
    logger.info("Wrote %s", path)
