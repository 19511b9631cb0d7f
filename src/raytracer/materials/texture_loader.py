# materials/texture_loader.py
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from raytracer.errors import TextureLoadError
from raytracer.materials.textures import ImageTexture

logger = logging.getLogger(__name__)

PPM_BINARY_TAG = b"P6"


def _read_header(path: str):
    """
    Parse the text header of a PPM file: tag, width, height, max value.
    Comments (#...) are skipped as the format allows.
    """
    with open(path, "rb") as f:
        raw = f.read(4096)
    tokens = []
    pos = 0
    while len(tokens) < 4 and pos < len(raw):
        ch = raw[pos:pos + 1]
        if ch == b"#":
            newline = raw.find(b"\n", pos)
            pos = len(raw) if newline < 0 else newline + 1
        elif ch.isspace():
            pos += 1
        else:
            end = pos
            while end < len(raw) and not raw[end:end + 1].isspace() and raw[end:end + 1] != b"#":
                end += 1
            tokens.append(raw[pos:end])
            pos = end
    if len(tokens) < 4:
        raise TextureLoadError(path, "truncated PPM header")

    tag = tokens[0]
    if tag != PPM_BINARY_TAG:
        raise TextureLoadError(path, f"invalid PPM format {tag.decode(errors='replace')!r}, expected P6")
    try:
        width, height, max_value = (int(t) for t in tokens[1:4])
    except ValueError:
        raise TextureLoadError(path, "malformed PPM header") from None
    if width <= 0 or height <= 0 or not 0 < max_value < 256:
        raise TextureLoadError(path, f"unsupported PPM dimensions {width}x{height} (max {max_value})")
    return width, height, max_value


def load_texture(image_path) -> ImageTexture:
    """
    Load a binary PPM (P6) file as a texture.

    Args:
        image_path: Path to the image file

    Returns:
        ImageTexture object

    Raises:
        TextureLoadError: If the file is missing, is not P6, or its data is malformed.
    """
    image_path = os.fspath(image_path)
    if not os.path.isfile(image_path):
        raise TextureLoadError(image_path, "file not found")

    width, height, _ = _read_header(image_path)

    try:
        with Image.open(image_path) as img:
            if img.mode != "RGB":
                img = img.convert("RGB")
            data = np.array(img, dtype=np.uint8)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise TextureLoadError(image_path, str(e)) from e

    if data.shape[:2] != (height, width):
        raise TextureLoadError(image_path, f"pixel data does not match header {width}x{height}")

    logger.info("Loaded texture %s (%dx%d)", image_path, width, height)
    return ImageTexture(data, source=image_path)
