# materials/textures.py
import numpy as np

from raytracer.core.interval import Interval
from raytracer.core.uv import UV
from raytracer.core.vector import Color

_UNIT = Interval(0.0, 1.0)


class Texture:
    """Base class for all textures."""
    def sample(self, uv: UV) -> Color:
        """Sample the texture at given UV coordinates."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")


class ImageTexture(Texture):
    """
    An immutable 8-bit RGB pixel grid, sampled nearest-neighbor. Row 0 is the
    top of the image, so v is flipped before lookup.
    """
    def __init__(self, data: np.ndarray, source: str = "<memory>"):
        data = np.asarray(data, dtype=np.uint8)
        if data.ndim != 3 or data.shape[2] != 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Texture data must have shape (height, width, 3), got {data.shape}")
        data.setflags(write=False)
        self.data = data
        self.height, self.width = data.shape[:2]
        self.source = source

    def sample(self, uv: UV) -> Color:
        u = _UNIT.clamp(uv.u)
        v = 1.0 - _UNIT.clamp(uv.v)  # Flip V to image row order

        # Convert to pixel coordinates
        x = int(u * (self.width - 1))
        y = int(v * (self.height - 1))

        r, g, b = self.data[y, x]
        return Color(r / 255.0, g / 255.0, b / 255.0)

    def __repr__(self) -> str:
        return f"ImageTexture({self.source!r}, {self.width}x{self.height})"
