"""Exceptions raised while preparing a render. Nothing raises once rendering starts."""


class RaytracerError(Exception):
    """Base class for all errors raised by this package."""


class SceneConfigError(RaytracerError):
    """The scene description could not be read or is missing/invalid data."""


class TextureLoadError(RaytracerError):
    """A texture file is missing or is not a binary (P6) PPM image."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error loading texture {self.path}: {reason}")
