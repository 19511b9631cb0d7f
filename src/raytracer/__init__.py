"""
CPU raytracer: binary, Blinn-Phong and path-traced rendering of spheres,
cylinders and triangles described by a JSON scene file.
"""
from raytracer.errors import RaytracerError, SceneConfigError, TextureLoadError

__version__ = "0.1.0"

__all__ = ["RaytracerError", "SceneConfigError", "TextureLoadError", "__version__"]
