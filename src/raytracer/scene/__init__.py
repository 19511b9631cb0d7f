from raytracer.scene.loader import load_scene, parse_scene
from raytracer.scene.scene import Scene

__all__ = ["Scene", "load_scene", "parse_scene"]
