# scene/scene.py
from typing import List, Optional

from raytracer.camera.camera import Camera
from raytracer.geometry.world import HittableList
from raytracer.lights.light import Light
from raytracer.renderer.raytracer import Renderer


class Scene:
    """Everything needed for one render: camera settings, geometry and lights."""
    def __init__(self, camera: Camera, world: HittableList, lights: List[Light], seed: int = 0):
        self.camera = camera
        self.world = world
        self.lights = lights
        self.seed = seed

    def renderer(self, workers: Optional[int] = 1, seed: Optional[int] = None) -> Renderer:
        return Renderer(self.camera, self.world, self.lights, workers=workers,
                        seed=self.seed if seed is None else seed)

    def __repr__(self) -> str:
        return f"Scene({self.camera!r}, {len(self.world)} objects, {len(self.lights)} lights)"
