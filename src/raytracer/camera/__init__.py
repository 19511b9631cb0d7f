from raytracer.camera.camera import Camera, RenderMode

__all__ = ["Camera", "RenderMode"]
