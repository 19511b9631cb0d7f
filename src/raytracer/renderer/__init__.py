from raytracer.renderer.output import save_image, write_ppm
from raytracer.renderer.raytracer import Renderer
from raytracer.renderer.sampling import halton
from raytracer.renderer.tone_mapping import reinhard_tone_mapping, tone_map_color

__all__ = ["Renderer", "halton", "reinhard_tone_mapping", "save_image", "tone_map_color", "write_ppm"]
