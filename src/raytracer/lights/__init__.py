from raytracer.lights.area_light import AreaLight
from raytracer.lights.light import Light
from raytracer.lights.point_light import PointLight

__all__ = ["AreaLight", "Light", "PointLight"]
