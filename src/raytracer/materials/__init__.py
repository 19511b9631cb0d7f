from raytracer.materials.blinn_phong import BlinnPhong
from raytracer.materials.lambertian import Lambertian
from raytracer.materials.material import Material
from raytracer.materials.schlick import SchlickBRDF, SchlickRefractionsBRDF
from raytracer.materials.texture_loader import load_texture
from raytracer.materials.textures import ImageTexture, Texture

__all__ = [
    "BlinnPhong",
    "ImageTexture",
    "Lambertian",
    "Material",
    "SchlickBRDF",
    "SchlickRefractionsBRDF",
    "Texture",
    "load_texture",
]
