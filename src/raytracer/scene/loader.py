# scene/loader.py
"""
JSON scene loader.

Positions in the file are left-handed; z is negated for every point (camera
position and target, shape centers, triangle vertices, light position and
area-light corner). Directions that are not positions (up vector, cylinder
axis, area-light edges) and colors are taken as given.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from raytracer.camera.camera import Camera, RenderMode
from raytracer.core.vector import Vector3
from raytracer.errors import SceneConfigError
from raytracer.geometry.cylinder import Cylinder
from raytracer.geometry.sphere import Sphere
from raytracer.geometry.triangle import Triangle
from raytracer.geometry.world import HittableList
from raytracer.lights.area_light import AreaLight
from raytracer.lights.light import Light
from raytracer.lights.point_light import PointLight
from raytracer.materials.blinn_phong import BlinnPhong
from raytracer.materials.lambertian import Lambertian
from raytracer.materials.material import Material
from raytracer.materials.schlick import SchlickBRDF, SchlickRefractionsBRDF
from raytracer.materials.texture_loader import load_texture
from raytracer.materials.textures import ImageTexture
from raytracer.scene.scene import Scene

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES_PER_PIXEL = 20

_MISSING = object()


class _SceneParser:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._textures: Dict[str, ImageTexture] = {}

    # -- field access -----------------------------------------------------

    @staticmethod
    def get(node: Dict[str, Any], key: str, where: str, default=_MISSING):
        if not isinstance(node, dict):
            raise SceneConfigError(f"{where}: expected an object")
        if key not in node:
            if default is _MISSING:
                raise SceneConfigError(f"{where}.{key}: missing required field")
            return default
        return node[key]

    def number(self, node, key: str, where: str, default=_MISSING) -> float:
        value = self.get(node, key, where, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SceneConfigError(f"{where}.{key}: expected a number, got {value!r}")
        return float(value)

    def integer(self, node, key: str, where: str, default=_MISSING) -> int:
        value = self.get(node, key, where, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise SceneConfigError(f"{where}.{key}: expected an integer, got {value!r}")
        return value

    def boolean(self, node, key: str, where: str, default=_MISSING) -> bool:
        value = self.get(node, key, where, default)
        if not isinstance(value, bool):
            raise SceneConfigError(f"{where}.{key}: expected true or false, got {value!r}")
        return value

    def vector(self, node, key: str, where: str, negate_z: bool = False) -> Vector3:
        value = self.get(node, key, where)
        if (not isinstance(value, list) or len(value) != 3
                or any(isinstance(c, bool) or not isinstance(c, (int, float)) for c in value)):
            raise SceneConfigError(f"{where}.{key}: expected three numbers, got {value!r}")
        x, y, z = value
        return Vector3(x, y, -z if negate_z else z)

    def point(self, node, key: str, where: str) -> Vector3:
        return self.vector(node, key, where, negate_z=True)

    # -- sections ---------------------------------------------------------

    def parse(self, root) -> Scene:
        if not isinstance(root, dict):
            raise SceneConfigError("scene file must contain a JSON object")
        mode_name = self.get(root, "rendermode", "root")
        try:
            mode = RenderMode(mode_name)
        except ValueError:
            choices = ", ".join(m.value for m in RenderMode)
            raise SceneConfigError(f"root.rendermode: unknown render mode {mode_name!r} (expected {choices})") from None

        camera = self.parse_camera(root, mode)
        scene_node = self.get(root, "scene", "root")
        world = self.parse_shapes(scene_node, mode)
        lights = self.parse_lights(scene_node)
        seed = self.integer(root, "seed", "root", 0)
        return Scene(camera, world, lights, seed=seed)

    def parse_camera(self, root, mode: RenderMode) -> Camera:
        node = self.get(root, "camera", "root")
        where = "camera"
        scene_node = self.get(root, "scene", "root")
        camera_type = self.get(node, "type", where, "pinhole")
        # Only the pinhole model exists; lensRadius turns it into a thin lens.
        if camera_type != "pinhole":
            raise SceneConfigError(f"{where}.type: unsupported camera type {camera_type!r}")
        try:
            return Camera(
                render_mode=mode,
                nbounces=self.integer(root, "nbounces", "root"),
                background=self.vector(scene_node, "backgroundcolor", "scene"),
                image_width=self.integer(node, "width", where),
                image_height=self.integer(node, "height", where),
                lookfrom=self.point(node, "position", where),
                lookat=self.point(node, "lookAt", where),
                vup=self.vector(node, "upVector", where),
                vfov=self.number(node, "fov", where),
                exposure=self.number(node, "exposure", where, 0.1),
                lens_radius=self.number(node, "lensRadius", where, 0.0),
                samples_per_pixel=self.integer(node, "samples", where, DEFAULT_SAMPLES_PER_PIXEL),
            )
        except ValueError as e:
            raise SceneConfigError(f"camera: {e}") from e

    def parse_shapes(self, scene_node, mode: RenderMode) -> HittableList:
        shapes = self.get(scene_node, "shapes", "scene")
        if not isinstance(shapes, list):
            raise SceneConfigError("scene.shapes: expected a list")

        world = HittableList()
        for index, shape in enumerate(shapes):
            where = f"scene.shapes[{index}]"
            kind = self.get(shape, "type", where)
            # The binary view never shades, so it accepts shapes without material details.
            node = self.get(shape, "material", where, {} if mode is RenderMode.BINARY else _MISSING)
            material = self.parse_material(node, mode, f"{where}.material")
            try:
                if kind == "sphere":
                    obj = Sphere(self.point(shape, "center", where),
                                 self.number(shape, "radius", where), material)
                elif kind == "cylinder":
                    obj = Cylinder(self.point(shape, "center", where),
                                   self.vector(shape, "axis", where),
                                   self.number(shape, "radius", where),
                                   self.number(shape, "height", where), material)
                elif kind == "triangle":
                    obj = Triangle(self.point(shape, "v0", where),
                                   self.point(shape, "v1", where),
                                   self.point(shape, "v2", where), material)
                else:
                    raise SceneConfigError(f"{where}.type: unknown shape type {kind!r}")
            except ValueError as e:
                raise SceneConfigError(f"{where}: {e}") from e
            world.add(obj)

        world.build_bvh()
        return world

    def parse_lights(self, scene_node) -> List[Light]:
        entries = self.get(scene_node, "lightsources", "scene", [])
        if not isinstance(entries, list):
            raise SceneConfigError("scene.lightsources: expected a list")

        lights: List[Light] = []
        for index, entry in enumerate(entries):
            where = f"scene.lightsources[{index}]"
            intensity = self.vector(entry, "intensity", where)
            if self.get(entry, "type", where) == "pointlight":
                lights.append(PointLight(self.point(entry, "position", where), intensity))
                continue
            try:
                lights.append(AreaLight(
                    self.point(entry, "corner", where),
                    self.vector(entry, "edge1", where),
                    self.vector(entry, "edge2", where),
                    intensity,
                    self.integer(entry, "samples", where),
                ))
            except ValueError as e:
                raise SceneConfigError(f"{where}: {e}") from e
        return lights

    def parse_material(self, node, mode: RenderMode, where: str) -> Material:
        texture = self.parse_texture(node, where)
        if mode is RenderMode.PHONG:
            return BlinnPhong(
                diffuse_color=self.vector(node, "diffusecolor", where),
                specular_color=self.vector(node, "specularcolor", where),
                specular_exponent=self.number(node, "specularexponent", where),
                ks=self.number(node, "ks", where),
                kd=self.number(node, "kd", where),
                reflectivity=self.number(node, "reflectivity", where, 0.0),
                refractive_index=self.number(node, "refractiveindex", where, 1.0),
                is_reflective=self.boolean(node, "isreflective", where, False),
                is_refractive=self.boolean(node, "isrefractive", where, False),
                transparency=self.number(node, "transparency", where, 0.0),
                texture=texture,
            )

        lenient = mode is RenderMode.BINARY
        brdf_type = self.get(node, "brdfType", where, None if lenient else _MISSING)
        if brdf_type == "lambertian":
            return Lambertian(self.vector(node, "diffusecolor", where), texture)
        reflectance = self.number(node, "reflectance", where, 0.0 if lenient else _MISSING)
        if brdf_type == "schlick":
            return SchlickBRDF(reflectance)
        return SchlickRefractionsBRDF(reflectance)

    def parse_texture(self, node, where: str) -> Optional[ImageTexture]:
        name = self.get(node, "texture", where, None)
        if name is None:
            return None
        if not isinstance(name, str):
            raise SceneConfigError(f"{where}.texture: expected a file name, got {name!r}")
        path = str((self.base_dir / name).resolve())
        # One copy per file, shared by every material that names it.
        if path not in self._textures:
            self._textures[path] = load_texture(path)
        return self._textures[path]


def parse_scene(root, base_dir: Optional[os.PathLike] = None) -> Scene:
    """Build a Scene from an already-decoded JSON document."""
    return _SceneParser(Path(base_dir) if base_dir is not None else Path.cwd()).parse(root)


def load_scene(path) -> Scene:
    """
    Read and validate a scene file. Raises SceneConfigError or TextureLoadError
    before any rendering work happens.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            root = json.load(f)
    except OSError as e:
        raise SceneConfigError(f"Failed to open scene file {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise SceneConfigError(f"Invalid JSON in scene file {path}: {e}") from e

    scene = parse_scene(root, base_dir=path.parent)
    logger.info("Loaded scene %s: %d shapes, %d lights, mode=%s",
                path, len(scene.world), len(scene.lights), scene.camera.render_mode.value)
    return scene


__all__ = ["DEFAULT_SAMPLES_PER_PIXEL", "load_scene", "parse_scene"]
