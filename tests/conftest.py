"""Shared fixtures for the raytracer tests."""

import json
import random

import pytest

from raytracer.core.vector import Color


@pytest.fixture
def rng():
    """A seeded generator so sampled results are repeatable."""
    return random.Random(1234)


@pytest.fixture
def gray():
    from raytracer.materials.lambertian import Lambertian

    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def phong_white():
    from raytracer.materials.blinn_phong import BlinnPhong

    return BlinnPhong(Color(1, 1, 1), Color(1, 1, 1), 32.0, ks=0.5, kd=0.8)


def unit_sphere_document(rendermode="binary", nbounces=1, size=9, material=None, **extra):
    """Scene file contents: unit sphere at the origin seen from z = -5 (before z flip)."""
    if material is None:
        if rendermode == "phong":
            material = {
                "ks": 0.1, "kd": 0.9, "specularexponent": 20,
                "diffusecolor": [0.8, 0.5, 0.5], "specularcolor": [1, 1, 1],
                "isreflective": False, "reflectivity": 0.0,
                "isrefractive": False, "refractiveindex": 1.0, "transparency": 0.0,
            }
        else:
            material = {"brdfType": "lambertian", "diffusecolor": [0.8, 0.5, 0.5]}
    document = {
        "nbounces": nbounces,
        "rendermode": rendermode,
        "camera": {
            "type": "pinhole",
            "width": size,
            "height": size,
            "position": [0.0, 0.0, 5.0],
            "lookAt": [0.0, 0.0, 0.0],
            "upVector": [0.0, 1.0, 0.0],
            "fov": 45.0,
            "exposure": 0.1,
            "lensRadius": 0.0,
            "samples": 2,
        },
        "scene": {
            "backgroundcolor": [0.25, 0.25, 0.25],
            "lightsources": [
                {"type": "pointlight", "position": [0, 5, 0], "intensity": [0.5, 0.5, 0.5]},
            ],
            "shapes": [
                {"type": "sphere", "center": [0, 0, 0], "radius": 1.0, "material": material},
            ],
        },
    }
    document.update(extra)
    return document


@pytest.fixture
def write_scene(tmp_path):
    """Write a scene document to disk and return its path."""
    def _write(document, name="scene.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document))
        return path

    return _write


def p6_bytes(width, height, pixels, tag=b"P6", max_value=255):
    header = tag + b"\n" + f"{width} {height}\n{max_value}\n".encode()
    return header + bytes(pixels)


@pytest.fixture
def write_p6(tmp_path):
    """Write a binary PPM and return its path."""
    def _write(name, width, height, pixels, **kwargs):
        path = tmp_path / name
        path.write_bytes(p6_bytes(width, height, pixels, **kwargs))
        return path

    return _write


@pytest.fixture
def sphere_document():
    return unit_sphere_document
