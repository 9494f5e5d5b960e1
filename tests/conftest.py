"""Pytest configuration for csgtracer tests.

Shared fixtures: a few ready-made primitives and a camera/scene pair laid
out like the reference end-to-end scenes (a unit sphere at the origin seen
from -x).
"""

import pytest

from csgtracer.camera.camera import PerspectiveCamera
from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry.sphere import Sphere
from csgtracer.materials.color_field import ConstantColor
from csgtracer.renderer.scene import Scene


@pytest.fixture
def red():
    return ConstantColor(1.0, 0.0, 0.0)


@pytest.fixture
def unit_sphere(red):
    """Red unit sphere at the origin, already prepared."""
    sphere = Sphere(pigment=red)
    sphere.prepare_render()
    return sphere


@pytest.fixture
def x_ray():
    """Ray from (-5,0,0) travelling down +x with unit speed."""
    return Ray(Vector3(-5.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0))


@pytest.fixture
def camera():
    """Square-image camera at (-5,0,0) looking at the origin."""
    cam = PerspectiveCamera.for_image(1, 1)
    cam.location_lookat((-5, 0, 0), (0, 0, 0))
    return cam


@pytest.fixture
def sphere_scene(camera, red):
    """Scene holding a red unit sphere at the origin and the fixture camera."""
    scene = Scene(camera=camera)
    scene.add_object(Sphere(pigment=red))
    return scene


def assert_vec_close(actual, expected, tol=1e-9):
    """Compare a Vector3 to a Vector3 or 3-sequence component-wise."""
    expected = Vector3.coerce(expected)
    assert actual.is_close(expected, tol), f"{actual!r} != {expected!r}"
