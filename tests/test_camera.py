"""Unit tests for the perspective camera.

Tests cover:
- Field-of-view / direction-length conversions
- Image aspect ratio handling
- Ray generation in local and world space
"""

import pytest

from conftest import assert_vec_close
from csgtracer.camera.camera import Camera, PerspectiveCamera


class TestAngleConversion:
    """Tests for angle/direction helpers."""

    def test_ninety_degrees(self):
        assert PerspectiveCamera.angle_to_direction(90, 1.0) == pytest.approx(0.5)
        assert PerspectiveCamera.direction_to_angle(0.5, 1.0) == pytest.approx(90.0)

    @pytest.mark.parametrize("angle", [10.0, 45.0, 60.0, 120.0])
    def test_round_trip(self, angle):
        length = PerspectiveCamera.angle_to_direction(angle, 4 / 3)
        assert PerspectiveCamera.direction_to_angle(length, 4 / 3) == pytest.approx(angle)

    def test_angle_property(self):
        cam = PerspectiveCamera.for_image(4, 3, angle=60)
        assert cam.right.x == pytest.approx(4 / 3)
        assert cam.angle == pytest.approx(60.0)
        cam.angle = 30
        assert cam.angle == pytest.approx(30.0)
        assert cam.direction.z > 0


class TestProjection:
    """Tests for ray generation."""

    def test_abstract_camera(self):
        with pytest.raises(NotImplementedError):
            Camera().project(0, 0)

    def test_local_rays(self):
        cam = PerspectiveCamera()
        ray = cam.project_local(0.5, -0.5)
        assert_vec_close(ray.origin, (0, 0, 0))
        # Right along +x, up the picture is -y
        assert_vec_close(ray.direction, (0.5, -0.5, 1))

    def test_center_ray_follows_lookat(self, camera):
        camera.prepare_render()
        ray = camera.project(0, 0)
        assert_vec_close(ray.origin, (-5, 0, 0))
        assert_vec_close(ray.direction.normalize(), (1, 0, 0))

    def test_top_of_image_is_world_up(self, camera):
        camera.prepare_render()
        ray = camera.project(0, -0.5)
        assert ray.direction.z > 0
        assert ray.direction.y == pytest.approx(0.0, abs=1e-12)

    def test_unprepared_camera_uses_local_frame(self, camera):
        ray = camera.project(0, 0)
        assert_vec_close(ray.origin, (0, 0, 0))
