# csgtracer/camera/camera.py
from csgtracer.core.ray import Ray
from csgtracer.core.transformable import Transformable
from csgtracer.core.utils import atand, tand
from csgtracer.core.vector import Vector3


class Camera(Transformable):
    """
    Maps normalized image-plane coordinates to world-space rays.

    Both coordinates run from -0.5 to 0.5: x from left to right, y from the
    top row to the bottom row. Subclasses build the ray in the camera's own
    frame; the camera's transform chain places it in the world.
    """
    def project_local(self, x: float, y: float) -> Ray:
        raise NotImplementedError("project_local() must be implemented by subclasses.")

    def project(self, x: float, y: float) -> Ray:
        return self.transform_chain.ray_to_world(self.project_local(x, y))


class PerspectiveCamera(Camera):
    """
    Pinhole camera in the POV-Ray style: the ray through (x, y) starts at
    the local origin and points along direction + right*x + down*y.

    The frame is right-handed with +y pointing *down* the picture, so rows
    come out top-first with no flip. The default camera sits at the origin
    looking up +z with right along +x; attach location_lookat() to aim it.

    Zoom is encoded in the length of `direction` relative to `right`; there is
    no separate angle field.
    """
    def __init__(self, right=(1, 0, 0), down=(0, 1, 0), direction=(0, 0, 1)):
        super().__init__()
        self.right = Vector3.coerce(right)
        self.down = Vector3.coerce(down)
        self.direction = Vector3.coerce(direction)

    @classmethod
    def for_image(cls, width: int, height: int, angle: float = None) -> "PerspectiveCamera":
        """
        Camera whose image plane has the aspect ratio of a width x height
        buffer. With `angle` (full horizontal field of view, degrees) the
        direction length is set to match.
        """
        right_len = width / height
        dir_len = 1.0 if angle is None else cls.angle_to_direction(angle, right_len)
        return cls(right=(right_len, 0, 0), down=(0, 1, 0), direction=(0, 0, dir_len))

    @staticmethod
    def angle_to_direction(angle: float, right_len: float) -> float:
        """Direction length giving a horizontal field of view of `angle` degrees."""
        return 0.5 * right_len / tand(angle / 2)

    @staticmethod
    def direction_to_angle(dir_len: float, right_len: float) -> float:
        """
        Horizontal field of view in degrees. Only meaningful when right,
        down and direction are mutually perpendicular.
        """
        return 2 * atand(right_len / (2 * dir_len))

    @property
    def angle(self) -> float:
        return self.direction_to_angle(self.direction.length(), self.right.length())

    @angle.setter
    def angle(self, value: float):
        length = self.angle_to_direction(value, self.right.length())
        self.direction = self.direction.normalize() * length

    def project_local(self, x: float, y: float) -> Ray:
        return Ray(Vector3(0.0, 0.0, 0.0), self.direction + self.right * x + self.down * y)
