# csgtracer/core/ray.py
import numpy as np

from csgtracer.core.vector import Vector3


class Ray:
    """
    Represents a ray r(t) = origin + direction * t in 3D space.

    The direction is not normalized. Transforming a ray by an affine matrix
    keeps the parameter t meaningful: the point at t in one frame maps to the
    point at the same t in the other frame.
    """
    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __call__(self, t: float) -> Vector3:
        return self.at(t)

    def transformed(self, matrix: np.ndarray) -> "Ray":
        """
        Returns this ray mapped through a 4x4 homogeneous matrix. The origin
        is transformed as a position (w=1), the direction as a direction (w=0).
        """
        origin = matrix @ self.origin.to_homogeneous(1.0)
        direction = matrix @ self.direction.to_homogeneous(0.0)
        return Ray(Vector3.from_array(origin), Vector3.from_array(direction))

    def advanced(self, fraction: float) -> "Ray":
        """
        Returns a ray with the same direction whose origin has been moved
        forward by fraction * direction. A point that was at parameter t is
        at parameter t - fraction on the new ray.
        """
        return Ray(self.at(fraction), self.direction)

    def normalized_direction(self) -> Vector3:
        return self.direction.normalize()

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r})"
