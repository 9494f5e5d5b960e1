# csgtracer/core/vector.py
import math
from numbers import Real

import numpy as np


class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    normalization, and conversion to and from homogeneous numpy arrays.

    The same class is used for positions, directions, normals and RGB colors.
    Which one a vector is only matters when it meets a 4x4 matrix: positions
    are extended with w=1 and take part in translation, directions and normals
    are extended with w=0 and do not.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Component-wise, used for color filtering
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        return self.dot(self)

    def normalize(self) -> "Vector3":
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def is_close(self, other: "Vector3", tol: float = 1e-9) -> bool:
        return (abs(self.x - other.x) <= tol and
                abs(self.y - other.y) <= tol and
                abs(self.z - other.z) <= tol)

    def to_homogeneous(self, w: float) -> np.ndarray:
        """
        Extend to a 4-vector for multiplication with a 4x4 matrix.
        Use w=1 for positions and w=0 for directions and normals.
        """
        return np.array([self.x, self.y, self.z, w], dtype=np.float64)

    @staticmethod
    def from_array(values) -> "Vector3":
        """
        Build a vector from the first three components of any sequence,
        dropping the homogeneous coordinate if present.
        """
        return Vector3(float(values[0]), float(values[1]), float(values[2]))

    @staticmethod
    def coerce(value) -> "Vector3":
        """
        Accept either a Vector3 or a 3-sequence of numbers.
        """
        if isinstance(value, Vector3):
            return value
        return Vector3.from_array(value)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
