# csgtracer/core/transform.py
"""
Affine transformations that build a 4x4 homogeneous matrix on demand.

Every transformation is a *physical* move of the object it is attached to,
about the world origin, following POV-Ray. Parameters are plain mutable
attributes: a scene keeps the handle returned by ``translate()``/``rotate_z()``
etc. and edits it between frames to animate. The matrix is rebuilt from the
parameters every time ``matrix()`` is called and never cached here.
"""
import math
from numbers import Real

import numpy as np

from csgtracer.core.utils import deg2rad, rad2deg
from csgtracer.core.vector import Vector3


def rotation_matrix(axis: int, angle: float) -> np.ndarray:
    """
    Right-handed physical rotation of an object about a coordinate axis.

    Parameters:
        axis: 0 for x, 1 for y, 2 for z
        angle: rotation in radians

    An object pointed down +x rotated +90 degrees about z ends up pointed
    down +y.
    """
    result = np.identity(4)
    c = math.cos(angle)
    s = math.sin(angle)
    i = (axis + 1) % 3
    j = (axis + 2) % 3
    result[i, i] = c
    result[i, j] = -s
    result[j, i] = s
    result[j, j] = c
    return result


def _nonzero(value: float) -> float:
    # POV-Ray convention: a zero scale factor means "don't scale this axis"
    return 1.0 if value == 0 else value


class Transform:
    """
    Base class for all transformations. Subclasses must implement matrix().
    """
    def matrix(self) -> np.ndarray:
        raise NotImplementedError("matrix() must be implemented by subclasses.")

    def prepare_render(self):
        """Hook for caching expensive setup before a render. Default does nothing."""
        pass


class VectorTransform(Transform):
    """Transformation driven by a single 3-vector parameter."""
    def __init__(self, x=0.0, y: float = 0.0, z: float = 0.0):
        if isinstance(x, Real):
            self.vector = Vector3(x, y, z)
        else:
            self.vector = Vector3.coerce(x)

    @property
    def x(self) -> float:
        return self.vector.x

    @x.setter
    def x(self, value: float):
        self.vector = Vector3(value, self.vector.y, self.vector.z)

    @property
    def y(self) -> float:
        return self.vector.y

    @y.setter
    def y(self, value: float):
        self.vector = Vector3(self.vector.x, value, self.vector.z)

    @property
    def z(self) -> float:
        return self.vector.z

    @z.setter
    def z(self, value: float):
        self.vector = Vector3(self.vector.x, self.vector.y, value)


class Translation(VectorTransform):
    """
    Moves an object so that its local origin lands on `vector` in the
    parent frame.
    """
    def matrix(self) -> np.ndarray:
        result = np.identity(4)
        result[0, 3] = self.vector.x
        result[1, 3] = self.vector.y
        result[2, 3] = self.vector.z
        return result


class Scaling(VectorTransform):
    """
    Non-uniform scaling along the three body axes. A zero factor on any
    axis is silently treated as 1 so the matrix always stays invertible.
    """
    def matrix(self) -> np.ndarray:
        return np.diag([_nonzero(self.vector.x),
                        _nonzero(self.vector.y),
                        _nonzero(self.vector.z),
                        1.0])


class UniformScaling(Transform):
    """Same stretch factor along every axis; 0 is treated as 1."""
    def __init__(self, factor: float = 1.0):
        self.factor = factor

    def matrix(self) -> np.ndarray:
        s = _nonzero(self.factor)
        return np.diag([s, s, s, 1.0])


class AxisRotation(Transform):
    """
    Right-handed physical rotation about one coordinate axis. `angle` is in
    radians; `degrees` reads and writes the same parameter in degrees.
    """
    axis = 0

    def __init__(self, angle: float = 0.0, is_degrees: bool = False):
        self.angle = deg2rad(angle) if is_degrees else angle

    @property
    def degrees(self) -> float:
        return rad2deg(self.angle)

    @degrees.setter
    def degrees(self, value: float):
        self.angle = deg2rad(value)

    def matrix(self) -> np.ndarray:
        return rotation_matrix(self.axis, self.angle)


class RotateX(AxisRotation):
    axis = 0


class RotateY(AxisRotation):
    axis = 1


class RotateZ(AxisRotation):
    axis = 2


class RotateVector(VectorTransform):
    """
    Rotation about x by vector.x, then about y by vector.y, then about z by
    vector.z (radians). The order is fixed; chain single-axis rotations to
    get any other Euler sequence.
    """
    def __init__(self, x=0.0, y: float = 0.0, z: float = 0.0, is_degrees: bool = False):
        super().__init__(x, y, z)
        if is_degrees:
            self.degrees = self.vector

    @property
    def degrees(self) -> Vector3:
        return Vector3(rad2deg(self.vector.x), rad2deg(self.vector.y), rad2deg(self.vector.z))

    @degrees.setter
    def degrees(self, value):
        value = Vector3.coerce(value)
        self.vector = Vector3(deg2rad(value.x), deg2rad(value.y), deg2rad(value.z))

    def matrix(self) -> np.ndarray:
        result = rotation_matrix(0, self.vector.x)
        result = rotation_matrix(1, self.vector.y) @ result
        result = rotation_matrix(2, self.vector.z) @ result
        return result


class PointToward(Transform):
    """
    Rotates an object so that body direction p_b points exactly along
    reference direction p_r, while body direction t_b points as close as
    possible to reference direction t_r.

    Both constraints can only be met exactly when the angle between p_b and
    t_b equals the angle between p_r and t_r. Otherwise the point constraint
    wins and t_b lands in the plane spanned by p_r and t_r, which is where
    the residual angle to t_r is smallest. In each frame build the
    orthonormal basis

        s = normalize(p x t),  u = normalize(p x s)

    then with the basis vectors as matrix columns, R = [p_r s_r u_r] and
    B = [p_b s_b u_b], the rotation is M = R B^-1 = R B^T since B is
    orthonormal.
    """
    def __init__(self, p_b, p_r, t_b, t_r):
        self.p_b = Vector3.coerce(p_b)
        self.p_r = Vector3.coerce(p_r)
        self.t_b = Vector3.coerce(t_b)
        self.t_r = Vector3.coerce(t_r)

    @staticmethod
    def calc(p_b: Vector3, p_r: Vector3, t_b: Vector3, t_r: Vector3) -> np.ndarray:
        def basis(p: Vector3, t: Vector3) -> np.ndarray:
            s = p.cross(t).normalize()
            u = p.cross(s).normalize()
            return np.column_stack([list(p.normalize()), list(s), list(u)])

        R = basis(p_r, t_r)
        B = basis(p_b, t_b)
        result = np.identity(4)
        result[:3, :3] = R @ B.T
        return result

    def matrix(self) -> np.ndarray:
        return self.calc(self.p_b, self.p_r, self.t_b, self.t_r)


class LocationLookat(Transform):
    """
    Places an object's origin at `location` and points its body axis p_b at
    `look_at`. t_b is pulled as close as possible to t_r (POV-Ray's `sky`).

    The defaults suit a camera: boresight is body +z, image-down is body +y,
    and image-down is pulled towards world -z, so a camera looking
    horizontally has world +z at the top of the picture.
    """
    def __init__(self, location, look_at,
                 p_b=(0, 0, 1), t_b=(0, 1, 0), t_r=(0, 0, -1)):
        self.location = Vector3.coerce(location)
        self.look_at = Vector3.coerce(look_at)
        self.p_b = Vector3.coerce(p_b)
        self.t_b = Vector3.coerce(t_b)
        self.t_r = Vector3.coerce(t_r)

    @staticmethod
    def calc(location: Vector3, look_at: Vector3,
             p_b: Vector3, t_b: Vector3, t_r: Vector3) -> np.ndarray:
        result = PointToward.calc(p_b, look_at - location, t_b, t_r)
        return Translation(location).matrix() @ result

    def matrix(self) -> np.ndarray:
        return self.calc(self.location, self.look_at, self.p_b, self.t_b, self.t_r)
