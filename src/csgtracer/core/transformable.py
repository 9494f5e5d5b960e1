# csgtracer/core/transformable.py
"""
Transform chains and the Transformable mixin.

Everything that can be placed in a scene (objects, pigments, cameras) keeps
an ordered chain of Transform handles. The handles are shared, not copied:
the same Translation can sit in several chains, and editing it moves every
holder at the next prepare_render().

All matrix work happens in prepare_render(). During a render, a chain of
0, 1 or 1000 transforms costs the same.
"""
from numbers import Real
from typing import List

import numpy as np

from csgtracer.core.ray import Ray
from csgtracer.core.transform import (
    LocationLookat,
    PointToward,
    RotateVector,
    RotateX,
    RotateY,
    RotateZ,
    Scaling,
    Transform,
    Translation,
    UniformScaling,
)
from csgtracer.core.vector import Vector3


class TransformChain:
    """
    Ordered, append-only list of transforms plus the matrices derived from it.

    The derived matrices are only valid between a call to prepare_render()
    and the next change to any transform in the list. Before the first
    prepare_render() they are identity.
    """
    def __init__(self):
        self.transforms: List[Transform] = []
        self.world_from_local = np.identity(4)
        self.local_from_world = np.identity(4)
        self.normal_matrix = np.identity(4)

    def append(self, transform: Transform) -> Transform:
        self.transforms.append(transform)
        return transform

    def __len__(self) -> int:
        return len(self.transforms)

    def __iter__(self):
        return iter(self.transforms)

    def combine(self) -> np.ndarray:
        """
        Fold the transforms so that they act in insertion order. Each matrix
        is multiplied on the left of the running product, which is what
        M @ v with column vectors requires.
        """
        result = np.identity(4)
        for transform in self.transforms:
            result = transform.matrix() @ result
        return result

    def prepare_render(self):
        for transform in self.transforms:
            transform.prepare_render()
        self.world_from_local = self.combine()
        self.local_from_world = np.linalg.inv(self.world_from_local)
        # Normals need the inverse-transpose: if n.p = 0 for every tangent p
        # in local space, (Q n).(M p) = 0 for all p forces Q = (M^-1)^T.
        self.normal_matrix = self.local_from_world.T

    def point_to_world(self, point: Vector3) -> Vector3:
        return Vector3.from_array(self.world_from_local @ point.to_homogeneous(1.0))

    def direction_to_world(self, direction: Vector3) -> Vector3:
        return Vector3.from_array(self.world_from_local @ direction.to_homogeneous(0.0))

    def normal_to_world(self, normal: Vector3) -> Vector3:
        return Vector3.from_array(self.normal_matrix @ normal.to_homogeneous(0.0)).normalize()

    def point_to_local(self, point: Vector3) -> Vector3:
        return Vector3.from_array(self.local_from_world @ point.to_homogeneous(1.0))

    def direction_to_local(self, direction: Vector3) -> Vector3:
        return Vector3.from_array(self.local_from_world @ direction.to_homogeneous(0.0))

    def ray_to_world(self, ray: Ray) -> Ray:
        return ray.transformed(self.world_from_local)

    def ray_to_local(self, ray: Ray) -> Ray:
        return ray.transformed(self.local_from_world)


class Transformable:
    """
    Entity that can be moved around with POV-Ray style transformations.

    Each transformation *physically* moves the object about the world origin
    in the order they are added. An object at <5,0,0> pointed down +x that
    gets rotate_z(90) ends up at <0,5,0> pointed down +y.

    Every helper returns the transform it created. Keep the handle to animate:
    change its parameters, call prepare_render() again and re-render.
    """
    def __init__(self):
        self.transform_chain = TransformChain()

    @property
    def world_from_local(self) -> np.ndarray:
        return self.transform_chain.world_from_local

    @property
    def local_from_world(self) -> np.ndarray:
        return self.transform_chain.local_from_world

    @property
    def normal_matrix(self) -> np.ndarray:
        return self.transform_chain.normal_matrix

    def prepare_render(self):
        self.transform_chain.prepare_render()

    def add_transform(self, transform: Transform) -> Transform:
        return self.transform_chain.append(transform)

    def translate(self, x, y: float = 0.0, z: float = 0.0) -> Translation:
        """
        Move the object by the given vector. An object at the origin will be
        at <x,y,z> afterwards.
        """
        return self.add_transform(Translation(x, y, z))

    def rotate_x(self, angle: float) -> RotateX:
        """Right-handed rotation about the x axis, angle in degrees."""
        return self.add_transform(RotateX(angle, is_degrees=True))

    def rotate_y(self, angle: float) -> RotateY:
        """Right-handed rotation about the y axis, angle in degrees."""
        return self.add_transform(RotateY(angle, is_degrees=True))

    def rotate_z(self, angle: float) -> RotateZ:
        """Right-handed rotation about the z axis, angle in degrees."""
        return self.add_transform(RotateZ(angle, is_degrees=True))

    def rotate(self, x, y: float = 0.0, z: float = 0.0) -> RotateVector:
        """Rotate about x, then y, then z, all in degrees."""
        return self.add_transform(RotateVector(x, y, z, is_degrees=True))

    def scale(self, x, y: float = None, z: float = None):
        """
        scale(s) scales uniformly, scale(x, y, z) or scale(Vector3) scales
        each axis separately. Zero factors are treated as 1.
        """
        if y is None and z is None:
            if isinstance(x, Real):
                return self.add_transform(UniformScaling(x))
            return self.add_transform(Scaling(x))
        return self.add_transform(Scaling(x, 1.0 if y is None else y, 1.0 if z is None else z))

    def point_toward(self, p_b, p_r, t_b, t_r) -> PointToward:
        return self.add_transform(PointToward(p_b, p_r, t_b, t_r))

    def location_lookat(self, location, look_at,
                        p_b=(0, 0, 1), t_b=(0, 1, 0), t_r=(0, 0, -1)) -> LocationLookat:
        return self.add_transform(LocationLookat(location, look_at, p_b, t_b, t_r))
