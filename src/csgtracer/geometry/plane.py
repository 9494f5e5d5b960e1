# csgtracer/geometry/plane.py
from typing import Optional

from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry.renderable import Primitive


class Plane(Primitive):
    """
    The local z=0 plane. Everything with z < 0 counts as inside, so the
    plane is a half-space and can take part in CSG.
    """
    def intersect_local(self, ray: Ray) -> Optional[float]:
        # r0.z + v.z t = 0
        if ray.direction.z == 0:
            # Parallel: either the ray lies in the plane or it never meets it
            return 0.0 if ray.origin.z == 0 else None
        t = -ray.origin.z / ray.direction.z
        return t if t > 0 else None

    def normal_local(self, point: Vector3) -> Vector3:
        # Valid anywhere, not just on the surface
        return Vector3(0.0, 0.0, 1.0)

    def inside_local(self, point: Vector3) -> bool:
        return point.z < 0
