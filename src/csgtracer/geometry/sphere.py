# csgtracer/geometry/sphere.py
import math
from typing import Optional, Tuple

from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry.renderable import Primitive


class Sphere(Primitive):
    """
    Unit sphere centered on the local origin. Use scale() and translate() to
    get any other radius, position or an ellipsoid.
    """
    def intersect_local(self, ray: Ray) -> Optional[float]:
        # |r0 + v t|^2 = 1  ->  a t^2 + b t + c = 0
        r0 = ray.origin
        v = ray.direction
        a = v.dot(v)
        b = 2.0 * r0.dot(v)
        c = r0.dot(r0) - 1.0
        d = b * b - 4.0 * a * c
        if d < 0:
            return None

        # Stable form: never subtract two nearly equal numbers
        q = -(b + (1.0 if b > 0 else -1.0) * math.sqrt(d)) / 2.0
        if q == 0:
            # Only when b == 0 and d == 0, i.e. c == 0 and the origin grazes
            # the surface along a tangent. Nothing in front of the ray.
            return None
        t1 = q / a
        t2 = c / q
        if t1 <= 0:
            return t2 if t2 > 0 else None
        if t2 <= 0:
            return t1
        return min(t1, t2)

    def normal_local(self, point: Vector3) -> Vector3:
        return point.normalize()

    def inside_local(self, point: Vector3) -> bool:
        return point.length_squared() < 1.0

    @staticmethod
    def uv_local(point: Vector3) -> Tuple[float, float]:
        """
        Longitude/latitude texture coordinates of a local point, both mapped
        into [0, 1].
        """
        lon = math.atan2(point.y, point.x)
        if lon < 0:
            lon += 2 * math.pi
        lat = math.asin(point.z / point.length())
        return lon / (2 * math.pi), lat / math.pi + 0.5
