"""
Renderable geometry: primitives defined in their own local frame and CSG
composites built from them.

Every renderable answers the same three questions for a world-space ray or
point:

    hit = obj.intersect(ray)      # HitRecord(primitive, t) or None
    obj.inside(point)             # bool
    obj.eval_pigment(point)       # ObjectColor or None
"""
from .composite import Composite, Intersection, Union, difference
from .plane import Plane
from .renderable import HitRecord, Primitive, Renderable
from .sphere import Sphere

__all__ = [
    "Composite",
    "HitRecord",
    "Intersection",
    "Plane",
    "Primitive",
    "Renderable",
    "Sphere",
    "Union",
    "difference",
]
