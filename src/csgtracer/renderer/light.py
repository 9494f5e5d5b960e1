# csgtracer/renderer/light.py
from typing import Union

from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry.renderable import Renderable

# Fraction of the surface-to-light distance a shadow ray starts past the
# surface, so the surface it leaves doesn't shadow itself through roundoff.
SHADOW_RAY_OFFSET = 1e-6


class Light:
    """
    Point light with a location and an RGB color.
    """
    def __init__(self, location, color=(1.0, 1.0, 1.0)):
        self.location = Vector3.coerce(location)
        self.color = Vector3.coerce(color)

    def prepare_render(self):
        pass

    def ray_to(self, point: Vector3) -> Ray:
        """
        Ray from a surface point towards this light. The light is at t=1 of
        the unadvanced ray; the returned ray starts SHADOW_RAY_OFFSET along it,
        so the light is just short of t=1.

        Skipping the struck object instead of nudging would break primitives
        that can legitimately shadow themselves.
        """
        return Ray(point, self.location - point).advanced(SHADOW_RAY_OFFSET)

    def amount_visible(self, blocker: Renderable, ray: Union[Ray, Vector3]) -> float:
        """
        Fraction of this light reaching the ray origin: 1.0 or 0.0 for a point
        light. Only objects between the point and the light (t < 1) block it.
        """
        if isinstance(ray, Vector3):
            ray = self.ray_to(ray)
        hit = blocker.intersect(ray)
        if hit is not None and hit.t < 1.0:
            return 0.0
        return 1.0

    def __repr__(self) -> str:
        return f"Light({self.location!r}, {self.color!r})"
