# csgtracer/geometry/composite.py
"""
Constructive solid geometry: composites of renderables.

A composite's children are full renderables in their own right, so they can
be transformed and can carry pigments. Composites nest freely; intersect()
always reports the leaf primitive that was struck, never the composite.
"""
from typing import Iterator, List, Optional

from csgtracer.core.ray import Ray
from csgtracer.core.transform import Transform
from csgtracer.core.vector import Vector3
from csgtracer.geometry.renderable import HitRecord, Primitive, Renderable
from csgtracer.materials.color_field import ColorField

# Upper bound on boundary crossings walked per child when an Intersection
# looks for the first crossing that lies inside every sibling.
MAX_CSG_CROSSINGS = 64
# Ray-parameter step past a rejected crossing before searching again.
CSG_EPSILON = 1e-9


class Composite(Renderable):
    """
    Base class for renderables made of other renderables.

    add_transform() hands the *same* transform object to every child that is
    present at the time of the call. Children added later do not get it, so
    add all children before transforming the composite as a whole.
    """
    def __init__(self, children=None, pigment: Optional[ColorField] = None):
        super().__init__(pigment)
        self.children: List[Renderable] = []
        for child in children or ():
            self.add(child)

    def add(self, child: Renderable) -> Renderable:
        self.children.append(child)
        return child

    def last(self) -> Renderable:
        return self.children[-1]

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[Renderable]:
        return iter(self.children)

    def add_transform(self, transform: Transform) -> Transform:
        result = super().add_transform(transform)
        for child in self.children:
            child.add_transform(transform)
        return result

    def prepare_render(self):
        super().prepare_render()
        for child in self.children:
            child.parent = self
            child.prepare_render()

    def contains(self, primitive: Primitive) -> bool:
        return any(child.contains(primitive) for child in self.children)

    def primitives(self) -> Iterator[Primitive]:
        """All leaf primitives below this composite, depth first."""
        for child in self.children:
            if isinstance(child, Composite):
                yield from child.primitives()
            else:
                yield child


class Union(Composite):
    """Everything inside any child. The surface is the nearest child surface."""
    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        nearest = None
        for child in self.children:
            hit = child.intersect(ray)
            if hit is not None and (nearest is None or hit.t < nearest.t):
                nearest = hit
        return nearest

    def inside(self, point: Vector3) -> bool:
        return any(child.inside(point) for child in self.children)


class Intersection(Composite):
    """
    Everything inside all children.

    A point on one child's surface is on the composite's surface only if it
    is inside every other child. Each child's crossings along the ray are
    walked in order until one passes that test; the nearest passing crossing
    over all children wins.

    An Intersection with no children is empty: nothing is inside it and no
    ray hits it.
    """
    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        nearest = None
        for child in self.children:
            hit = self._first_boundary_hit(child, ray)
            if hit is not None and (nearest is None or hit.t < nearest.t):
                nearest = hit
        return nearest

    def _first_boundary_hit(self, child: Renderable, ray: Ray) -> Optional[HitRecord]:
        t_start = 0.0
        probe = ray
        for _ in range(MAX_CSG_CROSSINGS):
            hit = child.intersect(probe)
            if hit is None:
                return None
            t = t_start + hit.t
            point = ray.at(t)
            if all(other.inside(point) for other in self.children if other is not child):
                return HitRecord(hit.primitive, t)
            t_start = t + CSG_EPSILON
            probe = ray.advanced(t_start)
        return None

    def inside(self, point: Vector3) -> bool:
        if not self.children:
            return False
        return all(child.inside(point) for child in self.children)


def _complement(cutter: Renderable) -> Optional[Renderable]:
    # not(A or B) == not A and not B, so a union cutter becomes an
    # intersection of its flipped children and keeps its pigment. An empty
    # union removes nothing. not(A and B) has no Intersection form.
    if isinstance(cutter, Union):
        parts = [part for part in map(_complement, cutter.children) if part is not None]
        if not parts:
            return None
        return Intersection(parts, pigment=cutter.pigment)
    if isinstance(cutter, Primitive):
        cutter.inside_out = not cutter.inside_out
        return cutter
    raise TypeError(f"cannot subtract a {type(cutter).__name__}; use primitives or unions")


def difference(base: Renderable, *cutters: Renderable, pigment: Optional[ColorField] = None) -> Intersection:
    """
    Build base minus cutters as an Intersection of base with the complement
    of each cutter. Primitive cutters are flipped in place; a Union cutter is
    replaced by an Intersection of its flipped children.
    """
    parts = [part for part in map(_complement, cutters) if part is not None]
    return Intersection([base, *parts], pigment=pigment)
