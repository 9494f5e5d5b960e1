# csgtracer/geometry/renderable.py
import weakref
from typing import Optional

from csgtracer.core.ray import Ray
from csgtracer.core.transform import Transform
from csgtracer.core.transformable import Transformable
from csgtracer.core.vector import Vector3
from csgtracer.materials.color_field import ColorField, ObjectColor


class HitRecord:
    """
    Records which leaf primitive a ray struck and at what ray parameter.
    Intersection queries return None instead of a record when nothing is hit.
    """
    __slots__ = ("primitive", "t")

    def __init__(self, primitive: "Primitive", t: float):
        self.primitive = primitive  # Leaf that was actually struck
        self.t = t                  # Ray parameter at intersection

    def __repr__(self) -> str:
        return f"HitRecord({type(self.primitive).__name__}, t={self.t})"


class Renderable(Transformable):
    """
    Abstract class for anything that can be intersected by a ray and that
    has an inside and an outside.

    A renderable may carry a pigment. If it doesn't, pigment lookups fall
    through to the nearest ancestor that does. The parent link is a weak
    reference filled in by the owning composite during prepare_render().
    """
    def __init__(self, pigment: Optional[ColorField] = None):
        super().__init__()
        self.pigment = pigment
        self._parent = None

    @property
    def parent(self) -> Optional["Renderable"]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value: Optional["Renderable"]):
        self._parent = weakref.ref(value) if value is not None else None

    def add_transform(self, transform: Transform) -> Transform:
        """
        Add a transform to this object and to the pigment it has right now,
        so the pattern moves with the object.
        """
        result = super().add_transform(transform)
        if self.pigment is not None:
            self.pigment.add_transform(transform)
        return result

    def prepare_render(self):
        """Must be called between any change to the object and rendering it."""
        super().prepare_render()
        if self.pigment is not None:
            self.pigment.prepare_render()

    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        """Intersect a world-space ray with this object."""
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def inside(self, point: Vector3) -> bool:
        """Check whether a world-space point is inside this object."""
        raise NotImplementedError("inside() must be implemented by subclasses.")

    def contains(self, primitive: "Primitive") -> bool:
        """True if the given leaf is this object or one of its descendants."""
        return primitive is self

    def eval_pigment(self, point: Vector3) -> Optional[ObjectColor]:
        """
        Color at a world-space point: this object's pigment if it has one,
        else the nearest ancestor's, else None.
        """
        if self.pigment is not None:
            return self.pigment.evaluate(point)
        parent = self.parent
        if parent is not None:
            return parent.eval_pigment(point)
        return None


class Primitive(Renderable):
    """
    Leaf renderable whose geometry is defined in its own local frame.
    Subclasses implement intersect_local(), normal_local() and inside_local();
    this class takes care of moving rays and points between frames.

    Setting inside_out swaps inside and outside and flips the normal. A
    CSG difference A - B is Intersection(A, B) with B inside-out.
    """
    def __init__(self, pigment: Optional[ColorField] = None, inside_out: bool = False):
        super().__init__(pigment)
        self.inside_out = inside_out

    def intersect_local(self, ray: Ray) -> Optional[float]:
        """
        Intersect a ray already in local space. Returns the smallest strictly
        positive ray parameter satisfying the shape, or None.
        """
        raise NotImplementedError("intersect_local() must be implemented by subclasses.")

    def normal_local(self, point: Vector3) -> Vector3:
        """
        Outward normal at a local-space point on the surface. The result is
        unspecified for points off the surface.
        """
        raise NotImplementedError("normal_local() must be implemented by subclasses.")

    def inside_local(self, point: Vector3) -> bool:
        """Total function: must answer for every local-space point."""
        raise NotImplementedError("inside_local() must be implemented by subclasses.")

    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        t = self.intersect_local(self.transform_chain.ray_to_local(ray))
        if t is None:
            return None
        return HitRecord(self, t)

    def normal(self, point: Vector3) -> Vector3:
        """Unit normal at a world-space point on the surface."""
        chain = self.transform_chain
        n = chain.normal_to_world(self.normal_local(chain.point_to_local(point)))
        return -n if self.inside_out else n

    def inside(self, point: Vector3) -> bool:
        return self.inside_out != self.inside_local(self.transform_chain.point_to_local(point))
