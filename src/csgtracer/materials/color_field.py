# csgtracer/materials/color_field.py
from csgtracer.core.transformable import Transformable
from csgtracer.core.vector import Vector3


class ObjectColor:
    """
    Intrinsic color of an object at a point: RGB plus POV-Ray style filter
    and transmit channels.
    """
    __slots__ = ("r", "g", "b", "filter", "transmit")

    def __init__(self, r: float, g: float, b: float, filter: float = 0.0, transmit: float = 0.0):
        self.r = r
        self.g = g
        self.b = b
        self.filter = filter
        self.transmit = transmit

    @property
    def rgb(self) -> Vector3:
        return Vector3(self.r, self.g, self.b)

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.filter, self.transmit))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ObjectColor):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __repr__(self) -> str:
        return f"ObjectColor({self.r}, {self.g}, {self.b}, {self.filter}, {self.transmit})"


class ColorField(Transformable):
    """
    Base class for pigments: a function from a position to an ObjectColor.

    A field has its own transform chain, so where a pattern sits can be
    moved independently of (or together with) the object wearing it.
    Subclasses implement evaluate_local().
    """
    def evaluate_local(self, point: Vector3) -> ObjectColor:
        raise NotImplementedError("evaluate_local() must be implemented by subclasses.")

    def evaluate(self, point: Vector3) -> ObjectColor:
        """Evaluate the field at a world-space point."""
        return self.evaluate_local(self.transform_chain.point_to_local(point))

    def __call__(self, point: Vector3) -> ObjectColor:
        return self.evaluate(point)


class ConstantColor(ColorField):
    """The same color everywhere."""
    def __init__(self, r: float, g: float, b: float, filter: float = 0.0, transmit: float = 0.0):
        super().__init__()
        self.color = ObjectColor(r, g, b, filter, transmit)

    def evaluate_local(self, point: Vector3) -> ObjectColor:
        return self.color

    def evaluate(self, point: Vector3) -> ObjectColor:
        return self.color
