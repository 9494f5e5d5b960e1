"""Unit tests for CSG composites.

Tests cover:
- Union nearest-hit selection regardless of child order
- Intersection and difference surfaces
- Transform broadcast to children and its order sensitivity
- Pigment inheritance through the parent chain
"""

import pytest

from conftest import assert_vec_close
from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry.composite import Composite, Intersection, Union, difference
from csgtracer.geometry.plane import Plane
from csgtracer.geometry.sphere import Sphere
from csgtracer.materials.color_field import ConstantColor, ObjectColor


def sphere_at(x, y=0.0, z=0.0, **kwargs):
    s = Sphere(**kwargs)
    s.translate(x, y, z)
    return s


class TestUnion:
    """Tests for Union."""

    @pytest.mark.parametrize("near_first", [True, False])
    def test_nearest_hit_regardless_of_order(self, near_first):
        near = sphere_at(5)
        far = sphere_at(10)
        union = Union([near, far] if near_first else [far, near])
        union.prepare_render()
        hit = union.intersect(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)))
        assert hit.primitive is near
        assert hit.t == pytest.approx(4.0)

    def test_miss_and_empty(self, x_ray):
        union = Union()
        union.prepare_render()
        assert union.intersect(x_ray) is None
        assert not union.inside(Vector3(0, 0, 0))

    def test_inside_any(self):
        union = Union([sphere_at(0), sphere_at(3)])
        union.prepare_render()
        assert union.inside(Vector3(3, 0, 0))
        assert not union.inside(Vector3(1.5, 0, 0))

    def test_nested_union_reports_leaf(self, x_ray):
        leaf = Sphere()
        outer = Union([Union([leaf])])
        outer.prepare_render()
        assert outer.intersect(x_ray).primitive is leaf
        assert outer.contains(leaf)
        assert list(outer.primitives()) == [leaf]


class TestIntersection:
    """Tests for Intersection and difference()."""

    def test_lens_surface(self, x_ray):
        a = Sphere()
        b = sphere_at(1)
        lens = Intersection([a, b])
        lens.prepare_render()
        # a's first crossing at x=-1 is outside b; b's entry at x=0 is inside a
        hit = lens.intersect(x_ray)
        assert hit.primitive is b
        assert hit.t == pytest.approx(5.0)
        assert lens.inside(Vector3(0.5, 0, 0))
        assert not lens.inside(Vector3(-0.5, 0, 0))

    def test_empty_intersection_is_empty(self, x_ray):
        empty = Intersection()
        empty.prepare_render()
        assert not empty.inside(Vector3(0, 0, 0))
        assert empty.intersect(x_ray) is None

    def test_disjoint_children_never_hit(self, x_ray):
        empty = Intersection([Sphere(), sphere_at(0, 5)])
        empty.prepare_render()
        assert empty.intersect(x_ray) is None

    def test_difference_keeps_base_surface_outside_cutter(self, x_ray):
        a = Sphere()
        b = sphere_at(1)
        result = difference(a, b)
        result.prepare_render()
        assert b.inside_out
        hit = result.intersect(x_ray)
        assert hit.primitive is a
        assert hit.t == pytest.approx(4.0)

    def test_difference_exposes_cutter_surface(self):
        a = Sphere()
        b = sphere_at(1)
        result = difference(a, b)
        result.prepare_render()
        ray = Ray(Vector3(5, 0, 0), Vector3(-1, 0, 0))
        hit = result.intersect(ray)
        # Enters the bite at x=0, on the cutter's surface, facing back at the ray
        assert hit.primitive is b
        assert hit.t == pytest.approx(5.0)
        assert_vec_close(b.normal(ray.at(hit.t)), (1, 0, 0))
        assert not result.inside(Vector3(0.5, 0, 0))
        assert result.inside(Vector3(-0.5, 0, 0))

    def test_difference_with_union_cutter(self):
        cutters = Union([sphere_at(0, 1), sphere_at(0, -1)])
        result = difference(Sphere(), cutters)
        result.prepare_render()
        assert all(child.inside_out for child in cutters)
        assert result.inside(Vector3(0, 0, 0.5))
        assert not result.inside(Vector3(0, 0.5, 0))

    def test_union_cutter_keeps_its_pigment(self):
        base = Sphere(pigment=ConstantColor(1, 0, 0))
        bite = sphere_at(1)
        cutters = Union([bite, sphere_at(0, 3)], pigment=ConstantColor(0, 0, 1))
        result = difference(base, cutters)
        result.prepare_render()
        assert len(result) == 2
        assert isinstance(result.last(), Intersection)
        ray = Ray(Vector3(5, 0, 0), Vector3(-1, 0, 0))
        hit = result.intersect(ray)
        assert hit.primitive is bite
        assert hit.t == pytest.approx(5.0)
        # The bite's wall takes the cutter's color, not the base's
        assert hit.primitive.eval_pigment(ray.at(hit.t)) == ObjectColor(0, 0, 1)

    def test_empty_union_cutter_removes_nothing(self):
        result = difference(Sphere(), Union())
        result.prepare_render()
        assert len(result) == 1
        assert result.inside(Vector3(0, 0, 0))

    def test_difference_rejects_intersection_cutter(self):
        with pytest.raises(TypeError):
            difference(Sphere(), Intersection([Sphere(), Plane()]))

    def test_half_space_cut(self):
        # Upper hemisphere: sphere intersected with the flipped floor
        dome = Intersection([Sphere(), Plane(inside_out=True)])
        dome.prepare_render()
        down = Ray(Vector3(0, 0, 5), Vector3(0, 0, -1))
        assert dome.intersect(down).t == pytest.approx(4.0)
        up = Ray(Vector3(0, 0, -5), Vector3(0, 0, 1))
        hit = dome.intersect(up)
        # Comes in through the flat face at z=0
        assert isinstance(hit.primitive, Plane)
        assert hit.t == pytest.approx(5.0)


class TestTransformBroadcast:
    """Tests for transforms applied to composites."""

    def test_broadcast_shares_the_handle(self):
        a = Sphere()
        b = Sphere()
        union = Union([a, b])
        shift = union.translate(3, 0, 0)
        assert shift in a.transform_chain.transforms
        assert shift in b.transform_chain.transforms
        union.prepare_render()
        assert a.inside(Vector3(3, 0, 0))
        assert b.inside(Vector3(3, 0, 0))

    def test_children_added_later_are_not_transformed(self):
        a = Sphere()
        union = Union([a])
        union.translate(3, 0, 0)
        late = union.add(Sphere())
        union.prepare_render()
        assert len(late.transform_chain) == 0
        assert late.inside(Vector3(0, 0, 0))
        assert not a.inside(Vector3(0, 0, 0))

    def test_child_transform_then_composite_transform(self):
        child = Sphere()
        child.translate(5, 0, 0)
        union = Union([child])
        union.rotate_z(90)
        union.prepare_render()
        assert child.inside(Vector3(0, 5, 0))

    def test_abstract_composite(self, x_ray):
        with pytest.raises(NotImplementedError):
            Composite([Sphere()]).intersect(x_ray)


class TestPigmentInheritance:
    """Tests for pigment lookup through parents."""

    def test_child_inherits_parent_pigment(self):
        child = Sphere()
        union = Union([child], pigment=ConstantColor(0, 0, 1))
        union.prepare_render()
        assert child.parent is union
        assert child.eval_pigment(Vector3(1, 0, 0)) == ObjectColor(0, 0, 1)

    def test_own_pigment_wins(self):
        child = Sphere(pigment=ConstantColor(1, 0, 0))
        union = Union([child], pigment=ConstantColor(0, 0, 1))
        union.prepare_render()
        assert child.eval_pigment(Vector3(1, 0, 0)) == ObjectColor(1, 0, 0)

    def test_grandparent_pigment(self):
        leaf = Sphere()
        outer = Union([Union([leaf])], pigment=ConstantColor(0, 1, 0))
        outer.prepare_render()
        assert leaf.eval_pigment(Vector3(0, 0, 1)) == ObjectColor(0, 1, 0)

    def test_orphan_without_pigment(self):
        sphere = Sphere()
        sphere.prepare_render()
        assert sphere.parent is None
        assert sphere.eval_pigment(Vector3(1, 0, 0)) is None

    def test_parent_link_is_weak(self):
        child = Sphere()
        union = Union([child])
        union.prepare_render()
        del union
        assert child.parent is None

    def test_pigment_follows_object_transforms(self):
        pigment = ConstantColor(1, 1, 1)
        sphere = Sphere(pigment=pigment)
        shift = sphere.translate(1, 2, 3)
        assert pigment.transform_chain.transforms == [shift]
