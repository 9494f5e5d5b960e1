"""
csgtracer: a small POV-Ray flavoured ray tracer.

Objects are defined in a convenient local frame and placed in the world with
chains of affine transforms, combined with constructive solid geometry, lit
by point lights and viewed through a perspective camera.

Subpackages:
    core: vectors, rays, transforms and transform chains
    materials: pigments (color fields)
    geometry: primitives and CSG composites
    camera: camera models
    renderer: lights, shaders, pixel buffer, image output and the scene loop
"""
from csgtracer.camera.camera import Camera, PerspectiveCamera
from csgtracer.core.ray import Ray
from csgtracer.core.vector import Vector3
from csgtracer.geometry import (
    Composite,
    HitRecord,
    Intersection,
    Plane,
    Primitive,
    Renderable,
    Sphere,
    Union,
    difference,
)
from csgtracer.materials.color_field import ColorField, ConstantColor, ObjectColor
from csgtracer.renderer.light import Light
from csgtracer.renderer.pixel_buffer import PixelBuffer
from csgtracer.renderer.scene import Scene
from csgtracer.renderer.shader import (
    AmbientShader,
    CompositeShader,
    DiffuseShader,
    POVRayShader,
    Shader,
)

__version__ = "0.1.0"

__all__ = [
    "AmbientShader",
    "Camera",
    "ColorField",
    "Composite",
    "CompositeShader",
    "ConstantColor",
    "DiffuseShader",
    "HitRecord",
    "Intersection",
    "Light",
    "ObjectColor",
    "POVRayShader",
    "PerspectiveCamera",
    "PixelBuffer",
    "Plane",
    "Primitive",
    "Ray",
    "Renderable",
    "Scene",
    "Shader",
    "Sphere",
    "Union",
    "Vector3",
    "difference",
]
