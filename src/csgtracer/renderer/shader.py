# csgtracer/renderer/shader.py
"""
Shading models. A shader gets the struck object, the whole scene (to cast
shadow rays against), the lights, the hit point, the incoming ray direction
and the surface normal, and returns an RGB contribution. Nothing here clamps;
the pixel buffer does that when it stores the result.
"""
from typing import List, Sequence

from csgtracer.core.vector import Vector3
from csgtracer.geometry.renderable import Renderable
from csgtracer.renderer.light import Light

# POV-Ray's default ambient: dim, but shadows aren't pitch black
AMBIENT_COEFFICIENT = 0.1


class Shader:
    """
    Abstract shading model. Subclasses must implement shade().
    """
    def shade(self, obj: Renderable, scene: Renderable, lights: Sequence[Light],
              point: Vector3, direction: Vector3, normal: Vector3) -> Vector3:
        """
        Parameters:
            obj: Object being shaded (the struck leaf)
            scene: Everything in the scene, including obj
            lights: All lights in the scene
            point: World position of the intersection
            direction: Normalized direction of the incoming ray
            normal: Normalized surface normal at point
        """
        raise NotImplementedError("shade() must be implemented by subclasses.")

    def prepare_render(self):
        pass


class AmbientShader(Shader):
    """
    Fake ambient light: every surface glows at a fixed fraction of its own
    color, standing in for light scattered around the scene.
    """
    def shade(self, obj, scene, lights, point, direction, normal) -> Vector3:
        color = obj.eval_pigment(point)
        if color is None:
            return Vector3(0.0, 0.0, 0.0)
        return color.rgb * AMBIENT_COEFFICIENT


class DiffuseShader(Shader):
    """
    Lambertian reflection. For each light that is not blocked, irradiance
    goes with the cosine of the angle between the normal and the light, and
    lights behind the surface contribute nothing.
    """
    def shade(self, obj, scene, lights, point, direction, normal) -> Vector3:
        result = Vector3(0.0, 0.0, 0.0)
        color = obj.eval_pigment(point)
        if color is None:
            return result
        rgb = color.rgb
        for light in lights:
            ray = light.ray_to(point)
            visible = light.amount_visible(scene, ray)
            if visible <= 0:
                continue
            dot = normal.dot(ray.direction.normalize())
            if dot > 0:
                result = result + rgb * light.color * (dot * visible)
        return result


class CompositeShader(Shader):
    """
    Runs several shaders and adds up their results.
    """
    def __init__(self, shaders: Sequence[Shader] = ()):
        self.shaders: List[Shader] = list(shaders)

    def add(self, shader: Shader) -> Shader:
        self.shaders.append(shader)
        return shader

    def prepare_render(self):
        super().prepare_render()
        for shader in self.shaders:
            shader.prepare_render()

    def shade(self, obj, scene, lights, point, direction, normal) -> Vector3:
        result = Vector3(0.0, 0.0, 0.0)
        for shader in self.shaders:
            result = result + shader.shade(obj, scene, lights, point, direction, normal)
        return result


class POVRayShader(CompositeShader):
    """Ambient plus diffuse, the parts of the POV-Ray model we implement."""
    def __init__(self):
        super().__init__([AmbientShader(), DiffuseShader()])
