# csgtracer/renderer/scene.py
import logging
import time
from typing import Callable, Iterator, List, Optional

import numpy as np

from csgtracer.camera.camera import Camera
from csgtracer.geometry.composite import Union
from csgtracer.geometry.renderable import Renderable
from csgtracer.renderer.light import Light
from csgtracer.renderer.pixel_buffer import PixelBuffer
from csgtracer.renderer.shader import POVRayShader, Shader

logger = logging.getLogger(__name__)


class Scene:
    """
    Manager for the whole rendering process.

    1. The caller sets up the scene: objects (with pigments and transforms),
       lights, a camera and optionally a shader.
    2. render() calls prepare_render() on everything, filling every cached
       matrix, then loops over the pixels. For each pixel it builds the camera
       ray, finds the nearest object, shades it and stores the color.
    3. The caller may then change anything (typically the parameters of a
       transform handle) and render again.

    Once prepare_render() has run, nothing in the pixel loop writes to the
    scene; the only writes go to the pixel buffer.
    """
    def __init__(self, camera: Optional[Camera] = None, shader: Optional[Shader] = None):
        self.objects = Union()
        self.lights: List[Light] = []
        self.shader: Shader = shader if shader is not None else POVRayShader()
        self.camera = camera

    def add_object(self, obj: Renderable) -> Renderable:
        return self.objects.add(obj)

    def add_light(self, light: Light) -> Light:
        self.lights.append(light)
        return light

    def set_camera(self, camera: Camera) -> Camera:
        self.camera = camera
        return camera

    def set_shader(self, shader: Shader) -> Shader:
        self.shader = shader
        return shader

    def prepare_render(self):
        if self.camera is None:
            raise ValueError("Scene has no camera; call set_camera() before rendering")
        self.objects.prepare_render()
        for light in self.lights:
            light.prepare_render()
        self.shader.prepare_render()
        self.camera.prepare_render()

    def render(self, width: int, height: int, pixel_buffer: Optional[PixelBuffer] = None,
               depth: int = 3, dtype=np.uint8) -> PixelBuffer:
        """
        Render the scene into pixel_buffer, or into a new buffer of the given
        size, depth and dtype. Returns the buffer written to.
        """
        if pixel_buffer is None:
            pixel_buffer = PixelBuffer(width, height, depth, dtype)
        elif (pixel_buffer.width, pixel_buffer.height) != (width, height):
            raise ValueError(f"{pixel_buffer.width}x{pixel_buffer.height} buffer cannot "
                             f"hold a {width}x{height} render")
        self.prepare_render()

        start = time.perf_counter()
        hits = 0
        for row in range(height):
            y = (row + 0.5) / height - 0.5
            for col in range(width):
                x = (col + 0.5) / width - 0.5
                if self.render_pixel(x, y, col, row, pixel_buffer):
                    hits += 1
        logger.debug("Rendered %dx%d in %.3fs, %d pixels hit",
                     width, height, time.perf_counter() - start, hits)
        return pixel_buffer

    def render_pixel(self, x: float, y: float, col: int, row: int, pixel_buffer: PixelBuffer) -> bool:
        """
        Trace one camera ray through image-plane point (x, y) and store the
        shaded color at (col, row). Returns False and leaves the pixel alone
        when the ray hits nothing.
        """
        ray = self.camera.project(x, y)
        hit = self.objects.intersect(ray)
        if hit is None:
            return False
        point = ray.at(hit.t)
        primitive = hit.primitive
        color = self.shader.shade(primitive, self.objects, self.lights, point,
                                  ray.direction.normalize(), primitive.normal(point))
        pixel_buffer.write_color(col, row, color)
        return True

    def render_frames(self, width: int, height: int, frame_count: int,
                      update: Callable[[int], None], **buffer_args) -> Iterator[PixelBuffer]:
        """
        Animation loop: for each frame, let `update` mutate the scene (usually
        transform handles), then render a fresh buffer and yield it.
        """
        for frame in range(frame_count):
            update(frame)
            logger.info("Rendering frame %d/%d", frame + 1, frame_count)
            yield self.render(width, height, **buffer_args)
