# csgtracer/renderer/image_io.py
import os

import numpy as np
from PIL import Image

from csgtracer.renderer.pixel_buffer import PixelBuffer


def to_image(buffer: PixelBuffer) -> Image.Image:
    """
    Convert a pixel buffer to a Pillow image. Depth 1 becomes a grayscale
    ("L") image and depth 3 an "RGB" image; 16-bit buffers are scaled down
    to 8 bits first.
    """
    data = buffer.data
    if buffer.max_value != 255:
        data = (data.astype(np.float64) * (255.0 / buffer.max_value) + 0.5).astype(np.uint8)
    if buffer.depth == 1:
        return Image.fromarray(np.ascontiguousarray(data[:, :, 0]))
    if buffer.depth == 3:
        return Image.fromarray(np.ascontiguousarray(data))
    raise ValueError(f"Cannot convert a {buffer.depth}-channel buffer to an image")


def save_image(buffer: PixelBuffer, path: str) -> str:
    """
    Write a pixel buffer to disk. The format comes from the extension:
    .ppm/.pgm give the netpbm binary formats, anything Pillow knows works too.

    Raises:
        ValueError: If the extension is missing or the buffer depth is unsupported
    """
    _, ext = os.path.splitext(path)
    if not ext:
        raise ValueError(f"Cannot infer image format from {path!r}")
    image = to_image(buffer)
    if ext.lower() == ".pgm" and image.mode != "L":
        image = image.convert("L")
    image.save(path)
    return path


def to_surface(buffer: PixelBuffer):
    """
    Build a pygame surface from an RGB pixel buffer for on-screen preview.
    """
    import pygame

    image = to_image(buffer)
    if image.mode != "RGB":
        image = image.convert("RGB")
    # pygame's surfarray is indexed [x, y]
    return pygame.surfarray.make_surface(np.asarray(image).swapaxes(0, 1))
