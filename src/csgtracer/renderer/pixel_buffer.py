# csgtracer/renderer/pixel_buffer.py
import numpy as np
from numba import njit

from csgtracer.core.vector import Vector3


@njit
def quantize(value, max_value):
    """
    Map a linear channel value to an integer pixel level: <=0 is 0, >=1 is
    max_value, anything in between is value * max_value rounded.
    """
    if value <= 0.0:
        return 0
    if value >= 1.0:
        return max_value
    return int(np.floor(value * max_value + 0.5))


class PixelBuffer:
    """
    Writable image addressed by (column, row, channel).

    Storage is a numpy array of shape (height, width, depth), rows top-first,
    so it can be handed to Pillow or pygame as-is. Pixels nothing was
    written to keep their initial value of 0.
    """
    def __init__(self, width: int, height: int, depth: int = 3, dtype=np.uint8):
        if width <= 0 or height <= 0 or depth <= 0:
            raise ValueError(f"invalid pixel buffer size {width}x{height}x{depth}")
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.integer):
            raise TypeError(f"pixel buffer needs an integer dtype, got {dtype}")
        if np.iinfo(dtype).max > np.iinfo(np.int64).max:
            # quantize() works in int64
            raise TypeError(f"pixel buffer dtype {dtype} has levels beyond int64")
        self.width = width
        self.height = height
        self.depth = depth
        self.max_value = int(np.iinfo(dtype).max)
        self.data = np.zeros((height, width, depth), dtype=dtype)

    def __getitem__(self, index) -> int:
        col, row, channel = index
        return int(self.data[row, col, channel])

    def __setitem__(self, index, value: int):
        col, row, channel = index
        self.data[row, col, channel] = value

    def write_color(self, col: int, row: int, color: Vector3):
        """
        Quantize and store a shaded color. Only as many channels as the
        buffer has are written, so a depth-1 buffer keeps the red channel.
        """
        for channel, value in zip(range(self.depth), color):
            self.data[row, col, channel] = quantize(float(value), self.max_value)

    def clear(self):
        self.data.fill(0)

    @property
    def shape(self):
        return self.data.shape
