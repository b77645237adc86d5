"""
image.py - Pillow/numpy glue: read and write RGBA images, convert to pixel arrays.

Every pixel array handled by the codecs is a (height, width, 4) uint8 array.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from .errors import FontToolError


class ImageReadError(FontToolError):
    def __init__(self, path: str, error: Exception):
        super().__init__(f"failed to decode image file `{path}`: {error}")
        self.path = path
        self.error = error


class ImageWriteError(FontToolError):
    def __init__(self, path: str, error: Exception):
        super().__init__(f"failed to write image {path}: {error}")
        self.path = path
        self.error = error


def read_image_file(path: str) -> Image.Image:
    # FileNotFoundError is left alone: directory scans treat it as a gap.
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except FileNotFoundError:
        raise
    except OSError as e:
        raise ImageReadError(str(path), e) from e


def write_image_file(img: Image.Image, path: str) -> None:
    try:
        img.save(path)
    except (OSError, ValueError) as e:
        raise ImageWriteError(str(path), e) from e


def image_to_array(img: Image.Image) -> np.ndarray:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return np.asarray(img, dtype=np.uint8)


def array_to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def new_canvas(width: int, height: int, background=(0, 0, 0, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = background
    return canvas
