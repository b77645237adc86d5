"""
tile.py - Tile kinds, the Tile value type and uniform-kind queries over tile collections.

Kinds:
  SD  36x54 px  (7776 bytes of raw RGBA)
  HD  24x36 px  (3456 bytes of raw RGBA)

A kind is never declared, it is always inferred from a byte size or image
dimensions matching one of the two geometries.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

import numpy as np
from PIL import Image

from .errors import FontToolError
from .image import array_to_image, image_to_array, read_image_file, write_image_file


class InvalidSizeError(FontToolError):
    def __init__(self, size: int):
        super().__init__(f"number of RGBA bytes does not match any tile kind: {size}B")
        self.size = size


class InvalidDimensionsError(FontToolError):
    def __init__(self, width: int, height: int):
        super().__init__(f"dimensions do not match any known tile kind: {width}x{height}")
        self.width = width
        self.height = height


class InvalidHeightError(FontToolError):
    def __init__(self, height: int):
        super().__init__(f"height does not match any tile kind: {height}")
        self.height = height


class TileImageDimensionsError(FontToolError):
    def __init__(self, path: str, width: int, height: int):
        super().__init__(f"invalid tile image size in file {path}: {width}x{height}")
        self.path = path
        self.width = width
        self.height = height


class TileKindError(FontToolError):
    pass


class EmptyContainerError(TileKindError):
    def __init__(self):
        super().__init__("cannot determine tile kind from empty container")


class MultipleTileKindsError(TileKindError):
    def __init__(self):
        super().__init__("container includes multiple tile kinds")


class LoadedDoesNotMatchRequestedError(TileKindError):
    def __init__(self, requested: "TileKind", loaded: "TileKind"):
        super().__init__(f"loaded kind does not match requested: loaded {loaded}, requested {requested}")
        self.requested = requested
        self.loaded = loaded


class TileKind(Enum):
    SD = (36, 54)
    HD = (24, 36)

    def __str__(self) -> str:
        return self.name

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.value

    @property
    def raw_rgba_size(self) -> int:
        return self.width * self.height * 4

    @property
    def set_dir_name(self) -> str:
        return self.name

    def set_dir_path(self, base_dir: str) -> str:
        return os.path.join(base_dir, self.set_dir_name)

    @classmethod
    def for_size_bytes(cls, size: int) -> "TileKind":
        for kind in cls:
            if size == kind.raw_rgba_size:
                return kind
        raise InvalidSizeError(size)

    @classmethod
    def for_dimensions(cls, width: int, height: int) -> "TileKind":
        for kind in cls:
            if (width, height) == kind.dimensions:
                return kind
        raise InvalidDimensionsError(width, height)

    @classmethod
    def for_height(cls, height: int) -> "TileKind":
        for kind in cls:
            if height == kind.height:
                return kind
        raise InvalidHeightError(height)


@dataclass(frozen=True)
class Tile:
    kind: TileKind
    data: bytes   # raw RGBA, row-major, kind.raw_rgba_size bytes

    def __post_init__(self):
        if len(self.data) != self.kind.raw_rgba_size:
            raise InvalidSizeError(len(self.data))

    def __repr__(self) -> str:
        return f"Tile({self.kind})"

    @classmethod
    def blank(cls, kind: TileKind) -> "Tile":
        return cls(kind, bytes(kind.raw_rgba_size))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Tile":
        return cls(TileKind.for_size_bytes(len(data)), bytes(data))

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Tile":
        height, width = pixels.shape[:2]
        kind = TileKind.for_dimensions(width, height)
        return cls(kind, np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())

    @classmethod
    def from_image(cls, img: Image.Image) -> "Tile":
        return cls.from_array(image_to_array(img))

    @classmethod
    def load_image_file(cls, path: str) -> "Tile":
        img = read_image_file(path)
        try:
            return cls.from_image(img)
        except InvalidDimensionsError as e:
            raise TileImageDimensionsError(str(path), e.width, e.height) from e

    @property
    def array(self) -> np.ndarray:
        """Read-only (height, width, 4) view over the tile pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.kind.height, self.kind.width, 4)

    def image(self) -> Image.Image:
        return array_to_image(self.array)

    def save(self, path: str) -> None:
        write_image_file(self.image(), path)


def tile_kind(tiles: Iterable[Tile]) -> TileKind:
    """Return the single kind shared by all tiles."""
    it = iter(tiles)
    first = next(it, None)
    if first is None:
        raise EmptyContainerError()
    if any(t.kind != first.kind for t in it):
        raise MultipleTileKindsError()
    return first.kind


def check_tile_kind(tiles: Iterable[Tile], requested: TileKind) -> TileKind:
    loaded = tile_kind(tiles)
    if loaded != requested:
        raise LoadedDoesNotMatchRequestedError(requested, loaded)
    return loaded
