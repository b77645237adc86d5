"""
avatar_file.py - Avatar images: the 256 tiles of a font stacked in a single column.

  SD: 36 x 13824 px, HD: 24 x 9216 px. No separators.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .errors import FontToolError
from .image import array_to_image, image_to_array, new_canvas, read_image_file, write_image_file
from .tile import Tile, TileKind, tile_kind

logger = logging.getLogger(__name__)

TILE_COUNT = 256


class InvalidAvatarDimensionsError(FontToolError):
    def __init__(self, path: str, width: int, height: int):
        super().__init__(f"file {path} has dimensions ({width}x{height}) which do not match any known tile kind")
        self.path = path
        self.width = width
        self.height = height


class WrongCollectionSizeError(FontToolError):
    def __init__(self, size: int):
        super().__init__(f"wrong tile collection size, an avatar file must contain {TILE_COUNT} tiles: {size}")
        self.size = size


def avatar_image_dimensions(kind: TileKind) -> Tuple[int, int]:
    return kind.width, TILE_COUNT * kind.height


def load(path: str) -> List[Tile]:
    img = read_image_file(path)
    for kind in TileKind:
        if img.size == avatar_image_dimensions(kind):
            break
    else:
        raise InvalidAvatarDimensionsError(str(path), img.width, img.height)
    logger.info("detected %s kind of tiles in %s", kind, path)

    pixels = image_to_array(img)
    return [
        Tile.from_array(pixels[i * kind.height:(i + 1) * kind.height])
        for i in range(TILE_COUNT)
    ]


def save(tiles: Sequence[Tile], path: str) -> None:
    if len(tiles) < TILE_COUNT:
        raise WrongCollectionSizeError(len(tiles))
    if len(tiles) > TILE_COUNT:
        logger.warning("collection has %d tiles, only the first %d are saved to %s", len(tiles), TILE_COUNT, path)
        tiles = tiles[:TILE_COUNT]
    kind = tile_kind(tiles)

    width, height = avatar_image_dimensions(kind)
    canvas = new_canvas(width, height, background=(0, 0, 0, 0))
    for i, tile in enumerate(tiles):
        canvas[i * kind.height:(i + 1) * kind.height] = tile.array
    write_image_file(array_to_image(canvas), path)
    logger.info("Wrote %s", path)
