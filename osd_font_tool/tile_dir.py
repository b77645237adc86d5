"""
tile_dir.py - Tile directories: one PNG per tile, named from the tile index.

  000.png 001.png ... 255.png

Missing files are gaps: they load as blank tiles, as long as a real tile
exists at a higher index. Trailing gaps are dropped.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from .errors import FontToolError, create_path
from .tile import Tile, TileKind

logger = logging.getLogger(__name__)

MAX_TILES = 512


class NoTileFoundError(FontToolError):
    def __init__(self, dir_path: str):
        super().__init__(f"no tile found in directory: {dir_path}")
        self.dir_path = dir_path


class TileDirKindMismatchError(FontToolError):
    def __init__(self, dir_path: str, expected: TileKind, found: TileKind, path: str):
        super().__init__(
            f"directory should contain a single kind of tile: {dir_path} ({path} is {found}, expected {expected})"
        )
        self.dir_path = dir_path
        self.expected = expected
        self.found = found
        self.path = path


def tile_file_name(index: int) -> str:
    return f"{index:03d}.png"


def load_tiles_from_dir(dir_path: str, max_tiles: int = MAX_TILES) -> List[Tile]:
    slots: List[Optional[Tile]] = []
    kind: Optional[TileKind] = None

    for index in range(max_tiles):
        path = os.path.join(dir_path, tile_file_name(index))
        try:
            tile = Tile.load_image_file(path)
        except FileNotFoundError:
            slots.append(None)
            continue

        if kind is None:
            logger.info("detected %s kind of tiles in %s", tile.kind, dir_path)
            kind = tile.kind
        elif tile.kind != kind:
            raise TileDirKindMismatchError(str(dir_path), kind, tile.kind, path)
        slots.append(tile)

    if kind is None:
        raise NoTileFoundError(str(dir_path))

    last = max(i for i, t in enumerate(slots) if t is not None)
    blank = Tile.blank(kind)
    return [t if t is not None else blank for t in slots[:last + 1]]


def save_tiles_to_dir(tiles: Iterable[Tile], dir_path: str) -> None:
    create_path(dir_path)
    for index, tile in enumerate(tiles):
        tile.save(os.path.join(dir_path, tile_file_name(index)))
    logger.info("Wrote %s", dir_path)
