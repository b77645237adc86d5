"""
grid.py - Tile grid images: tiles laid out 16 per row with 2px separators.

Geometry for tile size (w, h) and a grid of R rows:
  width  = 16 * w + 15 * 2
  height = R * h + (R - 1) * 2

  SD: 606 px wide, HD: 414 px wide.

Separators and the image background are opaque black. Cells past the last
tile of a partial row are filled with blank (transparent) tiles.

Normalized names:
  grid[_<ident>][_hd].png
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional, Sequence, Tuple

from PIL import Image

from .errors import FontToolError, create_path
from .image import array_to_image, image_to_array, new_canvas, read_image_file, write_image_file
from .tile import Tile, TileKind, tile_kind

logger = logging.getLogger(__name__)

GRID_WIDTH = 16
SEPARATOR_THICKNESS = 2


class InvalidImageDimensionsError(FontToolError):
    def __init__(self, width: int, height: int, path: Optional[str] = None):
        where = f"{path}: " if path else ""
        super().__init__(
            f"{where}image dimensions {width}x{height} do not match valid grid dimensions for any of the tile kinds"
        )
        self.width = width
        self.height = height
        self.path = path


def grid_image_width(kind: TileKind) -> int:
    return GRID_WIDTH * kind.width + (GRID_WIDTH - 1) * SEPARATOR_THICKNESS


def grid_image_height(kind: TileKind, grid_height: int) -> int:
    return grid_height * kind.height + (grid_height - 1) * SEPARATOR_THICKNESS


def kind_for_grid_image_dimensions(width: int, height: int) -> Tuple[TileKind, int]:
    """Return (kind, grid height in rows) for a grid image size."""
    for kind in TileKind:
        if width != grid_image_width(kind):
            continue
        pitch = kind.height + SEPARATOR_THICKNESS
        if height < kind.height or (height - kind.height) % pitch != 0:
            break
        return kind, (height - kind.height) // pitch + 1
    raise InvalidImageDimensionsError(width, height)


def normalized_file_name(kind: TileKind, ident: Optional[str] = None) -> str:
    name = "grid"
    if ident:
        name += f"_{ident}"
    if kind == TileKind.HD:
        name += "_hd"
    return name + ".png"


def normalized_file_path(dir_path: str, kind: TileKind, ident: Optional[str] = None) -> str:
    return os.path.join(dir_path, normalized_file_name(kind, ident))


def image_tile_position(kind: TileKind, x: int, y: int) -> Tuple[int, int]:
    return (
        x * (kind.width + SEPARATOR_THICKNESS),
        y * (kind.height + SEPARATOR_THICKNESS),
    )


class Grid:
    """Flat tile list seen as a 16 column, row-major matrix."""

    def __init__(self, tiles: Sequence[Tile] = ()):
        self.tiles: List[Tile] = list(tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __getitem__(self, pos: Tuple[int, int]) -> Tile:
        x, y = pos
        if not 0 <= x < GRID_WIDTH:
            raise IndexError(f"grid column out of range: {x}")
        return self.tiles[x + y * GRID_WIDTH]

    @property
    def height(self) -> int:
        return -(-len(self.tiles) // GRID_WIDTH)

    @staticmethod
    def index_linear_to_grid(index: int) -> Tuple[int, int]:
        return index % GRID_WIDTH, index // GRID_WIDTH

    def tile_kind(self) -> TileKind:
        return tile_kind(self.tiles)

    def image_dimensions(self) -> Tuple[int, int]:
        kind = self.tile_kind()
        return grid_image_width(kind), grid_image_height(kind, self.height)

    def image(self) -> Image.Image:
        kind = self.tile_kind()
        width, height = self.image_dimensions()
        canvas = new_canvas(width, height)
        blank = Tile.blank(kind)
        for index in range(self.height * GRID_WIDTH):
            tile = self.tiles[index] if index < len(self.tiles) else blank
            px, py = image_tile_position(kind, *self.index_linear_to_grid(index))
            canvas[py:py + kind.height, px:px + kind.width] = tile.array
        return array_to_image(canvas)

    def save_image(self, path: str) -> None:
        write_image_file(self.image(), path)
        logger.info("Wrote %s", path)

    def save_image_norm(self, dir_path: str, ident: Optional[str] = None) -> None:
        create_path(dir_path)
        self.save_image(normalized_file_path(dir_path, self.tile_kind(), ident))

    @classmethod
    def from_image(cls, img: Image.Image) -> "Grid":
        kind, grid_height = kind_for_grid_image_dimensions(img.width, img.height)
        pixels = image_to_array(img)
        tiles = []
        for index in range(grid_height * GRID_WIDTH):
            px, py = image_tile_position(kind, *cls.index_linear_to_grid(index))
            tiles.append(Tile.from_array(pixels[py:py + kind.height, px:px + kind.width]))
        return cls(tiles)

    @classmethod
    def load_image(cls, path: str) -> "Grid":
        img = read_image_file(path)
        try:
            grid = cls.from_image(img)
        except InvalidImageDimensionsError as e:
            raise InvalidImageDimensionsError(e.width, e.height, str(path)) from e
        logger.info("detected %s kind of tiles in %s", grid.tile_kind(), path)
        return grid

    @classmethod
    def load_image_norm(cls, dir_path: str, kind: TileKind, ident: Optional[str] = None) -> "Grid":
        return cls.load_image(normalized_file_path(dir_path, kind, ident))
