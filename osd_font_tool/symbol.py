"""
symbol.py - Symbols: glyphs spanning one or more consecutive tile slots.

A symbol image is a horizontal strip of its tiles, one tile height tall and
span * tile width wide.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from PIL import Image

from .errors import FontToolError
from .image import array_to_image, image_to_array, new_canvas, read_image_file
from .symbol_specs import SymbolSpecs
from .tile import Tile, TileKind, tile_kind


class InvalidImageWidthError(FontToolError):
    def __init__(self, kind: TileKind, width: int):
        super().__init__(f"invalid tile image width for {kind} tile kind: {width}")
        self.kind = kind
        self.width = width


class Symbol:
    __slots__ = ("tile_kind", "tiles")

    def __init__(self, tiles: Sequence[Tile]):
        tiles = tuple(tiles)
        self.tile_kind = tile_kind(tiles)
        self.tiles = tiles

    @classmethod
    def from_tile(cls, tile: Tile) -> "Symbol":
        return cls((tile,))

    @classmethod
    def blank(cls, kind: TileKind) -> "Symbol":
        return cls.from_tile(Tile.blank(kind))

    @classmethod
    def from_image(cls, img: Image.Image) -> "Symbol":
        kind = TileKind.for_height(img.height)
        if img.width == 0 or img.width % kind.width != 0:
            raise InvalidImageWidthError(kind, img.width)
        pixels = image_to_array(img)
        tiles = []
        for x in range(0, img.width, kind.width):
            tiles.append(Tile.from_array(pixels[:, x:x + kind.width]))
        return cls(tiles)

    @classmethod
    def load_image_file(cls, path: str) -> "Symbol":
        return cls.from_image(read_image_file(path))

    @property
    def span(self) -> int:
        return len(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.tiles == other.tiles

    def __hash__(self) -> int:
        return hash(self.tiles)

    def __repr__(self) -> str:
        return f"Symbol({self.tile_kind}, span={self.span})"

    def image(self) -> Image.Image:
        kind = self.tile_kind
        canvas = new_canvas(self.span * kind.width, kind.height, background=(0, 0, 0, 0))
        for i, tile in enumerate(self.tiles):
            x = i * kind.width
            canvas[:, x:x + kind.width] = tile.array
        return array_to_image(canvas)


def tiles_iter(symbols: Iterable[Symbol]) -> Iterator[Tile]:
    for symbol in symbols:
        yield from symbol.tiles


def into_tiles(symbols: Iterable[Symbol]) -> List[Tile]:
    return list(tiles_iter(symbols))


def to_symbols(tiles: Sequence[Tile], specs: SymbolSpecs) -> List[Symbol]:
    """Group a flat tile collection into symbols.

    A spec starting at the current tile index consumes `span` tiles, any
    other position becomes a single tile symbol. Specs are not checked for
    overlap: a spec starting inside a span that was already consumed is
    never reached, and a span running past the end is cut at the end.
    """
    symbols: List[Symbol] = []
    index = 0
    while index < len(tiles):
        spec = specs.find_start_index(index)
        if spec is None:
            symbols.append(Symbol.from_tile(tiles[index]))
            index += 1
        else:
            symbols.append(Symbol(tiles[spec.start_tile_index:spec.end_tile_index]))
            index += spec.span
    return symbols
