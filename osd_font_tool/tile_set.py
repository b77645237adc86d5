"""
tile_set.py - SD/HD collection sets.

A set pairs an SD collection with an HD collection under one name. Sets can
be stored as:
  - four bin files (SD base/ext, HD base/ext), explicit or normalized names
  - two grid images, explicit or normalized names
  - a directory holding SD/ and HD/ tile or symbol directories
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from . import bin_file
from .errors import FontToolError
from .grid import Grid
from .symbol import Symbol, into_tiles, tiles_iter, to_symbols
from .symbol_dir import MAX_SYMBOLS, load_symbols_from_dir, save_symbols_to_dir
from .symbol_specs import SymbolSpecs
from .tile import Tile, TileKind, TileKindError, tile_kind
from .tile_dir import MAX_TILES, load_tiles_from_dir, save_tiles_to_dir


class TileSetFromError(FontToolError):
    def __init__(self, message: str, side: TileKind):
        super().__init__(message)
        self.side = side


class TileSetKindMismatchError(TileSetFromError):
    def __init__(self, side: TileKind, error: TileKindError):
        super().__init__(f"mismatched tile kinds in {side} collection: {error}", side)
        self.error = error


class TileSetWrongKindError(TileSetFromError):
    def __init__(self, side: TileKind, found: TileKind):
        super().__init__(f"wrong tile kind in {side} collection: found {found}", side)
        self.found = found


def check_side(tiles, side: TileKind) -> None:
    try:
        kind = tile_kind(tiles)
    except TileKindError as e:
        raise TileSetKindMismatchError(side, e) from e
    if kind != side:
        raise TileSetWrongKindError(side, kind)


class TileSet:
    def __init__(self, sd_tiles: Sequence[Tile], hd_tiles: Sequence[Tile]):
        check_side(sd_tiles, TileKind.SD)
        check_side(hd_tiles, TileKind.HD)
        self.sd_tiles: List[Tile] = list(sd_tiles)
        self.hd_tiles: List[Tile] = list(hd_tiles)

    def __getitem__(self, kind: TileKind) -> List[Tile]:
        return self.sd_tiles if kind == TileKind.SD else self.hd_tiles

    # bin files

    @classmethod
    def load_bin_files(cls, sd_path: str, sd_2_path: str, hd_path: str, hd_2_path: str) -> "TileSet":
        return cls(
            bin_file.load_extended(sd_path, sd_2_path),
            bin_file.load_extended(hd_path, hd_2_path),
        )

    @classmethod
    def load_bin_files_norm(cls, dir_path: str, ident: Optional[str] = None) -> "TileSet":
        return cls(
            bin_file.load_norm(dir_path, TileKind.SD, ident),
            bin_file.load_norm(dir_path, TileKind.HD, ident),
        )

    def save_to_bin_files(self, sd_path: str, sd_2_path: str, hd_path: str, hd_2_path: str) -> None:
        bin_file.save_extended(self.sd_tiles, sd_path, sd_2_path)
        bin_file.save_extended(self.hd_tiles, hd_path, hd_2_path)

    def save_to_bin_files_norm(self, dir_path: str, ident: Optional[str] = None) -> None:
        for kind in TileKind:
            bin_file.save_norm(self[kind], dir_path, ident)

    # tile directories

    @classmethod
    def load_from_dir(cls, dir_path: str, max_tiles: int = MAX_TILES) -> "TileSet":
        return cls(
            load_tiles_from_dir(TileKind.SD.set_dir_path(dir_path), max_tiles),
            load_tiles_from_dir(TileKind.HD.set_dir_path(dir_path), max_tiles),
        )

    def save_tiles_to_dir(self, dir_path: str) -> None:
        for kind in TileKind:
            save_tiles_to_dir(self[kind], kind.set_dir_path(dir_path))

    # grid images

    @classmethod
    def load_from_grids(cls, sd_path: str, hd_path: str) -> "TileSet":
        return GridSet.load_from_images(sd_path, hd_path).to_tile_set()

    @classmethod
    def load_from_grids_norm(cls, dir_path: str, ident: Optional[str] = None) -> "TileSet":
        return GridSet.load_from_images_norm(dir_path, ident).to_tile_set()

    def to_grid_set(self) -> "GridSet":
        return GridSet(Grid(self.sd_tiles), Grid(self.hd_tiles))

    def save_to_grids(self, sd_path: str, hd_path: str) -> None:
        self.to_grid_set().save_images(sd_path, hd_path)

    def save_to_grids_norm(self, dir_path: str, ident: Optional[str] = None) -> None:
        self.to_grid_set().save_images_norm(dir_path, ident)

    def to_symbol_set(self, specs: SymbolSpecs) -> "SymbolSet":
        return SymbolSet(to_symbols(self.sd_tiles, specs), to_symbols(self.hd_tiles, specs))


class SymbolSet:
    def __init__(self, sd_symbols: Sequence[Symbol], hd_symbols: Sequence[Symbol]):
        check_side(list(tiles_iter(sd_symbols)), TileKind.SD)
        check_side(list(tiles_iter(hd_symbols)), TileKind.HD)
        self.sd_symbols: List[Symbol] = list(sd_symbols)
        self.hd_symbols: List[Symbol] = list(hd_symbols)

    def __getitem__(self, kind: TileKind) -> List[Symbol]:
        return self.sd_symbols if kind == TileKind.SD else self.hd_symbols

    @classmethod
    def load_from_dir(cls, dir_path: str, max_symbols: int = MAX_SYMBOLS) -> "SymbolSet":
        return cls(
            load_symbols_from_dir(TileKind.SD.set_dir_path(dir_path), max_symbols),
            load_symbols_from_dir(TileKind.HD.set_dir_path(dir_path), max_symbols),
        )

    def save_to_dir(self, dir_path: str) -> None:
        for kind in TileKind:
            save_symbols_to_dir(self[kind], kind.set_dir_path(dir_path))

    def to_tile_set(self) -> TileSet:
        return TileSet(into_tiles(self.sd_symbols), into_tiles(self.hd_symbols))


class GridSet:
    def __init__(self, sd_grid: Grid, hd_grid: Grid):
        check_side(sd_grid.tiles, TileKind.SD)
        check_side(hd_grid.tiles, TileKind.HD)
        self.sd_grid = sd_grid
        self.hd_grid = hd_grid

    def __getitem__(self, kind: TileKind) -> Grid:
        return self.sd_grid if kind == TileKind.SD else self.hd_grid

    @classmethod
    def load_from_images(cls, sd_path: str, hd_path: str) -> "GridSet":
        return cls(Grid.load_image(sd_path), Grid.load_image(hd_path))

    @classmethod
    def load_from_images_norm(cls, dir_path: str, ident: Optional[str] = None) -> "GridSet":
        return cls(
            Grid.load_image_norm(dir_path, TileKind.SD, ident),
            Grid.load_image_norm(dir_path, TileKind.HD, ident),
        )

    def save_images(self, sd_path: str, hd_path: str) -> None:
        self.sd_grid.save_image(sd_path)
        self.hd_grid.save_image(hd_path)

    def save_images_norm(self, dir_path: str, ident: Optional[str] = None) -> None:
        for kind in TileKind:
            self[kind].save_image_norm(dir_path, ident)

    def to_tile_set(self) -> TileSet:
        return TileSet(self.sd_grid.tiles, self.hd_grid.tiles)
