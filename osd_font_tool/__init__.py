"""Conversion tool for HD FPV OSD font tiles (bin files, grid images, tile and symbol directories)."""

__version__ = "0.1.0"

from .errors import FontToolError
from .symbol import Symbol
from .symbol_specs import SymbolSpec, SymbolSpecs
from .tile import Tile, TileKind
from .tile_set import GridSet, SymbolSet, TileSet

__all__ = [
    "FontToolError",
    "GridSet",
    "Symbol",
    "SymbolSet",
    "SymbolSpec",
    "SymbolSpecs",
    "Tile",
    "TileKind",
    "TileSet",
]
