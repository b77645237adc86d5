"""
convert.py - Conversions between collection formats, driven by prefixed arguments.

Single collection arguments:
  bin:<path>            (alias djibin:)   256 tile raw RGBA bin file
  tilegrid:<path.png>                     grid image
  tiledir:<dir>                           one PNG per tile
  symdir:<dir>                            one PNG per symbol
  avatar:<path.png>                       single column avatar image

Set arguments:
  binset:<sd>:<sd_2>:<hd>:<hd_2>   (alias djibinset:)
  binsetnorm:<dir>[:<ident>]       (alias djibinsetnorm:)
  tilesetgrids:<sd.png>:<hd.png>
  tilesetgridsnorm:<dir>[:<ident>]
  tilesetdir:<dir>
  symsetdir:<dir>
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from . import avatar_file, bin_file
from .errors import FontToolError
from .grid import Grid
from .symbol import into_tiles, to_symbols
from .symbol_dir import MAX_SYMBOLS, load_symbols_from_dir, save_symbols_to_dir
from .symbol_specs import SymbolSpecs
from .tile import Tile
from .tile_dir import MAX_TILES, load_tiles_from_dir, save_tiles_to_dir
from .tile_set import SymbolSet, TileSet

logger = logging.getLogger(__name__)

DEFAULT_SYMBOL_SPECS_FILE = "sym_specs.yaml"

PREFIX_ALIASES = {
    "djibin": "bin",
    "djibinset": "binset",
    "djibinsetnorm": "binsetnorm",
}

SINGLE_PREFIXES = ("bin", "tilegrid", "tiledir", "symdir", "avatar")
IMAGE_PREFIXES = ("tilegrid", "avatar")
SET_PREFIXES = ("binset", "binsetnorm", "tilesetgrids", "tilesetgridsnorm", "tilesetdir", "symsetdir")


class InvalidConvertArgError(FontToolError):
    def __init__(self, arg: str, message: str):
        super().__init__(f"invalid argument `{arg}`: {message}")
        self.arg = arg
        self.message = message


class InvalidImageFileExtensionError(InvalidConvertArgError):
    def __init__(self, path: str, extension: Optional[str]):
        if extension:
            message = f"invalid image file extension `{extension}`"
        else:
            message = "image path has no file extension"
        super().__init__(path, message)
        self.path = path
        self.extension = extension


class InvalidConversionError(FontToolError):
    def __init__(self, from_prefix: str, to_prefix: str):
        super().__init__(f"invalid conversion from {from_prefix} to {to_prefix}")
        self.from_prefix = from_prefix
        self.to_prefix = to_prefix


@dataclass
class ConvertArg:
    prefix: str
    path: str


@dataclass
class ConvertSetArg:
    prefix: str
    paths: List[str]
    ident: Optional[str] = None


def split_prefix(arg: str):
    prefix, sep, rest = arg.partition(":")
    if not sep:
        raise InvalidConvertArgError(arg, "no prefix")
    return PREFIX_ALIASES.get(prefix, prefix), rest


def check_image_file_extension(path: str) -> None:
    ext = os.path.splitext(path)[1]
    if ext != ".png":
        raise InvalidImageFileExtensionError(path, ext[1:] or None)


def parse_convert_arg(arg: str) -> ConvertArg:
    prefix, path = split_prefix(arg)
    if prefix not in SINGLE_PREFIXES:
        raise InvalidConvertArgError(arg, f"invalid prefix: {prefix}")
    if not path:
        raise InvalidConvertArgError(arg, "missing path")
    if prefix in IMAGE_PREFIXES:
        check_image_file_extension(path)
    return ConvertArg(prefix, path)


def _split_paths(arg: str, rest: str, count: int) -> List[str]:
    paths = rest.split(":")
    if len(paths) < count:
        raise InvalidConvertArgError(arg, "too few arguments")
    if len(paths) > count:
        raise InvalidConvertArgError(arg, "too many arguments")
    return paths


def parse_convert_set_arg(arg: str) -> ConvertSetArg:
    prefix, rest = split_prefix(arg)
    if prefix not in SET_PREFIXES:
        raise InvalidConvertArgError(arg, f"invalid prefix: {prefix}")

    if prefix == "binset":
        return ConvertSetArg(prefix, _split_paths(arg, rest, 4))
    if prefix == "tilesetgrids":
        paths = _split_paths(arg, rest, 2)
        for path in paths:
            check_image_file_extension(path)
        return ConvertSetArg(prefix, paths)
    if prefix in ("binsetnorm", "tilesetgridsnorm"):
        parts = rest.split(":")
        if len(parts) > 2:
            raise InvalidConvertArgError(arg, "too many arguments")
        if not parts[0]:
            raise InvalidConvertArgError(arg, "too few arguments")
        ident = parts[1] if len(parts) == 2 and parts[1] else None
        return ConvertSetArg(prefix, [parts[0]], ident)

    if not rest:
        raise InvalidConvertArgError(arg, "too few arguments")
    return ConvertSetArg(prefix, [rest])


class LazySymbolSpecs:
    """Loads the symbol specs file on first use only."""

    def __init__(self, path: str):
        self.path = path
        self._specs: Optional[SymbolSpecs] = None

    def get(self) -> SymbolSpecs:
        if self._specs is None:
            logger.debug("loading symbol specs from %s", self.path)
            self._specs = SymbolSpecs.load_file(self.path)
        return self._specs


def load_collection(arg: ConvertArg) -> List[Tile]:
    if arg.prefix == "bin":
        return bin_file.load(arg.path)
    if arg.prefix == "tilegrid":
        return Grid.load_image(arg.path).tiles
    if arg.prefix == "tiledir":
        return load_tiles_from_dir(arg.path, MAX_TILES)
    if arg.prefix == "symdir":
        return into_tiles(load_symbols_from_dir(arg.path, MAX_SYMBOLS))
    return avatar_file.load(arg.path)


def save_collection(tiles: Sequence[Tile], arg: ConvertArg, specs: LazySymbolSpecs) -> None:
    if arg.prefix == "bin":
        bin_file.save(tiles, arg.path)
    elif arg.prefix == "tilegrid":
        Grid(tiles).save_image(arg.path)
    elif arg.prefix == "tiledir":
        save_tiles_to_dir(tiles, arg.path)
    elif arg.prefix == "symdir":
        save_symbols_to_dir(to_symbols(tiles, specs.get()), arg.path)
    else:
        avatar_file.save(tiles, arg.path)


def convert(from_arg: str, to_arg: str, symbol_specs_file: str = DEFAULT_SYMBOL_SPECS_FILE) -> None:
    src = parse_convert_arg(from_arg)
    dst = parse_convert_arg(to_arg)
    if src.prefix == dst.prefix:
        raise InvalidConversionError(src.prefix, dst.prefix)
    logger.info("converting %s -> %s", from_arg, to_arg)

    tiles = load_collection(src)
    save_collection(tiles, dst, LazySymbolSpecs(symbol_specs_file))


SET_LOADERS: dict = {
    "binset": lambda a: TileSet.load_bin_files(*a.paths),
    "binsetnorm": lambda a: TileSet.load_bin_files_norm(a.paths[0], a.ident),
    "tilesetgrids": lambda a: TileSet.load_from_grids(*a.paths),
    "tilesetgridsnorm": lambda a: TileSet.load_from_grids_norm(a.paths[0], a.ident),
    "tilesetdir": lambda a: TileSet.load_from_dir(a.paths[0], MAX_TILES),
    "symsetdir": lambda a: SymbolSet.load_from_dir(a.paths[0], MAX_SYMBOLS).to_tile_set(),
}


def save_tile_set(tile_set: TileSet, arg: ConvertSetArg, specs: LazySymbolSpecs) -> None:
    if arg.prefix == "binset":
        tile_set.save_to_bin_files(*arg.paths)
    elif arg.prefix == "binsetnorm":
        tile_set.save_to_bin_files_norm(arg.paths[0], arg.ident)
    elif arg.prefix == "tilesetgrids":
        tile_set.save_to_grids(*arg.paths)
    elif arg.prefix == "tilesetgridsnorm":
        tile_set.save_to_grids_norm(arg.paths[0], arg.ident)
    elif arg.prefix == "tilesetdir":
        tile_set.save_tiles_to_dir(arg.paths[0])
    else:
        tile_set.to_symbol_set(specs.get()).save_to_dir(arg.paths[0])


def convert_set(from_arg: str, to_arg: str, symbol_specs_file: str = DEFAULT_SYMBOL_SPECS_FILE) -> None:
    src = parse_convert_set_arg(from_arg)
    dst = parse_convert_set_arg(to_arg)
    logger.info("converting %s -> %s", from_arg, to_arg)

    load: Callable[[ConvertSetArg], TileSet] = SET_LOADERS[src.prefix]
    save_tile_set(load(src), dst, LazySymbolSpecs(symbol_specs_file))
