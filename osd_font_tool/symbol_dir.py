"""
symbol_dir.py - Symbol directories: one PNG per symbol, named from its tile slots.

  000.png        single tile symbol at tile index 0
  030-032.png    symbol spanning tiles 30, 31 and 32 (inclusive end)

Loading walks tile indices from 0. A file whose start index falls inside a
symbol already consumed is an overlap. Missing positions are gaps filled
with blank single tile symbols, trailing gaps are dropped.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .errors import FileError, FontToolError, create_path
from .image import write_image_file
from .symbol import Symbol
from .tile import TileKind

logger = logging.getLogger(__name__)

MAX_SYMBOLS = 512

FILE_NAME_RE = re.compile(r"\A(?P<start>\d{3})(?:-(?P<end>\d{3}))?\.png\Z")


class OverlappingSymbolFilesError(FontToolError):
    def __init__(self, path_a: str, path_b: str):
        super().__init__(f"overlapping symbol files: `{path_a}` and `{path_b}`")
        self.path_a = path_a
        self.path_b = path_b


class SymbolSpanDoesNotMatchNameError(FontToolError):
    def __init__(self, path: str, real_span: int, name_span: int):
        super().__init__(f"symbol span {real_span} does not match span {name_span} from file name {path}")
        self.path = path
        self.real_span = real_span
        self.name_span = name_span


class NoSymbolFoundError(FontToolError):
    def __init__(self, dir_path: str):
        super().__init__(f"no symbol found in directory: {dir_path}")
        self.dir_path = dir_path


class SymbolDirKindMismatchError(FontToolError):
    def __init__(self, dir_path: str, expected: TileKind, found: TileKind, path: str):
        super().__init__(
            f"directory should contain a single kind of tile: {dir_path} ({path} is {found}, expected {expected})"
        )
        self.dir_path = dir_path
        self.expected = expected
        self.found = found
        self.path = path


@dataclass
class SymbolFile:
    path: str
    start_index: int
    end_index: int   # inclusive

    @property
    def span(self) -> int:
        return self.end_index - self.start_index + 1


def parse_file_name(name: str) -> Optional[SymbolFile]:
    m = FILE_NAME_RE.match(name)
    if not m:
        return None
    start = int(m.group("start"))
    end = int(m.group("end")) if m.group("end") is not None else start
    return SymbolFile(name, start, end)


def symbol_file_name(start_index: int, span: int) -> str:
    if span == 1:
        return f"{start_index:03d}.png"
    return f"{start_index:03d}-{start_index + span - 1:03d}.png"


def scan_symbol_files(dir_path: str) -> Dict[int, SymbolFile]:
    files: Dict[int, SymbolFile] = {}
    try:
        names = sorted(os.listdir(dir_path))
    except OSError as e:
        raise FileError("reading", str(dir_path), e) from e
    for name in names:
        path = os.path.join(dir_path, name)
        if not os.path.isfile(path):
            continue
        sym_file = parse_file_name(name)
        if sym_file is None:
            continue
        sym_file.path = path
        existing = files.get(sym_file.start_index)
        if existing is not None:
            raise OverlappingSymbolFilesError(existing.path, path)
        files[sym_file.start_index] = sym_file
    return files


def load_symbols_from_dir(dir_path: str, max_symbols: int = MAX_SYMBOLS) -> List[Symbol]:
    files = scan_symbol_files(dir_path)

    slots: List[Optional[Symbol]] = []
    kind: Optional[TileKind] = None
    tile_index = 0

    for _ in range(max_symbols):
        sym_file = files.get(tile_index)
        symbol = None
        if sym_file is not None:
            try:
                symbol = Symbol.load_image_file(sym_file.path)
            except FileNotFoundError:
                symbol = None

        if symbol is None:
            slots.append(None)
            tile_index += 1
            continue

        if symbol.span != sym_file.span:
            raise SymbolSpanDoesNotMatchNameError(sym_file.path, symbol.span, sym_file.span)

        for inner in range(tile_index + 1, tile_index + symbol.span):
            if inner in files:
                raise OverlappingSymbolFilesError(sym_file.path, files[inner].path)

        if kind is None:
            logger.info("detected %s kind of tiles in %s", symbol.tile_kind, dir_path)
            kind = symbol.tile_kind
        elif symbol.tile_kind != kind:
            raise SymbolDirKindMismatchError(str(dir_path), kind, symbol.tile_kind, sym_file.path)

        slots.append(symbol)
        tile_index += symbol.span

    if kind is None:
        raise NoSymbolFoundError(str(dir_path))

    last = max(i for i, s in enumerate(slots) if s is not None)
    blank = Symbol.blank(kind)
    return [s if s is not None else blank for s in slots[:last + 1]]


def save_symbols_to_dir(symbols: Iterable[Symbol], dir_path: str) -> None:
    create_path(dir_path)
    tile_index = 0
    for symbol in symbols:
        path = os.path.join(dir_path, symbol_file_name(tile_index, symbol.span))
        write_image_file(symbol.image(), path)
        tile_index += symbol.span
    logger.info("Wrote %s", dir_path)
