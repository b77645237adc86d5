"""
bin_file.py - Raw RGBA bin files: exactly 256 tiles of one kind, back to back.

Layout:
  tile 0 RGBA bytes | tile 1 RGBA bytes | ... | tile 255 RGBA bytes

  SD: 256 * 36 * 54 * 4 = 1990656 bytes
  HD: 256 * 24 * 36 * 4 =  884736 bytes

Collections of more than 256 tiles are stored as a base file plus an
extension file holding tiles 256..511.

Normalized names:
  font[_<ident>][_hd][_2].bin
  e.g. font.bin, font_2.bin, font_hd.bin, font_hd_2.bin, font_ardu_hd_2.bin
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from .errors import FileError, FontToolError, create_path, open_file
from .tile import Tile, TileKind, tile_kind

logger = logging.getLogger(__name__)

TILE_COUNT = 256
EXTENDED_TILE_COUNT = TILE_COUNT * 2


class InvalidBinFileSizeError(FontToolError):
    def __init__(self, path: str, size: int):
        super().__init__(f"{path}: file size does not match a valid bin file size: {size}B")
        self.path = path
        self.size = size


class OutOfBoundsError(FontToolError):
    def __init__(self, pos: int):
        super().__init__(f"cannot seek outside of the file: tile {pos}")
        self.pos = pos


class TileKindMismatchError(FontToolError):
    def __init__(self, written: TileKind, writing: TileKind):
        super().__init__(f"mismatched tile kind: file contains {written} tiles, writing {writing} tile")
        self.written = written
        self.writing = writing


class MaximumTilesReachedError(FontToolError):
    def __init__(self):
        super().__init__(f"maximum number of tiles reached: a bin file can only contain {TILE_COUNT} tiles")


class NotEnoughTilesError(FontToolError):
    def __init__(self, writer: "BinFileWriter"):
        super().__init__(
            f"not enough tiles, a bin file must contain exactly {TILE_COUNT} tiles: {writer.tile_count} written"
        )
        self.writer = writer


class FillRemainingSpaceError(FontToolError):
    def __init__(self):
        super().__init__("cannot fill remaining space: no tile written yet, tile kind unknown")


class ExtendedKindMismatchError(FontToolError):
    def __init__(self, path: str, expected: TileKind, found: TileKind):
        super().__init__(f"{path}: contains {found} tiles, expected {expected} tiles like the base file")
        self.path = path
        self.expected = expected
        self.found = found


class SeekFrom(Enum):
    START = 0
    END = 1      # offset 0 is the last tile
    CURRENT = 2


class FontPart(Enum):
    BASE = 0
    EXT = 1


def bin_file_size(kind: TileKind) -> int:
    return kind.raw_rgba_size * TILE_COUNT


def kind_for_bin_file_size(size: int) -> Optional[TileKind]:
    for kind in TileKind:
        if size == bin_file_size(kind):
            return kind
    return None


def normalized_file_name(kind: TileKind, ident: Optional[str] = None, part: FontPart = FontPart.BASE) -> str:
    name = "font"
    if ident:
        name += f"_{ident}"
    if kind == TileKind.HD:
        name += "_hd"
    if part == FontPart.EXT:
        name += "_2"
    return name + ".bin"


def normalized_file_path(dir_path: str, kind: TileKind, ident: Optional[str] = None,
                         part: FontPart = FontPart.BASE) -> str:
    return os.path.join(dir_path, normalized_file_name(kind, ident, part))


class BinFileReader:
    """Tile-indexed reader over a bin file; positions are tile indices."""

    def __init__(self, f, path: str, kind: TileKind):
        self._file = f
        self.path = path
        self.tile_kind = kind
        self.pos = 0

    @classmethod
    def open(cls, path: str) -> "BinFileReader":
        f = open_file(path, "rb")
        try:
            size = os.fstat(f.fileno()).st_size
            kind = kind_for_bin_file_size(size)
            if kind is None:
                raise InvalidBinFileSizeError(str(path), size)
        except BaseException:
            f.close()
            raise
        logger.info("detected %s kind of tiles in %s", kind, path)
        return cls(f, str(path), kind)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "BinFileReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def tell(self) -> int:
        return self.pos

    def is_eof(self) -> bool:
        return self.pos >= TILE_COUNT

    def seek(self, offset: int, whence: SeekFrom = SeekFrom.START) -> int:
        if whence == SeekFrom.START:
            new_pos = offset
        elif whence == SeekFrom.END:
            new_pos = TILE_COUNT - 1 + offset
        else:
            new_pos = self.pos + offset
        if not 0 <= new_pos < TILE_COUNT:
            raise OutOfBoundsError(new_pos)
        try:
            self._file.seek(new_pos * self.tile_kind.raw_rgba_size)
        except OSError as e:
            raise FileError("seeking", self.path, e) from e
        self.pos = new_pos
        return self.pos

    def rewind(self) -> None:
        self.seek(0)

    def read_tile(self) -> Tile:
        if self.is_eof():
            raise EOFError(f"{self.path}: no tile left to read")
        size = self.tile_kind.raw_rgba_size
        try:
            data = self._file.read(size)
        except OSError as e:
            raise FileError("reading", self.path, e) from e
        if len(data) != size:
            raise EOFError(f"{self.path}: truncated tile {self.pos}")
        self.pos += 1
        return Tile(self.tile_kind, data)

    def seek_read_tile(self, offset: int, whence: SeekFrom = SeekFrom.START) -> Tile:
        self.seek(offset, whence)
        return self.read_tile()

    def __iter__(self) -> Iterator[Tile]:
        while not self.is_eof():
            yield self.read_tile()


class BinFileWriter:
    """Accumulates tiles into a bin file.

    The first written tile fixes the kind of the file. finish() only succeeds
    once exactly 256 tiles have been written; on failure the raised
    NotEnoughTilesError carries the writer so the caller can keep writing or
    call fill_remaining_space() and try again.
    """

    def __init__(self, f, path: str):
        self._file = f
        self.path = path
        self.tile_kind: Optional[TileKind] = None
        self.tile_count = 0

    @classmethod
    def create(cls, path: str) -> "BinFileWriter":
        return cls(open_file(path, "wb"), str(path))

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "BinFileWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _write(self, data: bytes) -> None:
        try:
            self._file.write(data)
        except OSError as e:
            raise FileError("writing", self.path, e) from e

    def write_tile(self, tile: Tile) -> None:
        if self.tile_count >= TILE_COUNT:
            raise MaximumTilesReachedError()
        if self.tile_kind is None:
            self.tile_kind = tile.kind
        elif tile.kind != self.tile_kind:
            raise TileKindMismatchError(self.tile_kind, tile.kind)
        self._write(tile.data)
        self.tile_count += 1

    def fill_remaining_space(self) -> None:
        if self.tile_kind is None:
            raise FillRemainingSpaceError()
        remaining = TILE_COUNT - self.tile_count
        if remaining > 0:
            self._write(bytes(self.tile_kind.raw_rgba_size * remaining))
            self.tile_count = TILE_COUNT

    def finish(self) -> None:
        if self.tile_count < TILE_COUNT:
            raise NotEnoughTilesError(self)
        try:
            self._file.close()
        except OSError as e:
            raise FileError("closing", self.path, e) from e


def load(path: str) -> List[Tile]:
    with BinFileReader.open(path) as reader:
        return list(reader)


def save(tiles: Sequence[Tile], path: str) -> None:
    tile_kind(tiles)
    with BinFileWriter.create(path) as writer:
        for tile in tiles:
            writer.write_tile(tile)
        writer.fill_remaining_space()
        writer.finish()
    logger.info("Wrote %s", path)


def load_extended(base_path: str, ext_path: str) -> List[Tile]:
    base = load(base_path)
    ext = load(ext_path)
    if ext[0].kind != base[0].kind:
        raise ExtendedKindMismatchError(str(ext_path), base[0].kind, ext[0].kind)
    return base + ext


def save_extended(tiles: Sequence[Tile], base_path: str, ext_path: str) -> None:
    kind = tile_kind(tiles)
    if len(tiles) > EXTENDED_TILE_COUNT:
        raise MaximumTilesReachedError()
    padded = list(tiles) + [Tile.blank(kind)] * (EXTENDED_TILE_COUNT - len(tiles))
    save(padded[:TILE_COUNT], base_path)
    save(padded[TILE_COUNT:], ext_path)


def load_norm(dir_path: str, kind: TileKind, ident: Optional[str] = None) -> List[Tile]:
    base_path = normalized_file_path(dir_path, kind, ident, FontPart.BASE)
    ext_path = normalized_file_path(dir_path, kind, ident, FontPart.EXT)
    tiles = load_extended(base_path, ext_path)
    if tiles[0].kind != kind:
        raise ExtendedKindMismatchError(base_path, kind, tiles[0].kind)
    return tiles


def save_norm(tiles: Sequence[Tile], dir_path: str, ident: Optional[str] = None) -> None:
    kind = tile_kind(tiles)
    create_path(dir_path)
    save_extended(
        tiles,
        normalized_file_path(dir_path, kind, ident, FontPart.BASE),
        normalized_file_path(dir_path, kind, ident, FontPart.EXT),
    )
