import os

import pytest

from osd_font_tool.symbol_specs import SymbolSpec, SymbolSpecs
from osd_font_tool.tile import TileKind
from osd_font_tool.tile_set import (
    GridSet,
    SymbolSet,
    TileSet,
    TileSetKindMismatchError,
    TileSetWrongKindError,
)

from conftest import make_tile, make_tiles


def test_validation(sd_tiles, hd_tiles):
    tile_set = TileSet(sd_tiles, hd_tiles)
    assert tile_set[TileKind.SD] == sd_tiles
    assert tile_set[TileKind.HD] == hd_tiles

    with pytest.raises(TileSetWrongKindError) as e:
        TileSet(sd_tiles, sd_tiles)
    assert e.value.side == TileKind.HD

    with pytest.raises(TileSetKindMismatchError) as e:
        TileSet([], hd_tiles)
    assert e.value.side == TileKind.SD

    with pytest.raises(TileSetKindMismatchError) as e:
        TileSet(sd_tiles, hd_tiles + [make_tile(TileKind.SD, 0)])
    assert e.value.side == TileKind.HD


def test_bin_files_norm(tmp_path, sd_tiles, hd_tiles):
    TileSet(sd_tiles, hd_tiles).save_to_bin_files_norm(str(tmp_path), "bf")
    assert sorted(os.listdir(tmp_path)) == [
        "font_bf.bin", "font_bf_2.bin", "font_bf_hd.bin", "font_bf_hd_2.bin",
    ]
    loaded = TileSet.load_bin_files_norm(str(tmp_path), "bf")
    assert len(loaded.sd_tiles) == 512
    assert loaded.sd_tiles[:256] == sd_tiles
    assert loaded.hd_tiles[:256] == hd_tiles


def test_bin_files(tmp_path, sd_tiles, hd_tiles):
    paths = [str(tmp_path / n) for n in ("a.bin", "a2.bin", "b.bin", "b2.bin")]
    TileSet(sd_tiles, hd_tiles).save_to_bin_files(*paths)
    assert TileSet.load_bin_files(*paths).hd_tiles[:256] == hd_tiles


def test_grids(tmp_path):
    sd, hd = make_tiles(TileKind.SD, 32), make_tiles(TileKind.HD, 32)
    TileSet(sd, hd).save_to_grids_norm(str(tmp_path))
    assert sorted(os.listdir(tmp_path)) == ["grid.png", "grid_hd.png"]

    loaded = TileSet.load_from_grids_norm(str(tmp_path))
    assert (loaded.sd_tiles, loaded.hd_tiles) == (sd, hd)

    grid_set = GridSet.load_from_images(str(tmp_path / "grid.png"), str(tmp_path / "grid_hd.png"))
    assert grid_set[TileKind.HD].tiles == hd


def test_grids_swapped(tmp_path):
    sd, hd = make_tiles(TileKind.SD, 16), make_tiles(TileKind.HD, 16)
    TileSet(sd, hd).save_to_grids(str(tmp_path / "sd.png"), str(tmp_path / "hd.png"))
    with pytest.raises(TileSetWrongKindError) as e:
        TileSet.load_from_grids(str(tmp_path / "hd.png"), str(tmp_path / "sd.png"))
    assert e.value.side == TileKind.SD


def test_tile_dir(tmp_path):
    sd, hd = make_tiles(TileKind.SD, 5), make_tiles(TileKind.HD, 7)
    TileSet(sd, hd).save_tiles_to_dir(str(tmp_path))
    assert sorted(os.listdir(tmp_path)) == ["HD", "SD"]

    loaded = TileSet.load_from_dir(str(tmp_path))
    assert (loaded.sd_tiles, loaded.hd_tiles) == (sd, hd)


def test_symbol_set(tmp_path):
    sd, hd = make_tiles(TileKind.SD, 6), make_tiles(TileKind.HD, 6)
    symbol_set = TileSet(sd, hd).to_symbol_set(SymbolSpecs([SymbolSpec(1, 2)]))
    assert [s.span for s in symbol_set[TileKind.HD]] == [1, 2, 1, 1, 1]

    symbol_set.save_to_dir(str(tmp_path))
    assert (tmp_path / "SD" / "001-002.png").is_file()

    loaded = SymbolSet.load_from_dir(str(tmp_path))
    tile_set = loaded.to_tile_set()
    assert (tile_set.sd_tiles, tile_set.hd_tiles) == (sd, hd)
