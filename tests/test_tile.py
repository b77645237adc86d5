import numpy as np
import pytest

from osd_font_tool.tile import (
    EmptyContainerError,
    InvalidDimensionsError,
    InvalidHeightError,
    InvalidSizeError,
    LoadedDoesNotMatchRequestedError,
    MultipleTileKindsError,
    Tile,
    TileImageDimensionsError,
    TileKind,
    check_tile_kind,
    tile_kind,
)

from conftest import make_tile


def test_kind_geometry():
    assert TileKind.SD.dimensions == (36, 54)
    assert TileKind.HD.dimensions == (24, 36)
    assert TileKind.SD.raw_rgba_size == 7776
    assert TileKind.HD.raw_rgba_size == 3456
    assert str(TileKind.HD) == "HD"


def test_kind_inference():
    assert TileKind.for_size_bytes(7776) == TileKind.SD
    assert TileKind.for_size_bytes(3456) == TileKind.HD
    assert TileKind.for_dimensions(24, 36) == TileKind.HD
    assert TileKind.for_height(54) == TileKind.SD

    with pytest.raises(InvalidSizeError) as e:
        TileKind.for_size_bytes(100)
    assert e.value.size == 100
    with pytest.raises(InvalidDimensionsError):
        TileKind.for_dimensions(36, 36)
    with pytest.raises(InvalidHeightError):
        TileKind.for_height(40)


def test_tile_construction():
    blank = Tile.blank(TileKind.HD)
    assert blank.data == bytes(3456)
    assert Tile.from_bytes(bytes(7776)).kind == TileKind.SD

    with pytest.raises(InvalidSizeError):
        Tile(TileKind.SD, bytes(10))

    tile = make_tile(TileKind.SD, 1)
    assert tile.array.shape == (54, 36, 4)
    assert Tile.from_array(tile.array) == tile
    assert Tile.from_image(tile.image()) == tile


def test_tile_image_file(tmp_path):
    tile = make_tile(TileKind.HD, 3)
    path = str(tmp_path / "t.png")
    tile.save(path)
    assert Tile.load_image_file(path) == tile


def test_tile_image_file_bad_dimensions(tmp_path):
    path = str(tmp_path / "bad.png")
    from osd_font_tool.image import array_to_image
    array_to_image(np.zeros((10, 10, 4), dtype=np.uint8)).save(path)

    with pytest.raises(TileImageDimensionsError) as e:
        Tile.load_image_file(path)
    assert (e.value.width, e.value.height) == (10, 10)
    assert e.value.path == path


def test_collection_kind():
    sd = make_tile(TileKind.SD, 0)
    hd = make_tile(TileKind.HD, 0)

    assert tile_kind([sd, sd]) == TileKind.SD
    with pytest.raises(EmptyContainerError):
        tile_kind([])
    with pytest.raises(MultipleTileKindsError):
        tile_kind([sd, hd])

    assert check_tile_kind([hd], TileKind.HD) == TileKind.HD
    with pytest.raises(LoadedDoesNotMatchRequestedError) as e:
        check_tile_kind([hd], TileKind.SD)
    assert e.value.requested == TileKind.SD
    assert e.value.loaded == TileKind.HD
