import numpy as np
import pytest

from osd_font_tool.tile import Tile, TileKind


def make_tile(kind, seed):
    rng = np.random.RandomState(seed)
    pixels = rng.randint(0, 256, size=(kind.height, kind.width, 4)).astype(np.uint8)
    return Tile.from_array(pixels)


def make_tiles(kind, count, seed=0):
    return [make_tile(kind, seed + i) for i in range(count)]


@pytest.fixture
def sd_tiles():
    return make_tiles(TileKind.SD, 256)


@pytest.fixture
def hd_tiles():
    return make_tiles(TileKind.HD, 256, seed=1000)


@pytest.fixture
def specs_file(tmp_path):
    path = tmp_path / "sym_specs.yaml"
    path.write_text('battery: "0x02:3"\nhome: 10:2\n')
    return str(path)
