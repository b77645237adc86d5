import logging
import os

import pytest

from osd_font_tool import avatar_file, bin_file, cli
from osd_font_tool.convert import (
    ConvertArg,
    ConvertSetArg,
    InvalidConversionError,
    InvalidConvertArgError,
    InvalidImageFileExtensionError,
    convert,
    convert_set,
    parse_convert_arg,
    parse_convert_set_arg,
)
from osd_font_tool.errors import FileError
from osd_font_tool.grid import Grid
from osd_font_tool.symbol_dir import load_symbols_from_dir
from osd_font_tool.tile import TileKind
from osd_font_tool.tile_dir import load_tiles_from_dir
from osd_font_tool.tile_set import TileSet


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_convert_arg():
    assert parse_convert_arg("bin:font.bin") == ConvertArg("bin", "font.bin")
    assert parse_convert_arg("djibin:font.bin") == ConvertArg("bin", "font.bin")
    assert parse_convert_arg("tilegrid:a/grid.png") == ConvertArg("tilegrid", "a/grid.png")
    assert parse_convert_arg("symdir:sym") == ConvertArg("symdir", "sym")

    with pytest.raises(InvalidConvertArgError, match="no prefix"):
        parse_convert_arg("font.bin")
    with pytest.raises(InvalidConvertArgError, match="invalid prefix"):
        parse_convert_arg("foo:font.bin")
    with pytest.raises(InvalidImageFileExtensionError) as e:
        parse_convert_arg("tilegrid:grid.jpg")
    assert e.value.extension == "jpg"
    with pytest.raises(InvalidImageFileExtensionError) as e:
        parse_convert_arg("avatar:avatar")
    assert e.value.extension is None


def test_parse_convert_set_arg():
    assert parse_convert_set_arg("djibinset:a:b:c:d") == ConvertSetArg("binset", ["a", "b", "c", "d"])
    assert parse_convert_set_arg("binsetnorm:fonts") == ConvertSetArg("binsetnorm", ["fonts"])
    assert parse_convert_set_arg("tilesetgridsnorm:g:ardu") == ConvertSetArg("tilesetgridsnorm", ["g"], "ardu")
    assert parse_convert_set_arg("symsetdir:s") == ConvertSetArg("symsetdir", ["s"])

    with pytest.raises(InvalidConvertArgError, match="too few arguments"):
        parse_convert_set_arg("binset:a:b:c")
    with pytest.raises(InvalidConvertArgError, match="too many arguments"):
        parse_convert_set_arg("tilesetgrids:a.png:b.png:c.png")
    with pytest.raises(InvalidConvertArgError, match="too many arguments"):
        parse_convert_set_arg("binsetnorm:d:x:y")
    with pytest.raises(InvalidConvertArgError, match="invalid prefix"):
        parse_convert_set_arg("bin:font.bin")


def test_same_prefix_is_invalid(tmp_path):
    with pytest.raises(InvalidConversionError) as e:
        convert("djibin:a.bin", "bin:b.bin")
    assert (e.value.from_prefix, e.value.to_prefix) == ("bin", "bin")


def test_convert_chain(tmp_path, hd_tiles):
    src = str(tmp_path / "font_hd.bin")
    bin_file.save(hd_tiles, src)

    convert(f"bin:{src}", f"tilegrid:{tmp_path / 'grid.png'}")
    convert(f"tilegrid:{tmp_path / 'grid.png'}", f"tiledir:{tmp_path / 'tiles'}")
    convert(f"tiledir:{tmp_path / 'tiles'}", f"avatar:{tmp_path / 'avatar.png'}")
    convert(f"avatar:{tmp_path / 'avatar.png'}", f"bin:{tmp_path / 'out.bin'}")

    assert Grid.load_image(str(tmp_path / "grid.png")).tiles == hd_tiles
    assert load_tiles_from_dir(str(tmp_path / "tiles")) == hd_tiles
    assert avatar_file.load(str(tmp_path / "avatar.png")) == hd_tiles
    assert bin_file.load(str(tmp_path / "out.bin")) == hd_tiles


def test_convert_to_symdir(tmp_path, sd_tiles, specs_file):
    src = str(tmp_path / "font.bin")
    bin_file.save(sd_tiles, src)

    convert(f"bin:{src}", f"symdir:{tmp_path / 'sym'}", specs_file)
    assert (tmp_path / "sym" / "002-004.png").is_file()
    assert (tmp_path / "sym" / "010-011.png").is_file()

    convert(f"symdir:{tmp_path / 'sym'}", f"bin:{tmp_path / 'back.bin'}", specs_file)
    assert bin_file.load(str(tmp_path / "back.bin")) == sd_tiles


def test_specs_file_loaded_only_for_symbol_outputs(tmp_path, sd_tiles):
    src = str(tmp_path / "font.bin")
    bin_file.save(sd_tiles, src)
    missing = str(tmp_path / "missing.yaml")

    convert(f"bin:{src}", f"tiledir:{tmp_path / 'tiles'}", missing)
    with pytest.raises(FileError):
        convert(f"bin:{src}", f"symdir:{tmp_path / 'sym'}", missing)


def test_convert_set(tmp_path, sd_tiles, hd_tiles, specs_file):
    TileSet(sd_tiles, hd_tiles).save_to_bin_files_norm(str(tmp_path / "bins"))

    convert_set(f"djibinsetnorm:{tmp_path / 'bins'}", f"tilesetgridsnorm:{tmp_path / 'grids'}:ardu")
    assert sorted(os.listdir(tmp_path / "grids")) == ["grid_ardu.png", "grid_ardu_hd.png"]

    convert_set(f"tilesetgridsnorm:{tmp_path / 'grids'}:ardu", f"symsetdir:{tmp_path / 'sym'}", specs_file)
    assert load_symbols_from_dir(str(tmp_path / "sym" / "HD"))[2].span == 3

    convert_set(f"symsetdir:{tmp_path / 'sym'}", f"tilesetdir:{tmp_path / 'tiles'}")
    loaded = TileSet.load_from_dir(str(tmp_path / "tiles"))
    assert loaded[TileKind.SD][:256] == sd_tiles
    assert loaded[TileKind.HD][:256] == hd_tiles


def test_cli_success(tmp_path, hd_tiles, restore_logging):
    src = str(tmp_path / "font_hd.bin")
    bin_file.save(hd_tiles, src)
    cli.main(["-l", "error", "convert", f"bin:{src}", f"tiledir:{tmp_path / 'tiles'}"])
    assert load_tiles_from_dir(str(tmp_path / "tiles")) == hd_tiles


def test_cli_error_exit_code(tmp_path, restore_logging):
    with pytest.raises(SystemExit) as e:
        cli.main(["-l", "off", "convert", f"bin:{tmp_path / 'missing.bin'}", f"tiledir:{tmp_path}"])
    assert e.value.code == 1

    with pytest.raises(SystemExit) as e:
        cli.main(["-l", "off", "convert-set", "binset:a:b", "tilesetdir:x"])
    assert e.value.code == 1
