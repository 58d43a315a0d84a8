import pytest

from pngcore.core import ColorType, create, load_file
from pngcore.simple_read import describe_color_type, main


@pytest.mark.parametrize(
    "color_type, name",
    [
        (ColorType.GRAYSCALE, "Grayscale"),
        (ColorType.RGB, "RGB"),
        (ColorType.INDEXED, "Indexed color"),
        (ColorType.GRAYSCALE_ALPHA, "Grayscale with alpha"),
        (ColorType.RGBA, "RGBA"),
    ],
)
def test_describe_known_color_types(color_type, name):
    assert describe_color_type(int(color_type)) == name


def test_describe_unknown_color_type():
    assert describe_color_type(5) == "Unknown (5)"


def _write_sample(path, width=2, height=3):
    png = create(width, height, 8, ColorType.RGB)
    row = b"\x00" + bytes(range(width * 3))
    png.set_raw_data(row * height)
    png.save(path)
    return png


def test_main_prints_properties_and_saves_copy(tmp_path, monkeypatch, capsys):
    source = tmp_path / "in.png"
    _write_sample(source)
    monkeypatch.chdir(tmp_path)

    assert main([str(source)]) == 0
    out = capsys.readouterr().out
    assert "  Width: 2 pixels" in out
    assert "  Height: 3 pixels" in out
    assert "  Color type: RGB" in out
    assert "PNG validation: PASSED" in out
    assert "(matches: yes)" in out
    assert "Successfully saved copy" in out

    copy = tmp_path / "copy.png"
    assert copy.read_bytes() == source.read_bytes()


def test_main_reports_chunk_crcs(tmp_path, monkeypatch, capsys):
    source = tmp_path / "in.png"
    png = _write_sample(source)
    monkeypatch.chdir(tmp_path)

    assert main([str(source)]) == 0
    out = capsys.readouterr().out
    ihdr = png.get_chunk("IHDR")
    idat = png.get_chunk("IDAT")
    assert f"  IHDR: {ihdr.length} bytes, CRC: 0x{ihdr.crc:08X}" in out
    assert f"  IDAT: {idat.length} bytes, CRC: 0x{idat.crc:08X}" in out


def test_main_copy_loads_with_same_pixels(tmp_path, monkeypatch):
    source = tmp_path / "in.png"
    _write_sample(source, width=4, height=2)
    monkeypatch.chdir(tmp_path)

    assert main([str(source)]) == 0
    original = load_file(source)
    copy = load_file(tmp_path / "copy.png")
    assert copy.get_raw_data() == original.get_raw_data()
    assert (copy.width, copy.height) == (4, 2)


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.png")]) == 1
    err = capsys.readouterr().err
    assert "Error loading PNG: Failed to open file:" in err
    assert "(code: 7)" in err


def test_main_not_a_png(tmp_path, capsys):
    bogus = tmp_path / "bogus.png"
    bogus.write_bytes(b"definitely not a png file")
    assert main([str(bogus)]) == 1
    assert "Not a PNG file (code: 2)" in capsys.readouterr().err


def test_main_wrong_argument_count(capsys):
    assert main([]) == 1
    assert "<png_file>" in capsys.readouterr().out