import pytest

from ffauto.palette import (
    MAX_PALETTE_COLORS,
    Color,
    Entry,
    InvalidBinaryDataError,
    InvalidFileError,
    InvalidJsonEntryError,
    InvalidTextLineError,
    Palette,
    PaletteError,
    PaletteFormat,
    TooManyColorsError,
    UnsupportedFormatError,
)


def test_color_from_int_formats_as_hex():
    assert str(Color.from_int(0x1E3D54)) == "#1E3D54"
    assert str(Color.from_int(0xE2EDF5)) == "#E2EDF5"


def test_color_from_int_ignores_high_bits():
    assert Color.from_int(0xFF1E3D54) == Color.from_int(0x1E3D54)


@pytest.mark.parametrize("value", [0, 0xFFFFFF, 0x1E3D54, 0xE2EDF5, 0x00FF00])
def test_color_string_round_trip(value):
    text = str(Color.from_int(value))
    assert len(text) == 7
    assert text.startswith("#")
    assert text == text.upper()
    assert int(text[1:], 16) == value


def test_from_6bits_extremes():
    assert Color.from_6bits([63, 63, 63]) == Color(255, 255, 255)
    assert Color.from_6bits([0, 0, 0]) == Color()


def test_from_6bits_masks_to_six_bits():
    assert Color.from_6bits([0x40 + 5, 0x80 + 17, 0xC0 + 40]) == Color.from_6bits([5, 17, 40])


def test_from_6bits_is_strictly_increasing():
    reds = [Color.from_6bits([v, 0, 0]).r for v in range(64)]
    assert all(a < b for a, b in zip(reds, reds[1:]))


def test_color_rejects_out_of_range_component():
    with pytest.raises(ValueError):
        Color(256, 0, 0)


def test_push_color_uses_empty_name():
    pal = Palette()
    pal.push_color(Color.from_int(0x1E3D54))
    assert len(pal) == 1
    assert pal.colors[0] == Entry(Color.from_int(0x1E3D54), "")


def test_push_named_color_keeps_name():
    pal = Palette()
    pal.push_named_color(Color(1, 2, 3), "Untitled")
    assert [e.name for e in pal] == ["Untitled"]
    assert pal.colors[0].color == Color(1, 2, 3)


def test_empty_palette_is_falsy():
    pal = Palette()
    assert len(pal) == 0
    assert not pal


def test_from_ints_preserves_order():
    values = [0x1E3D54, 0xE2EDF5, 0xFFFFFF]
    pal = Palette.from_ints(values)
    assert [str(e.color) for e in pal] == ["#1E3D54", "#E2EDF5", "#FFFFFF"]


def test_from_colors_matches_from_ints():
    values = [0x0, 0xFFFF00, 0x00FFFF, 0xFF00FF, 0xFFFFFF]
    assert Palette.from_colors(Color.from_int(v) for v in values) == Palette.from_ints(values)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("palette.act", PaletteFormat.ADOBE_ACT),
        ("palette.col", PaletteFormat.ANIMATOR_PRO_COL),
        ("dir/PALETTE.GPL", PaletteFormat.GPL),
        ("palette.hex", PaletteFormat.HEX),
        ("palette.json", PaletteFormat.JSON),
        ("palette.pal", PaletteFormat.PAL),
        ("palette.txt", None),
        ("palette", None),
        (".hex", None),
    ],
)
def test_guess_format(path, expected):
    assert PaletteFormat.guess(path) is expected


@pytest.mark.parametrize("fmt", list(PaletteFormat))
def test_format_str_is_extension(fmt):
    assert PaletteFormat.guess(f"x.{fmt}") is fmt


def test_format_str_values():
    assert str(PaletteFormat.guess("palette.col")) == "col"
    assert str(PaletteFormat.guess("palette.ACT")) == "act"


def test_error_messages():
    assert str(TooManyColorsError()) == "The palette file contains more than 256 colors"
    assert str(InvalidFileError()) == "Invalid file"
    assert str(UnsupportedFormatError()) == (
        "Tried reading a binary format as text or vice versa, which is not supported"
    )
    assert MAX_PALETTE_COLORS == 256


def test_text_line_error_fields():
    err = InvalidTextLineError(4, "Malformed line")
    assert err.line == 4
    assert err.msg == "Malformed line"
    assert str(err) == "Invalid data in line 4: Malformed line"
    assert isinstance(err, PaletteError)


def test_json_entry_error_fields():
    err = InvalidJsonEntryError(1, "bad")
    assert err.index == 1
    assert str(err) == "Invalid JSON array item at index 1: bad"


def test_binary_data_error_fields():
    err = InvalidBinaryDataError(768, "Invalid footer value 0xFFFF")
    assert err.position == 768
    assert err.msg == "Invalid footer value 0xFFFF"
    assert str(err) == "Invalid data at byte 0x300: Invalid footer value 0xFFFF"