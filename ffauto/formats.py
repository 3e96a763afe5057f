"""Readers for the supported palette file formats."""

from __future__ import annotations

import json
import re
from os import PathLike
from pathlib import Path
from typing import Callable, Iterator

from .palette import (
    MAX_PALETTE_COLORS,
    Color,
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

__all__ = [
    "read_act",
    "read_col",
    "parse_gpl",
    "parse_hex",
    "parse_json",
    "parse_pal",
    "load_from_file",
    "load_from_string",
]

_PRO_MAGIC = 0xB123
_GIMP_MAGIC = "GIMP Palette"
_PAL_MAGIC = "JASC-PAL"
_PAL_VERSION = "0100"

_HEX_RE = re.compile(r"\+?[0-9A-Fa-f]+")
_GPL_RE = re.compile(
    r"\s*(?P<r>\d+)\s+(?P<g>\d+)\s+(?P<b>\d+)(?:\s+(?P<a>\d+))?\s+(?P<name>.*)?"
)
_PAL_RE = re.compile(r"(?P<r>\d+)\s+(?P<g>\d+)\s+(?P<b>\d+)")

_PathLike = str | PathLike[str]


def _io_error(error: Exception) -> PaletteError:
    return PaletteError(f"io error: {error}")


def _read_bytes(path: _PathLike) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise _io_error(e) from e


def _read_text(path: _PathLike) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise _io_error(e) from e


def _read_exact(data: bytes, offset: int, count: int) -> bytes:
    chunk = data[offset : offset + count]
    if len(chunk) < count:
        raise PaletteError("io error: failed to fill whole buffer")
    return chunk


def _triples(data: bytes, offset: int) -> Iterator[bytes]:
    for i in range(MAX_PALETTE_COLORS):
        yield _read_exact(data, offset + i * 3, 3)


def _split_first_line(text: str) -> tuple[str, str]:
    """Split off the first line, keeping its newline."""
    head, sep, rest = text.partition("\n")
    return head + sep, rest


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p.removesuffix("\r") for p in parts]


def _parse_hex_value(text: str) -> int | None:
    if _HEX_RE.fullmatch(text) is None:
        return None
    value = int(text, 16)
    return value if value <= 0xFFFFFFFF else None


def _strip_hex_prefix(text: str) -> str:
    return text.removeprefix("0x").removeprefix("#")


def _component(text: str, line: int, name: str) -> int:
    if text.isascii():
        value = int(text)
        if value <= 255:
            return value
    raise InvalidTextLineError(line, f"Invalid {name} value")


def _rgb(match: re.Match[str], line: int) -> Color:
    return Color(
        _component(match["r"], line, "red"),
        _component(match["g"], line, "green"),
        _component(match["b"], line, "blue"),
    )


def _check_size(palette: Palette) -> None:
    if len(palette) > MAX_PALETTE_COLORS:
        raise TooManyColorsError()


def read_act(path: _PathLike) -> Palette:
    """Read an Adobe Color Table (.act) file."""
    data = _read_bytes(path)
    palette = Palette.from_colors(Color(*t) for t in _triples(data, 0))

    end = MAX_PALETTE_COLORS * 3
    if len(data) > end:
        # the two bytes after the colour table hold the number of used colours
        num_colors = int.from_bytes(_read_exact(data, end, 2), "big")
        if num_colors > len(palette) or num_colors > MAX_PALETTE_COLORS:
            raise InvalidBinaryDataError(end, f"Invalid footer value 0x{num_colors:X}")
        del palette.colors[num_colors:]

    return palette


def read_col(path: _PathLike) -> Palette:
    """Read an Animator or Animator Pro (.col) file."""
    data = _read_bytes(path)
    size = len(data)
    pro = size != MAX_PALETTE_COLORS * 3

    if pro and (size < 8 or (size - 8) % 3 != 0):
        raise InvalidBinaryDataError(0, "Not an Animator COL file")

    offset = 0
    if pro:
        magic = int.from_bytes(_read_exact(data, 4, 2), "little")
        if magic != _PRO_MAGIC:
            raise InvalidBinaryDataError(4, f"Invalid magic sequence 0x{magic:X}")
        version = int.from_bytes(_read_exact(data, 6, 2), "little")
        if version != 0:
            raise InvalidBinaryDataError(6, f"Invalid version 0x{version:X}")
        offset = 8

    if pro:
        return Palette.from_colors(Color(*t) for t in _triples(data, offset))
    return Palette.from_colors(Color.from_6bits(t) for t in _triples(data, offset))


def parse_gpl(text: str) -> Palette:
    """Parse a GIMP palette (.gpl)."""
    magic, rest = _split_first_line(text)
    if magic.strip() != _GIMP_MAGIC:
        raise InvalidTextLineError(1, f'Invalid magic sequence: "{magic}"')

    palette = Palette()
    for line_no, raw in enumerate(_lines(rest), start=2):
        line = raw.strip()
        if not line or line.startswith(("#", "Name: ", "Columns: ")):
            continue

        match = _GPL_RE.fullmatch(line)
        if match is None:
            raise InvalidTextLineError(line_no, "Malformed line")

        color = _rgb(match, line_no)
        if match["name"] is not None:
            palette.push_named_color(color, match["name"])
        else:
            palette.push_color(color)
        _check_size(palette)

    return palette


def parse_hex(text: str) -> Palette:
    """Parse a list of hexadecimal colours, one per line (.hex)."""
    palette = Palette()
    for line_no, raw in enumerate(_lines(text)):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        value = _parse_hex_value(_strip_hex_prefix(line))
        if value is None:
            raise InvalidTextLineError(line_no, "Not a hexadecimal color value")

        palette.push_color(Color.from_int(value))
        _check_size(palette)

    return palette


def parse_json(text: str) -> Palette:
    """Parse a JSON array of hexadecimal colour strings."""
    try:
        items = json.loads(text)
    except ValueError:
        raise InvalidFileError() from None
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise InvalidFileError()

    if len(items) > MAX_PALETTE_COLORS:
        raise TooManyColorsError()

    colors = []
    for index, item in enumerate(items):
        stripped = _strip_hex_prefix(item.strip())
        value = _parse_hex_value(stripped)
        if value is None:
            raise InvalidJsonEntryError(index, f'"{stripped}" is not a valid hexadecimal color value')
        colors.append(Color.from_int(value))

    return Palette.from_colors(colors)


def parse_pal(text: str) -> Palette:
    """Parse a JASC (Paint Shop Pro) palette (.pal)."""
    magic, rest = _split_first_line(text)
    if magic.strip() != _PAL_MAGIC:
        raise InvalidTextLineError(1, f"Invalid magic sequence: {magic}")

    version, rest = _split_first_line(rest)
    if version.strip() != _PAL_VERSION:
        raise InvalidTextLineError(2, f"Invalid version: {version}")

    # the colour count line carries nothing that is needed here
    _, rest = _split_first_line(rest)

    palette = Palette()
    for index, raw in enumerate(_lines(rest)):
        line_no = index + 3
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        match = _PAL_RE.fullmatch(line)
        if match is None:
            raise InvalidTextLineError(line_no, "Malformed line")

        palette.push_color(_rgb(match, line_no))
        _check_size(palette)

    return palette


_TEXT_PARSERS: dict[PaletteFormat, Callable[[str], Palette]] = {
    PaletteFormat.GPL: parse_gpl,
    PaletteFormat.HEX: parse_hex,
    PaletteFormat.JSON: parse_json,
    PaletteFormat.PAL: parse_pal,
}


def load_from_file(path: _PathLike) -> Palette:
    """Load a palette, choosing the reader by the file's extension."""
    fmt = PaletteFormat.guess(path)
    if fmt is None:
        raise InvalidFileError()
    if fmt is PaletteFormat.ADOBE_ACT:
        return read_act(path)
    if fmt is PaletteFormat.ANIMATOR_PRO_COL:
        return read_col(path)
    return _TEXT_PARSERS[fmt](_read_text(path))


def load_from_string(text: str, fmt: PaletteFormat) -> Palette:
    """Parse a palette held in a string; only text formats are supported."""
    parser = _TEXT_PARSERS.get(fmt)
    if parser is None:
        raise UnsupportedFormatError()
    return parser(text)