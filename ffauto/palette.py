"""Colours, palettes and the errors raised while loading them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from os import PathLike, fspath
from pathlib import PurePath
from typing import Iterable, Iterator, Sequence

__all__ = [
    "MAX_PALETTE_COLORS",
    "Color",
    "Entry",
    "Palette",
    "PaletteFormat",
    "PaletteError",
    "EmptyPaletteError",
    "TooManyColorsError",
    "UnsupportedFormatError",
    "InvalidFileError",
    "InvalidBinaryDataError",
    "InvalidTextLineError",
    "InvalidJsonEntryError",
]

MAX_PALETTE_COLORS = 256


class PaletteError(Exception):
    """A palette could not be loaded."""


class EmptyPaletteError(PaletteError):
    def __init__(self) -> None:
        super().__init__("The loaded palette is empty")


class TooManyColorsError(PaletteError):
    def __init__(self) -> None:
        super().__init__(f"The palette file contains more than {MAX_PALETTE_COLORS} colors")


class UnsupportedFormatError(PaletteError):
    def __init__(self) -> None:
        super().__init__("Tried reading a binary format as text or vice versa, which is not supported")


class InvalidFileError(PaletteError):
    def __init__(self) -> None:
        super().__init__("Invalid file")


class InvalidBinaryDataError(PaletteError):
    """Binary palette data is malformed at a byte offset."""

    def __init__(self, position: int, msg: str) -> None:
        self.position = position
        self.msg = msg
        super().__init__(f"Invalid data at byte 0x{position:X}: {msg}")


class InvalidTextLineError(PaletteError):
    """A line of a text palette is malformed."""

    def __init__(self, line: int, msg: str) -> None:
        self.line = line
        self.msg = msg
        super().__init__(f"Invalid data in line {line}: {msg}")


class InvalidJsonEntryError(PaletteError):
    """An item of a JSON palette array is malformed."""

    def __init__(self, index: int, msg: str) -> None:
        self.index = index
        self.msg = msg
        super().__init__(f"Invalid JSON array item at index {index}: {msg}")


def _scale_6bits_to_8bits(value: int) -> int:
    value &= 0b111111
    return (value << 2) | (value >> 4)


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB colour."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b):
            if not 0 <= component <= 255:
                raise ValueError(f"colour component {component} is outside 0..255")

    @classmethod
    def from_int(cls, value: int) -> Color:
        """Build a colour from a 0xRRGGBB integer; higher bits are ignored."""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_6bits(cls, values: Sequence[int]) -> Color:
        """Build a colour from three 6-bit components, scaled up to 8 bits."""
        r, g, b = values
        return cls(_scale_6bits_to_8bits(r), _scale_6bits_to_8bits(g), _scale_6bits_to_8bits(b))

    def __str__(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


@dataclass(frozen=True)
class Entry:
    """A palette colour with an optional name."""

    color: Color = Color()
    name: str = ""


@dataclass
class Palette:
    """An ordered list of colour entries."""

    colors: list[Entry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.colors)

    def push_color(self, color: Color) -> None:
        self.colors.append(Entry(color))

    def push_named_color(self, color: Color, name: str) -> None:
        self.colors.append(Entry(color, name))

    @classmethod
    def from_ints(cls, values: Iterable[int]) -> Palette:
        return cls([Entry(Color.from_int(v)) for v in values])

    @classmethod
    def from_colors(cls, colors: Iterable[Color]) -> Palette:
        return cls([Entry(c) for c in colors])


class PaletteFormat(Enum):
    """Supported palette file formats, valued by their file extension."""

    ADOBE_ACT = "act"
    ANIMATOR_PRO_COL = "col"
    GPL = "gpl"
    HEX = "hex"
    JSON = "json"
    PAL = "pal"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def guess(cls, path: str | PathLike[str]) -> PaletteFormat | None:
        """Guess the format from a file's extension, or return None."""
        suffix = PurePath(fspath(path)).suffix
        if not suffix:
            return None
        try:
            return cls(suffix[1:].lower())
        except ValueError:
            return None