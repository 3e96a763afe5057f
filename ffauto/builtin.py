"""Palettes that ship with the package."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .formats import load_from_string
from .palette import Palette, PaletteError, PaletteFormat

__all__ = ["BuiltInPalette", "get_builtin_palette"]

_DATA_DIR = Path(__file__).parent / "palettes"


class BuiltInPalette(Enum):
    """Names of the built-in palettes, valued by their command-line spelling."""

    CMYK = "cmyk"
    WINDOWS = "windows"
    MACINTOSH = "macintosh"
    WEBSAFE = "websafe"
    GRAYSCALE = "grayscale"
    MONOCHROME = "monochrome"
    UNIFORM_PS = "uniform-ps"

    UNIFORM_ASEPRITE = "uniform-aseprite"
    UNIFORM_FFMPEG = "uniform-ffmpeg"
    UNIFORM_PERCEPTUAL = "uniform-perceptual"
    UNIFORM_SELECTIVE = "uniform-selective"

    BLUES = "blues"
    BR_BG = "br-bg"
    BU_GN = "bu-gn"
    BU_PU = "bu-pu"
    CIVIDIS = "cividis"
    COOL = "cool"
    CUBEHELIX = "cubehelix"
    GN_BU = "gn-bu"
    GREENS = "greens"
    INFERNO = "inferno"
    MAGMA = "magma"
    OR_RD = "or-rd"
    ORANGES = "oranges"
    PI_YG = "pi-yg"
    PLASMA = "plasma"
    PR_GN = "pr-gn"
    PU_BU = "pu-bu"
    PU_BU_GN = "pu-bu-gn"
    PU_OR = "pu-or"
    PU_RD = "pu-rd"
    PURPLES = "purples"
    RAINBOW = "rainbow"
    RD_BU = "rd-bu"
    RD_GY = "rd-gy"
    RD_PU = "rd-pu"
    RD_YL_BU = "rd-yl-bu"
    RD_YL_GN = "rd-yl-gn"
    REDS = "reds"
    SINEBOW = "sinebow"
    SPECTRAL = "spectral"
    TURBO = "turbo"
    VIRIDIS = "viridis"
    WARM = "warm"
    YL_GN = "yl-gn"
    YL_GN_BU = "yl-gn-bu"
    YL_OR_BR = "yl-or-br"
    YL_OR_RD = "yl-or-rd"

    AAP64 = "aap64"
    AAP_MICRO12 = "aap-micro12"
    AAP_RADIANT_XV = "aap-radiant-xv"
    AAP_SPLENDOR128 = "aap-splendor128"
    SIMPLE_JPC16 = "simple-jpc16"

    A64 = "a64"
    ARNE16 = "arne16"
    ARNE32 = "arne32"
    CG_ARNE = "cg-arne"
    COPPER_TECH = "copper-tech"
    CPC_BOY = "cpc-boy"
    EROGE_COPPER = "eroge-copper"
    JMP = "jmp"
    PSYGNOSIA = "psygnosia"

    MATRIAX8C = "matriax8c"

    DB8 = "db8"
    DB16 = "db16"
    DB32 = "db32"

    ARQ4 = "arq4"
    ARQ16 = "arq16"
    EDG8 = "edg8"
    EDG16 = "edg16"
    EDG32 = "edg32"
    EN4 = "en4"
    ENOS16 = "enos16"
    HEPT32 = "hept32"

    APPLE_II = "apple-ii"
    ATARI2600_NTSC = "atari2600-ntsc"
    ATARI2600_PAL = "atari2600-pal"
    CGA = "cga"
    CGA0 = "cga0"
    CGA0_HIGH = "cga0-high"
    CGA1 = "cga1"
    CGA1_HIGH = "cga1-high"
    CGA3RD = "cga3rd"
    CGA3RD_HIGH = "cga3rd-high"
    COMMODORE_PLUS4 = "commodore-plus4"
    COMMODORE_VIC20 = "commodore-vic20"
    COMMODORE64 = "commodore64"
    CPC = "cpc"
    GAMEBOY = "gameboy"
    GAMEBOY_COLOR = "gameboy-color"
    MASTER_SYSTEM = "master-system"
    MSX1 = "msx1"
    MSX2 = "msx2"
    NES = "nes"
    NES_NTSC = "nes-ntsc"
    TELETEXT = "teletext"
    VGA13H = "vga13h"
    VIRTUAL_BOY = "virtual-boy"
    ZX_SPECTRUM = "zx-spectrum"

    MAIL24 = "mail24"
    NYX8 = "nyx8"
    PICO8 = "pico8"
    BUBBLEGUM16 = "bubblegum16"
    ROSY42 = "rosy42"

    GOOGLE_UI = "google-ui"
    MINECRAFT = "minecraft"
    MONOKAI = "monokai"
    SMILE_BASIC = "smile-basic"
    SOLARIZED = "solarized"
    WIN16 = "win16"
    X11 = "x11"

    ZUGHY32 = "zughy32"

    def __str__(self) -> str:
        return self.value


_B = BuiltInPalette

_INLINE: dict[BuiltInPalette, list[int]] = {
    # CMYK plus white
    _B.CMYK: [0x0, 0xFFFF00, 0x00FFFF, 0xFF00FF, 0xFFFFFF],
    _B.MONOCHROME: [0x0, 0xFFFFFF],
}

_HEX_FILES = {
    _B.WINDOWS: "windows",
    _B.MACINTOSH: "macintosh",
    _B.WEBSAFE: "websafe",
    _B.GRAYSCALE: "grayscale",
    _B.UNIFORM_PS: "photoshop_uniform",
    _B.UNIFORM_ASEPRITE: "uniform_aseprite",
    _B.UNIFORM_FFMPEG: "uniform_ffmpeg",
    _B.UNIFORM_PERCEPTUAL: "uniform_perceptual",
    _B.UNIFORM_SELECTIVE: "uniform_selective",
}

_JSON_PALETTES = [
    _B.BLUES, _B.BR_BG, _B.BU_GN, _B.BU_PU, _B.CIVIDIS, _B.COOL, _B.CUBEHELIX,
    _B.GN_BU, _B.GREENS, _B.INFERNO, _B.MAGMA, _B.OR_RD, _B.ORANGES, _B.PI_YG,
    _B.PLASMA, _B.PR_GN, _B.PU_BU, _B.PU_BU_GN, _B.PU_OR, _B.PU_RD, _B.PURPLES,
    _B.RAINBOW, _B.RD_BU, _B.RD_GY, _B.RD_PU, _B.RD_YL_BU, _B.RD_YL_GN, _B.REDS,
    _B.SINEBOW, _B.SPECTRAL, _B.TURBO, _B.VIRIDIS, _B.WARM, _B.YL_GN, _B.YL_GN_BU,
    _B.YL_OR_BR, _B.YL_OR_RD,
]

_GPL_FILES = {
    _B.AAP64: "aap-64",
    _B.AAP_MICRO12: "aap-micro12",
    _B.AAP_RADIANT_XV: "aap-radiantxv",
    _B.AAP_SPLENDOR128: "aap-splendor128",
    _B.SIMPLE_JPC16: "simplejpc-16",
    _B.A64: "a64",
    _B.ARNE16: "arne16",
    _B.ARNE32: "arne32",
    _B.CG_ARNE: "cg-arne",
    _B.COPPER_TECH: "copper-tech",
    _B.CPC_BOY: "cpc-boy",
    _B.EROGE_COPPER: "eroge-copper",
    _B.JMP: "jmp",
    _B.PSYGNOSIA: "psygnosia",
    _B.MATRIAX8C: "matriax8c",
    _B.DB8: "db8",
    _B.DB16: "db16",
    _B.DB32: "db32",
    _B.ARQ4: "arq4",
    _B.ARQ16: "arq16",
    _B.EDG8: "edg8",
    _B.EDG16: "edg16",
    _B.EDG32: "edg32",
    _B.EN4: "en4",
    _B.ENOS16: "enos16",
    _B.HEPT32: "hept32",
    _B.APPLE_II: "apple-ii",
    _B.ATARI2600_NTSC: "atari2600-ntsc",
    _B.ATARI2600_PAL: "atari2600-pal",
    _B.CGA: "cga",
    _B.CGA0: "cga0",
    _B.CGA0_HIGH: "cga0hi",
    _B.CGA1: "cga1",
    _B.CGA1_HIGH: "cga1hi",
    _B.CGA3RD: "cga3rd",
    _B.CGA3RD_HIGH: "cga3rdhi",
    _B.COMMODORE_PLUS4: "commodore-plus4",
    _B.COMMODORE_VIC20: "commodore-vic20",
    _B.COMMODORE64: "commodore64",
    _B.CPC: "cpc",
    _B.GAMEBOY: "gameboy",
    _B.GAMEBOY_COLOR: "gameboy-color-type1",
    _B.MASTER_SYSTEM: "master-system",
    _B.MSX1: "msx1",
    _B.MSX2: "msx2",
    _B.NES: "nes",
    _B.NES_NTSC: "nes-ntsc",
    _B.TELETEXT: "teletext",
    _B.VGA13H: "vga-13h",
    _B.VIRTUAL_BOY: "virtualboy",
    _B.ZX_SPECTRUM: "zx-spectrum",
    _B.MAIL24: "mail24",
    _B.NYX8: "nyx8",
    _B.PICO8: "pico-8",
    _B.BUBBLEGUM16: "bubblegum-16",
    _B.ROSY42: "rosy-42",
    _B.GOOGLE_UI: "google-ui",
    _B.MINECRAFT: "minecraft",
    _B.MONOKAI: "monokai",
    _B.SMILE_BASIC: "smile-basic",
    _B.SOLARIZED: "solarized",
    _B.WIN16: "win16",
    _B.X11: "x11",
    _B.ZUGHY32: "zughy-32",
}

_SOURCES: dict[BuiltInPalette, str] = {
    **{member: f"{stem}.hex" for member, stem in _HEX_FILES.items()},
    **{member: f"{member.value}.json" for member in _JSON_PALETTES},
    **{member: f"{stem}.gpl" for member, stem in _GPL_FILES.items()},
}


def get_builtin_palette(name: BuiltInPalette | str) -> Palette:
    """Return the built-in palette with the given name."""
    member = name if isinstance(name, BuiltInPalette) else BuiltInPalette(name)

    inline = _INLINE.get(member)
    if inline is not None:
        return Palette.from_ints(inline)

    relative = _SOURCES[member]
    fmt = PaletteFormat.guess(relative)
    if fmt is None:
        raise PaletteError(f"unknown format for built-in palette {member}")
    try:
        text = (_DATA_DIR / relative).read_text(encoding="utf-8")
    except OSError as e:
        raise PaletteError(f"built-in palette {member} is unavailable: {e}") from e
    return load_from_string(text, fmt)