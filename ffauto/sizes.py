"""Video frame sizes as ffmpeg understands them."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["Size", "parse_ffmpeg_size"]


@dataclass(frozen=True)
class Size:
    """A frame size in pixels."""

    width: int = 0
    height: int = 0


_NAMED_SIZES = {
    "ntsc": Size(720, 480),
    "pal": Size(720, 576),
    "qntsc": Size(352, 240),
    "qpal": Size(352, 288),
    "sntsc": Size(640, 480),
    "spal": Size(768, 576),
    "film": Size(352, 240),
    "ntsc-film": Size(352, 240),
    "sqcif": Size(128, 96),
    "qcif": Size(176, 144),
    "cif": Size(352, 288),
    "4cif": Size(704, 576),
    "16cif": Size(1408, 1152),
    "qqvga": Size(160, 120),
    "qvga": Size(320, 240),
    "vga": Size(640, 480),
    "svga": Size(800, 600),
    "xga": Size(1024, 768),
    "uxga": Size(1600, 1200),
    "qxga": Size(2048, 1536),
    "sxga": Size(1280, 1024),
    "qsxga": Size(2560, 2048),
    "hsxga": Size(5120, 4096),
    "wvga": Size(852, 480),
    "wxga": Size(1366, 768),
    "wsxga": Size(1600, 1024),
    "wuxga": Size(1920, 1200),
    "woxga": Size(2560, 1600),
    "wqhd": Size(2560, 1440),
    "wqsxga": Size(3200, 2048),
    "wquxga": Size(3840, 2400),
    "whsxga": Size(6400, 4096),
    "whuxga": Size(7680, 4800),
    "cga": Size(320, 200),
    "ega": Size(640, 350),
    "hd480": Size(852, 480),
    "hd720": Size(1280, 720),
    "hd1080": Size(1920, 1080),
    "quadhd": Size(2560, 1440),
    "2k": Size(2048, 1080),
    "2kdci": Size(2048, 1080),
    "2kflat": Size(1998, 1080),
    "2kscope": Size(2048, 858),
    "4k": Size(4096, 2160),
    "4kdci": Size(4096, 2160),
    "4kflat": Size(3996, 2160),
    "4kscope": Size(4096, 1716),
    "nhd": Size(640, 360),
    "hqvga": Size(240, 160),
    "wqvga": Size(400, 240),
    "fwqvga": Size(432, 240),
    "hvga": Size(480, 320),
    "qhd": Size(960, 540),
    "uhd2160": Size(3840, 2160),
    "uhd4320": Size(7680, 4320),
}

_SIZE_RE = re.compile(r"(?P<W>\d+)x(?P<H>\d+)", re.ASCII)


def parse_ffmpeg_size(size: str) -> Size:
    """Parse an ffmpeg size name or a ``WxH`` string."""
    named = _NAMED_SIZES.get(size)
    if named is not None:
        return named

    match = _SIZE_RE.fullmatch(size)
    if match is None:
        raise ValueError(f'Invalid size string "{size}" provided')
    return Size(int(match["W"]), int(match["H"]))