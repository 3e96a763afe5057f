"""Option enumerations and the crop rectangle."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = ["ScaleMode", "VideoCodec", "OptimizeTarget", "StatsMode", "DitherMode", "Crop"]

_U64_MAX = 2**64 - 1


class ScaleMode(Enum):
    """Scaling algorithms offered by ffmpeg's scale filter."""

    NEAREST = "nearest"
    BILINEAR = "bilinear"
    FAST_BILINEAR = "fast-bilinear"
    BICUBLIN = "bicublin"
    BICUBIC = "bicubic"
    AREA = "area"
    GAUSS = "gauss"
    SINC = "sinc"
    LANCZOS = "lanczos"
    SPLINE = "spline"

    @classmethod
    def default(cls) -> ScaleMode:
        return cls.BICUBIC

    def __str__(self) -> str:
        return _SCALE_FLAGS[self]


_SCALE_FLAGS = {
    ScaleMode.NEAREST: "neighbor",
    ScaleMode.BILINEAR: "bilinear",
    ScaleMode.FAST_BILINEAR: "fast_bilinear",
    ScaleMode.BICUBLIN: "bicublin",
    ScaleMode.BICUBIC: "bicubic",
    ScaleMode.AREA: "area",
    ScaleMode.GAUSS: "gauss",
    ScaleMode.SINC: "sinc",
    ScaleMode.LANCZOS: "lanczos",
    ScaleMode.SPLINE: "spline",
}


class VideoCodec(Enum):
    """Output video codecs."""

    H264 = "h264"
    H265 = "h265"
    H265_10 = "h265-10"

    @classmethod
    def default(cls) -> VideoCodec:
        return cls.H264

    def __str__(self) -> str:
        return "h264" if self is VideoCodec.H264 else "h265"

    def video_codec(self) -> str:
        return "libx264" if self is VideoCodec.H264 else "libx265"

    def audio_codec(self) -> str:
        return "aac"

    def pix_fmt(self) -> str:
        return "yuv420p10le" if self is VideoCodec.H265_10 else "yuv420p"

    def default_crf(self) -> int:
        return 23 if self is VideoCodec.H264 else 28

    def crf_with_garbage(self, garbage: int) -> int:
        """Return the CRF raised by three for each level of garbage, clamped to 0..51."""
        return min(max(self.default_crf() + garbage * 3, 0), 51)


class OptimizeTarget(Enum):
    """Devices whose playback limits can be targeted."""

    IPOD5 = "ipod5"
    IPOD = "ipod"
    PSP = "psp"
    PS_VITA = "ps-vita"

    def __str__(self) -> str:
        return self.value


class StatsMode(Enum):
    """palettegen statistics modes."""

    FULL = "full"
    DIFF = "diff"
    SINGLE = "single"

    @classmethod
    def default(cls) -> StatsMode:
        return cls.FULL

    def __str__(self) -> str:
        return self.value


class DitherMode(Enum):
    """paletteuse dithering modes."""

    BAYER = "bayer"
    HECKBERT = "heckbert"
    FLOYD_STEINBERG = "floyd-steinberg"
    SIERRA2 = "sierra2"
    SIERRA2_4A = "sierra2-4a"
    SIERRA3 = "sierra3"
    BURKES = "burkes"
    ATKINSON = "atkinson"
    NONE = "none"

    @classmethod
    def default(cls) -> DitherMode:
        return cls.SIERRA2_4A

    def __str__(self) -> str:
        if self is DitherMode.FLOYD_STEINBERG:
            return "floyd_steinberg"
        return self.value


_NUMBER_RE = re.compile(r"-?\d+", re.ASCII)


@dataclass(frozen=True)
class Crop:
    """A crop rectangle; zero width or height means "keep the input's"."""

    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0

    @classmethod
    def parse(cls, crop_str: str) -> Crop:
        """Parse ``H``, ``WxH`` or ``WxH,X;Y`` (any separators) into a crop."""
        error = ValueError(f'"{crop_str}" is not a valid crop value')

        numbers = [int(n) for n in _NUMBER_RE.findall(crop_str)]
        if any(n < 0 or n > _U64_MAX for n in numbers):
            raise error

        match numbers:
            case [h] if h > 0:
                return cls(height=h)
            case [w, h] if w > 0 and h > 0:
                return cls(width=w, height=h)
            case [w, h, x, y] if w > 0 and h > 0:
                return cls(width=w, height=h, x=x, y=y)
            case _:
                raise error

    def __str__(self) -> str:
        if self.height == 0:
            text = f"w={self.width}"
        elif self.width == 0:
            text = f"h={self.height}"
        else:
            text = f"w={self.width}:h={self.height}"
        if self.x > 0:
            text += f":x={self.x}"
        if self.y > 0:
            text += f":y={self.y}"
        return text