"""Option sets for the commands and their device-specific adjustments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .builtin import BuiltInPalette
from .enums import DitherMode, OptimizeTarget, ScaleMode, StatsMode, VideoCodec

__all__ = ["GlobalOptions", "AutoArgs", "GifArgs", "QuantArgs", "InfoArgs"]

_TARGET_SIZES = {
    OptimizeTarget.IPOD5: "320x240",
    OptimizeTarget.IPOD: "640x480",
    # allegedly also supports 720x480 and 352x480 since firmware 3.30
    OptimizeTarget.PSP: "480x272",
    OptimizeTarget.PS_VITA: "960x540",
}


@dataclass
class GlobalOptions:
    """Options shared by every command."""

    seek: str | None = None
    crop: str | None = None
    width: int | None = None
    height: int | None = None
    size: str | None = None
    scale_mode: ScaleMode = ScaleMode.BICUBIC
    debug: bool = False

    def optimize_settings(self, optimize_target: OptimizeTarget | None) -> None:
        """Replace any requested output size with the target device's size."""
        if optimize_target is None:
            return
        self.width = None
        self.height = None
        self.size = _TARGET_SIZES[optimize_target]


@dataclass
class AutoArgs:
    """Options of the general-purpose encoding command."""

    input: Path
    output: Path
    duration: str | None = None
    duration_to: str | None = None
    tonemap: bool = False
    faststart: bool = True
    mute: bool = False
    audio_volume: float = 1.0
    audio_channels: str | None = None
    video_index: int = 0
    video_language: str | None = None
    audio_index: int = 0
    audio_language: str | None = None
    sub_index: int | None = None
    sub_language: str | None = None
    fade: float = 0.0
    fade_in: float = 0.0
    fade_out: float = 0.0
    framerate: float | None = None
    framerate_mult: float | None = None
    video_codec: VideoCodec = VideoCodec.H264
    optimize_target: OptimizeTarget | None = None
    garbage: int = 0

    def _has_fades(self) -> bool:
        return self.fade != 0.0 or self.fade_in != 0.0 or self.fade_out != 0.0

    def audio_copy_possible(self, input_codec_name: str | None) -> bool:
        """True if the input audio can be copied without re-encoding."""
        return (
            not self.mute
            and self.audio_channels is None
            and input_codec_name == "aac"
            and self.audio_volume == 1.0
            and not self._has_fades()
        )

    def needs_audio_filter(self) -> bool:
        return self.audio_volume != 1.0 or self._has_fades()

    def needs_video_filter(self, opts: GlobalOptions) -> bool:
        return (
            opts.width is not None
            or opts.height is not None
            or opts.size is not None
            or self._has_fades()
            or opts.crop is not None
            or self.framerate is not None
            or self.tonemap
        )

    def optimize_settings(self) -> None:
        """Force settings every optimisation target needs."""
        if self.optimize_target is None:
            return
        # none of the optimisation targets support HDR media
        self.tonemap = True
        self.faststart = True
        self.audio_channels = "2"
        self.video_codec = VideoCodec.H264


@dataclass
class GifArgs:
    """Options of the GIF encoding command."""

    input: Path
    output: Path
    duration: str | None = None
    duration_to: str | None = None
    fade: float = 0.0
    fade_in: float = 0.0
    fade_out: float = 0.0
    framerate: float | None = None
    framerate_mult: float | None = None
    dedup: bool = False
    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0
    sharpness: float = 0.0
    palette_file: Path | None = None
    palette_name: BuiltInPalette | None = None
    num_colors: int = 256
    stats_mode: StatsMode = StatsMode.FULL
    dither: DitherMode = DitherMode.SIERRA2_4A
    bayer_scale: int = 2
    diff_rect: bool = False


@dataclass
class QuantArgs:
    """Options of the still-image quantisation command."""

    input: Path
    output: Path
    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0
    sharpness: float = 0.0
    palette_file: Path | None = None
    palette_name: BuiltInPalette | None = None
    num_colors: int = 256
    dither: DitherMode = DitherMode.SIERRA2_4A
    bayer_scale: int = 2


@dataclass
class InfoArgs:
    """Options of the stream information command."""

    input: Path