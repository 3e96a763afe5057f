"""Building ffmpeg filter strings from command options."""

from __future__ import annotations

import math
from datetime import timedelta
from decimal import Decimal
from os import PathLike

from .builtin import BuiltInPalette, get_builtin_palette
from .enums import Crop, DitherMode, StatsMode
from .formats import load_from_file
from .options import GlobalOptions
from .palette import EmptyPaletteError, Palette
from .probe import ProbeError, ProbeOutput, ffprobe
from .sizes import parse_ffmpeg_size
from .timestamps import parse_ffmpeg_duration

__all__ = [
    "parse_seek",
    "parse_duration",
    "palette_to_ffmpeg",
    "generate_scale_filter",
    "add_fps_filter",
    "add_crop_scale_tonemap_filters",
    "add_color_sharpness_filters",
    "generate_palette_filtergraph",
    "ffprobe_output",
]

_PALETTE_SLOTS = 256
_SCALE_FLAGS = "accurate_rnd+full_chroma_int+full_chroma_inp"
_TONEMAP = (
    "zscale=t=linear:npl=100,format=gbrpf32le,zscale=p=bt709,"
    "tonemap=tonemap=hable:desat=0,zscale=t=bt709:m=bt709"
)


def _format_float(value: float) -> str:
    """Format a float the shortest way, without exponent or trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        return format(Decimal(text), "f")
    return text


def parse_seek(seek: str | None) -> timedelta | None:
    """Parse the seek option, if any."""
    if seek is None:
        return None
    return parse_ffmpeg_duration(seek)


def parse_duration(
    seek: timedelta | None, duration: str | None, duration_to: str | None
) -> timedelta | None:
    """Work out the output duration from ``-t`` or from ``--to`` and the seek."""
    if duration is not None:
        return parse_ffmpeg_duration(duration)

    if seek is not None and duration_to is not None:
        end = parse_ffmpeg_duration(duration_to)
        if end is None:
            return None
        if end < seek:
            raise ValueError(f'end time "{duration_to}" lies before the start time')
        return end - seek

    return None


def palette_to_ffmpeg(palette: Palette) -> str:
    """Build a filtergraph producing a 16x16 palette image from a palette."""
    colors = [entry.color for entry in palette]
    if not colors:
        raise EmptyPaletteError()

    sources = [
        f"color=c={color}:r=1:s=1x1,format=rgb24[p{i}]" for i, color in enumerate(colors, start=1)
    ]
    all_sources = "".join(f"[p{i}]" for i in range(1, len(sources) + 1))

    if len(sources) < _PALETTE_SLOTS:
        num_dummies = _PALETTE_SLOTS - len(sources)
        all_dummies = "".join(f"[d{i}]" for i in range(1, num_dummies + 1))
        sources.append(
            f"color=c={colors[-1]}:r=1:s=1x1,format=rgb24,split={num_dummies} {all_dummies}"
        )
        all_sources += all_dummies

    sources.append(f"{all_sources}xstack=grid=16x16")
    return ";".join(sources)


def generate_scale_filter(opts: GlobalOptions) -> str:
    """Return the scale filter for the requested size, or an empty string."""
    flags = f"{opts.scale_mode}+{_SCALE_FLAGS}"
    if opts.width is not None:
        return f"scale=w={opts.width}:h=-2:flags={flags}"
    if opts.height is not None:
        return f"scale=w=-2:h={opts.height}:flags={flags}"
    if opts.size is not None:
        size = parse_ffmpeg_size(opts.size)
        return (
            f"scale=w={size.width}:h={size.height}:force_original_aspect_ratio=decrease"
            f":force_divisible_by=2:flags={flags}"
        )
    return ""


def add_fps_filter(
    video_filter: list[str],
    fps: float | None,
    fps_mult: float | None,
    stream_fps: float | None,
) -> None:
    """Append an fps filter for an absolute rate or a factor of the input rate."""
    if fps is not None:
        video_filter.append(f"fps=fps={fps:.3f}")
    elif fps_mult is not None and stream_fps is not None:
        video_filter.append(f"fps=fps={stream_fps * fps_mult:.3f}")


def add_crop_scale_tonemap_filters(video_filter: list[str], opts: GlobalOptions, is_hdr: bool) -> None:
    """Append crop, scale and HDR tonemapping filters as requested."""
    if opts.crop is not None:
        video_filter.append(f"crop={Crop.parse(opts.crop)}")

    scale = generate_scale_filter(opts)
    if scale:
        video_filter.append(scale)

    if is_hdr:
        video_filter.append(_TONEMAP)


def add_color_sharpness_filters(
    video_filter: list[str],
    brightness: float,
    contrast: float,
    saturation: float,
    sharpness: float,
) -> None:
    """Append eq and unsharp filters for non-default colour and sharpness."""
    eq_args = []
    if brightness != 0.0:
        eq_args.append(f"brightness={_format_float(brightness)}")
    if contrast != 1.0:
        eq_args.append(f"contrast={_format_float(contrast)}")
    if saturation != 1.0:
        eq_args.append(f"saturation={_format_float(saturation)}")
    if eq_args:
        video_filter.append(f"eq={':'.join(eq_args)}")

    if sharpness != 0.0:
        amount = _format_float(sharpness)
        video_filter.append(f"unsharp=la={amount}:ca={amount}")


def generate_palette_filtergraph(
    gif: bool,
    dedup: bool,
    video_filter: list[str],
    palette_file: str | PathLike[str] | None,
    palette_name: BuiltInPalette | None,
    num_colors: int,
    stats_mode: StatsMode,
    diff_rect: bool,
    dither: DitherMode,
    bayer_scale: int,
) -> str:
    """Build the complex filtergraph that quantises the video to a palette."""
    filters = list(video_filter)
    if gif and dedup:
        filters.append("mpdecimate")
    filters.append("setsar=1")

    bayer = f":bayer_scale={bayer_scale}" if dither is DitherMode.BAYER else ""
    diff_mode = ":diff_mode=rectangle" if gif and diff_rect else ""

    if palette_file is not None or palette_name is not None:
        if palette_file is not None:
            palette = load_from_file(palette_file)
        else:
            palette = get_builtin_palette(palette_name)
        pal_string = palette_to_ffmpeg(palette)
        return ";".join(
            [
                f"{pal_string} [pal]",
                f"[0:v] {','.join(filters)} [filtered];"
                f"[filtered][pal] paletteuse=dither={dither}{bayer}{diff_mode}",
            ]
        )

    # no palette was given, so palettegen creates one
    new = ":new=1" if gif and stats_mode is StatsMode.SINGLE else ""
    stats = f":stats_mode={stats_mode}" if gif else ""
    filters.append("split")
    return ";".join(
        [
            f"[0:v] {','.join(filters)} [a][b]",
            f"[a] palettegen=max_colors={num_colors}:reserve_transparent=0{stats} [pal]",
            f"[b][pal] paletteuse=dither={dither}{bayer}{diff_mode}{new}",
        ]
    )


def ffprobe_output(input_path: str | PathLike[str]) -> ProbeOutput:
    """Probe a file, probing again with frame counting if no duration is found."""
    probe = ffprobe(input_path, False)
    try:
        probe.duration()
    except ProbeError:
        return ffprobe(input_path, True)
    return probe