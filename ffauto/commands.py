"""The encoding and information commands built on ffmpeg and ffprobe."""

from __future__ import annotations

import math
import sys
from datetime import timedelta
from decimal import Decimal
from os import fspath

from termcolor import colored

from .enums import OptimizeTarget, StatsMode, VideoCodec
from .filters import (
    add_color_sharpness_filters,
    add_crop_scale_tonemap_filters,
    add_fps_filter,
    ffprobe_output,
    generate_palette_filtergraph,
    parse_duration,
    parse_seek,
)
from .options import AutoArgs, GifArgs, GlobalOptions, InfoArgs, QuantArgs
from .probe import ProbeError, ProbeOutput, Stream, StreamType, ffprobe
from .runner import run_ffmpeg

__all__ = [
    "auto_arguments",
    "gif_arguments",
    "quant_arguments",
    "describe_stream",
    "describe_streams",
    "ffmpeg_auto",
    "ffmpeg_gif",
    "ffmpeg_quant",
    "ffmpeg_info",
]

_PGS_CODEC = "hdmv_pgs_subtitle"

_TYPE_COLORS = {
    StreamType.VIDEO: "blue",
    StreamType.AUDIO: "red",
    StreamType.SUBTITLE: "magenta",
    StreamType.DATA: "green",
}

_TARGET_VIDEO_ARGS: dict[OptimizeTarget, list[str]] = {
    OptimizeTarget.IPOD5: [
        "-profile:v", "baseline",
        "-level", "1.3",
        "-maxrate", "768K",
        "-bufsize", "2M",
        "-c:s", "mov_text",
        "-tag:s", "tx3g",
    ],
    OptimizeTarget.IPOD: [
        "-profile:v", "baseline",
        "-level", "3.0",
        "-maxrate", "2.5M",
        "-bufsize", "5M",
        "-c:s", "mov_text",
        "-tag:s", "tx3g",
    ],
    OptimizeTarget.PSP: [
        "-profile:v", "main",
        "-level", "3.0",
        "-maxrate", "3M",
        "-bufsize", "6M",
    ],
    OptimizeTarget.PS_VITA: [
        "-profile:v", "high",
        "-level", "4.1",
        "-maxrate", "10M",
        "-bufsize", "20M",
    ],
}


def _display_float(value: float) -> str:
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


def _seconds(duration: timedelta) -> str:
    return _display_float(duration.total_seconds())


def _video_stream(probe: ProbeOutput) -> Stream:
    stream = probe.get_first_video_stream()
    if stream is None:
        raise ProbeError("The input file needs to contain a usable video stream")
    return stream


def _fades(fade: float, fade_in: float, fade_out: float) -> tuple[float, float]:
    if fade != 0.0:
        return fade, fade
    return fade_in, fade_out


def _fade_out_start(
    duration: timedelta | None,
    video_duration: timedelta,
    seek: timedelta | None,
    fade_out: float,
) -> float:
    if duration is not None:
        return duration.total_seconds() - fade_out
    start = seek or timedelta(0)
    if start > video_duration:
        raise ValueError("the seek position lies beyond the end of the input")
    return (video_duration - start).total_seconds() - fade_out


def _video_fades(video_filter: list[str], fade_in: float, fade_out: float, fade_out_start: float) -> None:
    if fade_in > 0.0:
        video_filter.append(f"fade=t=in:st=0:d={fade_in:.3f}")
    if fade_out > 0.0:
        video_filter.append(f"fade=t=out:st={fade_out_start:.3f}:d={fade_out:.3f}")


def auto_arguments(opts: GlobalOptions, args: AutoArgs, probe: ProbeOutput) -> list[str]:
    """Build the ffmpeg arguments of the general-purpose encoding command."""
    first_audio = probe.get_first_audio_stream()
    first_video = probe.get_first_video_stream()
    if first_audio is None and first_video is None:
        raise ProbeError("The input file contains no usable audio/video streams")

    video_stream = _video_stream(probe)
    video_duration = probe.duration()

    ffargs = ["-hide_banner", "-loglevel", "warning", "-y"]

    seek = parse_seek(opts.seek)
    duration = parse_duration(seek, args.duration, args.duration_to)

    if seek is not None:
        ffargs += ["-ss", _seconds(seek)]
    ffargs += ["-i", fspath(args.input)]
    if duration is not None:
        ffargs += ["-t", _seconds(duration)]

    ffargs += ["-metadata:s", 'handler_name=""']
    ffargs += ["-empty_hdlr_name", "1"]

    if args.video_language is not None:
        ffargs += ["-map", f"0:V:m:language:{args.video_language}"]
    else:
        ffargs += ["-map", f"0:V:{args.video_index}"]

    if args.audio_language is not None:
        ffargs += ["-map", f"0:a:m:language:{args.audio_language}"]
    else:
        ffargs += ["-map", f"0:a:{args.audio_index}"]

    if args.sub_language is not None:
        ffargs += ["-map", f"0:s:m:language:{args.sub_language}:?"]
    elif args.sub_index is not None:
        ffargs += ["-map", f"0:s:{args.sub_index}:?"]
    elif any(
        s.codec_type is StreamType.SUBTITLE and s.codec_name != _PGS_CODEC for s in probe.streams
    ):
        ffargs += ["-map", "0:s?"]
    else:
        # only image-based subtitles, which cannot be carried over
        ffargs.append("-sn")

    fade_in, fade_out = _fades(args.fade, args.fade_in, args.fade_out)
    fade_out_start = _fade_out_start(duration, video_duration, seek, fade_out)

    if first_audio is None or args.mute:
        ffargs.append("-an")
    elif args.audio_copy_possible(first_audio.codec_name):
        ffargs += ["-c:a", "copy"]
    else:
        ffargs += ["-c:a", args.video_codec.audio_codec()]
        bitrate = "160k" if args.optimize_target is OptimizeTarget.IPOD else "256k"
        ffargs += ["-b:a", bitrate]

        if args.audio_channels is not None:
            ffargs += ["-ac", str(args.audio_channels)]

        if args.needs_audio_filter():
            audio_filter = []
            if args.audio_volume != 1.0:
                audio_filter.append(f"volume={args.audio_volume:.3f}")
            if fade_in > 0.0:
                audio_filter.append(f"afade=t=in:st=0:d={fade_in:.3f}:curve=losi")
            if fade_out > 0.0:
                audio_filter.append(
                    f"afade=t=out:st={fade_out_start:.3f}:d={fade_out:.3f}:curve=losi"
                )
            ffargs += ["-af", ",".join(audio_filter)]

    codec = args.video_codec
    ffargs += ["-c:v", codec.video_codec()]
    ffargs += ["-crf", str(codec.crf_with_garbage(args.garbage))]
    ffargs += ["-pix_fmt", codec.pix_fmt()]
    ffargs += ["-preset", "slower"]
    if codec is VideoCodec.H264:
        ffargs += ["-tune", "film"]
    else:
        ffargs += ["-tune", "grain", "-tag:v", "hvc1"]

    ffargs += ["-partitions", "all"]
    ffargs += ["-me_method", "tesa"]

    if args.optimize_target is not None:
        ffargs += _TARGET_VIDEO_ARGS[args.optimize_target]

    if args.faststart:
        ffargs += ["-movflags", "faststart"]

    if args.needs_video_filter(opts):
        video_filter: list[str] = []
        add_fps_filter(video_filter, args.framerate, args.framerate_mult, video_stream.frame_rate())
        is_hdr = (args.tonemap or codec is not VideoCodec.H265_10) and video_stream.is_hdr()
        add_crop_scale_tonemap_filters(video_filter, opts, is_hdr)
        _video_fades(video_filter, fade_in, fade_out, fade_out_start)
        ffargs += ["-vf", ",".join(video_filter)]

    ffargs.append(fspath(args.output))
    return ffargs


def gif_arguments(opts: GlobalOptions, args: GifArgs, probe: ProbeOutput) -> list[str]:
    """Build the ffmpeg arguments of the GIF encoding command."""
    video_stream = _video_stream(probe)
    video_duration = probe.duration()

    ffargs = ["-hide_banner", "-loglevel", "error", "-y"]

    seek = parse_seek(opts.seek)
    duration = parse_duration(seek, args.duration, args.duration_to)

    if seek is not None:
        ffargs += ["-ss", _seconds(seek)]
    # as an input option, limits the amount of data read
    if duration is not None:
        ffargs += ["-t", _seconds(duration)]
    ffargs += ["-i", fspath(args.input)]
    # as an output option, limits the amount of data written
    if duration is not None:
        ffargs += ["-t", _seconds(duration)]

    ffargs += ["-an", "-dn", "-sn"]

    video_filter: list[str] = []
    add_fps_filter(video_filter, args.framerate, args.framerate_mult, video_stream.frame_rate())
    add_crop_scale_tonemap_filters(video_filter, opts, video_stream.is_hdr())
    add_color_sharpness_filters(
        video_filter, args.brightness, args.contrast, args.saturation, args.sharpness
    )

    fade_in, fade_out = _fades(args.fade, args.fade_in, args.fade_out)
    fade_out_start = _fade_out_start(duration, video_duration, seek, fade_out)
    _video_fades(video_filter, fade_in, fade_out, fade_out_start)

    filter_complex = generate_palette_filtergraph(
        True,
        args.dedup,
        video_filter,
        args.palette_file,
        args.palette_name,
        args.num_colors,
        args.stats_mode,
        args.diff_rect,
        args.dither,
        args.bayer_scale,
    )
    ffargs += ["-filter_complex", filter_complex]

    if args.dedup:
        ffargs += ["-fps_mode", "vfr"]
    ffargs += ["-f", "gif", "-loop", "0"]

    ffargs.append(fspath(args.output))
    return ffargs


def quant_arguments(opts: GlobalOptions, args: QuantArgs, probe: ProbeOutput) -> list[str]:
    """Build the ffmpeg arguments that quantise a single frame."""
    video_stream = _video_stream(probe)

    ffargs = ["-hide_banner", "-loglevel", "error", "-y"]

    seek = parse_seek(opts.seek)
    if seek is not None:
        ffargs += ["-ss", _seconds(seek)]

    # limit reading to a single frame where the frame rate is known
    fps = video_stream.frame_rate()
    if fps is not None:
        frame_time = 1.0 / fps if fps != 0 else math.copysign(math.inf, fps)
        ffargs += ["-t", _display_float(frame_time)]
    else:
        ffargs += ["-t", "1"]

    ffargs += ["-i", fspath(args.input)]
    ffargs += ["-an", "-dn", "-sn"]
    ffargs += ["-frames:v", "1"]
    ffargs += ["-update", "1"]

    video_filter = ["select=eq(n\\,0)"]
    add_crop_scale_tonemap_filters(video_filter, opts, video_stream.is_hdr())
    add_color_sharpness_filters(
        video_filter, args.brightness, args.contrast, args.saturation, args.sharpness
    )

    filter_complex = generate_palette_filtergraph(
        True,
        False,
        video_filter,
        args.palette_file,
        args.palette_name,
        args.num_colors,
        StatsMode.default(),
        False,
        args.dither,
        args.bayer_scale,
    )
    ffargs += ["-filter_complex", filter_complex]

    ffargs.append(fspath(args.output))
    return ffargs


def _require(value: str | None, name: str, stream: Stream) -> str:
    if value is None:
        raise ProbeError(f"stream {stream.index} has no {name}")
    return value


def _video_details(stream: Stream) -> str:
    codec_name = _require(stream.codec_name, "codec name", stream)
    profile = _require(stream.profile, "profile", stream)
    pix_fmt = _require(stream.pix_fmt, "pixel format", stream)

    text = f"{codec_name} ({profile}), {pix_fmt} "

    width = stream.width or 0
    height = stream.height or 0
    fps = stream.frame_rate()
    if fps is None:
        fps = 0.0

    format_info = [v for v in (stream.field_order, stream.color_range) if v is not None]
    color_info = [
        v for v in (stream.color_space, stream.color_primaries, stream.color_transfer) if v is not None
    ]
    if color_info:
        # a single value stands for all three when they agree
        if all(c == color_info[0] for c in color_info):
            format_info.append(color_info[0])
        else:
            format_info.append("/".join(color_info))
    if format_info:
        text += f"({', '.join(format_info)})"

    fps_text = f"{fps:.3f}".rstrip("0").rstrip(".")
    if stream.sar is not None and stream.dar is not None:
        text += f", {width}×{height} ({stream.sar}/{stream.dar}), {fps_text} fps"
    else:
        text += f", {width}×{height}, {fps_text} fps"
    return text


def _audio_details(stream: Stream) -> str:
    codec_name = _require(stream.codec_name, "codec name", stream)
    sample_rate = _require(stream.sample_rate, "sample rate", stream)
    channel_layout = _require(stream.channel_layout, "channel layout", stream)
    sample_fmt = _require(stream.sample_fmt, "sample format", stream)
    channels = stream.channels or 0

    text = codec_name
    if stream.profile is not None:
        text += f" ({stream.profile})"
    text += f", {sample_rate} Hz, {channels}ch: {channel_layout}, {sample_fmt}"
    if stream.bits_per_raw_sample is not None:
        text += f" ({stream.bits_per_raw_sample})"
    if stream.bit_rate is not None:
        try:
            kbps = float(stream.bit_rate) / 1000.0
        except ValueError as e:
            raise ProbeError(f'invalid bit rate "{stream.bit_rate}"') from e
        text += f", {_display_float(kbps)} kb/s"
    return text


def describe_stream(stream: Stream, type_index: int) -> str:
    """Return a one-line description of a stream."""
    kind = stream.codec_type
    line = f"[{stream.index}|{type_index}] {colored(str(kind), _TYPE_COLORS[kind])}"

    extra = []
    if stream.tags is not None:
        if stream.tags.language is not None:
            extra.append(stream.tags.language)
        if stream.tags.title is not None:
            extra.append(f'"{stream.tags.title}"')
    if stream.disposition is not None and stream.disposition.default == 1:
        extra.append("default")
    if extra:
        line += f"({', '.join(extra)})"

    line += ": "

    if kind is StreamType.VIDEO:
        line += _video_details(stream)
    elif kind is StreamType.AUDIO:
        line += _audio_details(stream)
    elif kind is StreamType.SUBTITLE:
        line += _require(stream.codec_name, "codec name", stream)
    else:
        line += "data?"
    return line


def describe_streams(probe: ProbeOutput) -> list[str]:
    """Describe every stream; the type index restarts whenever the type changes."""
    lines = []
    last_type: StreamType | None = None
    type_index = 0
    for stream in probe.streams:
        if stream.codec_type is not last_type:
            last_type = stream.codec_type
            type_index = 0
        else:
            type_index += 1
        lines.append(describe_stream(stream, type_index))
    return lines


def ffmpeg_auto(opts: GlobalOptions, args: AutoArgs) -> None:
    """Encode a video with the general-purpose settings."""
    probe = ffprobe_output(args.input)
    run_ffmpeg(auto_arguments(opts, args, probe), True, opts.debug)


def ffmpeg_gif(opts: GlobalOptions, args: GifArgs) -> None:
    """Encode a video as an animated GIF."""
    probe = ffprobe_output(args.input)
    run_ffmpeg(gif_arguments(opts, args, probe), False, opts.debug)


def ffmpeg_quant(opts: GlobalOptions, args: QuantArgs) -> None:
    """Quantise a still image to a palette."""
    probe = ffprobe(args.input, False)
    run_ffmpeg(quant_arguments(opts, args, probe), False, opts.debug)


def ffmpeg_info(args: InfoArgs) -> None:
    """Print a formatted description of the input's streams."""
    probe = ffprobe_output(args.input)

    if probe.get_first_video_stream() is None:
        print("NOTE: The input file has no video streams!", file=sys.stderr)
    if probe.get_first_audio_stream() is None:
        print("NOTE: The input file has no audio streams!", file=sys.stderr)

    for line in describe_streams(probe):
        print(line)