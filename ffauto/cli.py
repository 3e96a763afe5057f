"""Command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import fields, replace
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable, Sequence, TypeVar

import humanize

from .builtin import BuiltInPalette
from .commands import ffmpeg_auto, ffmpeg_gif, ffmpeg_info, ffmpeg_quant
from .enums import DitherMode, OptimizeTarget, ScaleMode, StatsMode, VideoCodec
from .options import AutoArgs, GifArgs, GlobalOptions, InfoArgs, QuantArgs
from .palette import PaletteError
from .probe import ProbeError
from .runner import FFmpegError

__all__ = ["build_parser", "parse_args", "main"]

_E = TypeVar("_E", bound=Enum)
_D = TypeVar("_D")

_FAILURES = (ProbeError, FFmpegError, PaletteError, ValueError, OSError)


def _version() -> str:
    try:
        return version("ffauto")
    except PackageNotFoundError:
        return "n/a"


def _cli_name(member: Enum) -> str:
    if isinstance(member, BuiltInPalette):
        return member.value
    return member.name.lower().replace("_", "-")


def _enum_type(enum_cls: type[_E]) -> tuple[Callable[[str], _E], str]:
    """Return a converter for command-line enum names and a metavar listing them."""
    mapping = {_cli_name(member): member for member in enum_cls}

    def convert(text: str) -> _E:
        try:
            return mapping[text]
        except KeyError:
            raise argparse.ArgumentTypeError(
                f"invalid value '{text}' (choose from {', '.join(mapping)})"
            ) from None

    convert.__name__ = enum_cls.__name__
    return convert, "{" + ",".join(mapping) + "}"


def _unsigned(bits: int) -> Callable[[str], int]:
    limit = 2**bits - 1

    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer '{text}'") from None
        if not 0 <= value <= limit:
            raise argparse.ArgumentTypeError(f"{value} is not in 0..{limit}")
        return value

    convert.__name__ = f"u{bits}"
    return convert


def _add_enum(parser, *flags: str, enum_cls: type[Enum], **kwargs) -> None:
    convert, metavar = _enum_type(enum_cls)
    parser.add_argument(*flags, type=convert, metavar=metavar, **kwargs)


def _add_global_options(parser: argparse.ArgumentParser, suppress: bool) -> None:
    def default(value):
        return argparse.SUPPRESS if suppress else value

    parser.add_argument("-s", "--seek", default=default(None), help="The start time offset")
    parser.add_argument(
        "-c",
        "--crop",
        default=default(None),
        help="Crops the output video. Format H, WxH, or WxH,X;Y. (applied before scaling)",
    )
    resize = parser.add_mutually_exclusive_group()
    resize.add_argument(
        "--vw", dest="width", type=_unsigned(64), default=default(None),
        help="Sets the output video width, preserving aspect ratio.",
    )
    resize.add_argument(
        "--vh", dest="height", type=_unsigned(64), default=default(None),
        help="Sets the output video height, preserving aspect ratio.",
    )
    resize.add_argument(
        "--vs", dest="size", default=default(None),
        help="Sets the rectangle the output video size must fit into. Format WxH or an ffmpeg size name.",
    )
    _add_enum(
        parser, "-S", "--scale-mode", enum_cls=ScaleMode, dest="scale_mode",
        default=default(ScaleMode.BICUBIC), help="Scaling algorithm",
    )
    parser.add_argument("--debug", action="store_true", default=default(False))


def _add_io(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-i", dest="input", type=Path, required=True, help="The input file")
    parser.add_argument("output", type=Path, help="The output file")


def _add_seeking(parser: argparse.ArgumentParser) -> None:
    seeking = parser.add_mutually_exclusive_group()
    seeking.add_argument("-t", dest="duration", help="The output duration")
    seeking.add_argument("--to", dest="duration_to", help="The end time offset")


def _add_fades(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f", "--fade", type=float, default=0.0,
        help="Sets the fade in and out durations. Takes precedence over -fi/-fo.",
    )
    parser.add_argument("--fi", dest="fade_in", type=float, default=0.0, help="Sets the fade in duration.")
    parser.add_argument("--fo", dest="fade_out", type=float, default=0.0, help="Sets the fade out duration.")


def _add_framerates(parser: argparse.ArgumentParser) -> None:
    rates = parser.add_mutually_exclusive_group()
    rates.add_argument("-r", "--framerate", type=float, help="Sets the output video frame rate.")
    rates.add_argument(
        "-R", "--framerate-mult", dest="framerate_mult", type=float,
        help="Sets the output video frame rate to a factor of the input video frame rate.",
    )


def _add_color(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--brightness", type=float, default=0.0,
                        help="Affects the output brightness, range [-1.0;1.0]")
    parser.add_argument("--contrast", type=float, default=1.0,
                        help="Affects the output contrast, range [-1000.0;1000.0]")
    parser.add_argument("--saturation", type=float, default=1.0,
                        help="Affects the output saturation, range [0.0;3.0]")
    parser.add_argument("--sharpness", type=float, default=0.0,
                        help="Affects the output sharpness, range [-1.5;1.5]")


def _add_palette(parser: argparse.ArgumentParser, file_help: str) -> None:
    palette = parser.add_mutually_exclusive_group()
    palette.add_argument("-p", "--palette-file", dest="palette_file", type=Path, help=file_help)
    _add_enum(palette, "-P", "--palette-name", enum_cls=BuiltInPalette, dest="palette_name",
              help="A built-in palette")
    palette.add_argument("-n", dest="num_colors", type=_unsigned(16), default=256,
                         help="The number of colors in the palette (palettegen)")


def _add_dither(parser: argparse.ArgumentParser) -> None:
    _add_enum(parser, "-D", "--dither", enum_cls=DitherMode, default=DitherMode.SIERRA2_4A,
              help="The dithering mode (paletteuse)")
    parser.add_argument("--bayer-scale", dest="bayer_scale", type=_unsigned(16), default=2,
                        help="The bayer pattern scale in the range [0;5] (paletteuse)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog="ffauto", description="Wraps common ffmpeg workflows")
    parser.add_argument("-V", "--version", action="version", version=_version())
    _add_global_options(parser, suppress=False)

    shared = argparse.ArgumentParser(add_help=False)
    _add_global_options(shared, suppress=True)

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    auto = sub.add_parser("auto", parents=[shared], help="Common ffmpeg wrapper")
    _add_io(auto)
    _add_seeking(auto)
    auto.add_argument("-T", "--tonemap", action="store_true", help="Performs an HDR-to-SDR tonemap")
    auto.add_argument("-F", "--faststart", action="store_true", default=True,
                      help="Moves moov atom to the start")
    volume = auto.add_mutually_exclusive_group()
    volume.add_argument("-M", "--mute", action="store_true", help="Removes the audio stream")
    volume.add_argument("-v", "--volume", dest="audio_volume", type=float, default=1.0,
                        help="Sets the output audio volume factor")
    auto.add_argument("--channels", dest="audio_channels",
                      help="Sets the number of output audio channels")
    video_select = auto.add_mutually_exclusive_group()
    video_select.add_argument("--video-index", dest="video_index", type=_unsigned(8), default=0,
                              help="Selects a video stream by index")
    video_select.add_argument("--video-lang", dest="video_language",
                              help="Selects a video stream by language (ISO 639-2)")
    audio_select = auto.add_mutually_exclusive_group()
    audio_select.add_argument("--audio-index", dest="audio_index", type=_unsigned(8), default=0,
                              help="Selects an audio stream by index")
    audio_select.add_argument("--audio-lang", dest="audio_language",
                              help="Selects an audio stream by language (ISO 639-2)")
    sub_select = auto.add_mutually_exclusive_group()
    sub_select.add_argument("--sub-index", dest="sub_index", type=_unsigned(8),
                            help="Selects a subtitle stream by index")
    sub_select.add_argument("--sub-lang", dest="sub_language",
                            help="Selects a subtitle stream by language (ISO 639-2)")
    _add_fades(auto)
    _add_framerates(auto)
    _add_enum(auto, "-C", "--codec", enum_cls=VideoCodec, dest="video_codec",
              default=VideoCodec.H264, help="The video codec")
    _add_enum(auto, "-O", "--optimize", enum_cls=OptimizeTarget, dest="optimize_target",
              help="Optimize settings for certain devices")
    auto.add_argument("-g", dest="garbage", action="count", default=0,
                      help="Reduces video quality depending on how often this was specified")
    auto.set_defaults(_args_class=AutoArgs)

    gif = sub.add_parser("gif", parents=[shared], help="GIF encoder with a subset of features")
    _add_io(gif)
    _add_seeking(gif)
    _add_fades(gif)
    _add_framerates(gif)
    gif.add_argument("--dedup", action="store_true", help="Attempts to deduplicate frames.")
    _add_color(gif)
    _add_palette(gif, "A file containing a palette (supports ACT, COL, GPL, HEX, and PAL formats)")
    _add_enum(gif, "--stats-mode", enum_cls=StatsMode, dest="stats_mode", default=StatsMode.FULL,
              help="The statistics mode (palettegen)")
    _add_dither(gif)
    gif.add_argument("--diff-rect", dest="diff_rect", action="store_true",
                     help="Only reprocess the changed rectangle (Helps with noise and compression) (paletteuse)")
    gif.set_defaults(_args_class=GifArgs)

    quant = sub.add_parser("quant", parents=[shared], help="Uses ffmpeg to quantize still images")
    _add_io(quant)
    _add_color(quant)
    _add_palette(quant, "A file containing a palette in either ACT, COL, GPL, HEX, JSON, or PAL format")
    _add_dither(quant)
    quant.set_defaults(_args_class=QuantArgs)

    info = sub.add_parser("info", parents=[shared], help="Formats and prints ffprobe information")
    info.add_argument("-i", dest="input", type=Path, required=True, help="The input file")
    info.set_defaults(_args_class=InfoArgs)

    return parser


def _from_namespace(cls: type[_D], namespace: argparse.Namespace) -> _D:
    values = vars(namespace)
    return cls(**{f.name: values[f.name] for f in fields(cls) if f.name in values})


def parse_args(
    argv: Sequence[str] | None = None,
) -> tuple[GlobalOptions, AutoArgs | GifArgs | QuantArgs | InfoArgs | None]:
    """Parse the command line into global options and the chosen command's options."""
    namespace = build_parser().parse_args(argv)
    opts = _from_namespace(GlobalOptions, namespace)
    args_class = getattr(namespace, "_args_class", None)
    if args_class is None:
        return opts, None
    return opts, _from_namespace(args_class, namespace)


def _report_size(output: Path) -> None:
    try:
        size = os.stat(output).st_size
    except OSError as e:
        print(f"Can't determine output file size: {e}", file=sys.stderr)
        return
    print(f"Output file size: {humanize.naturalsize(size)}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit code."""
    opts, args = parse_args(argv)
    if args is None:
        return 1

    try:
        if isinstance(args, InfoArgs):
            ffmpeg_info(args)
            return 0
        if isinstance(args, AutoArgs):
            opts = replace(opts)
            opts.optimize_settings(args.optimize_target)
            args = replace(args)
            args.optimize_settings()
            ffmpeg_auto(opts, args)
        elif isinstance(args, GifArgs):
            ffmpeg_gif(opts, args)
        else:
            ffmpeg_quant(opts, args)
    except _FAILURES as e:
        print(f"execution failed: {e}", file=sys.stderr)
        return 1

    _report_size(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())