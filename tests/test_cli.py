from pathlib import Path

import pytest

from ffauto.builtin import BuiltInPalette
from ffauto.cli import build_parser, main, parse_args
from ffauto.enums import DitherMode, OptimizeTarget, ScaleMode, StatsMode, VideoCodec
from ffauto.options import AutoArgs, GifArgs, InfoArgs, QuantArgs


def test_no_command_gives_failure_code():
    assert main([]) == 1


def test_no_command_parses_to_none():
    opts, args = parse_args([])
    assert args is None
    assert opts.scale_mode is ScaleMode.BICUBIC
    assert opts.debug is False


def test_auto_defaults():
    opts, args = parse_args(["auto", "-i", "in.mkv", "out.mp4"])
    assert isinstance(args, AutoArgs)
    assert args.input == Path("in.mkv")
    assert args.output == Path("out.mp4")
    assert args.video_codec is VideoCodec.H264
    assert args.faststart is True
    assert args.audio_volume == 1.0
    assert args.garbage == 0
    assert args.optimize_target is None
    assert opts.seek is None


def test_global_options_before_and_after_command():
    before, _ = parse_args(["-s", "10", "--vw", "640", "info", "-i", "a.mkv"])
    after, _ = parse_args(["info", "-i", "a.mkv", "-s", "10", "--vw", "640"])
    assert before == after
    assert before.seek == "10"
    assert before.width == 640


def test_info_args():
    _, args = parse_args(["info", "-i", "movie.mkv"])
    assert args == InfoArgs(Path("movie.mkv"))


def test_garbage_counts_repetitions():
    _, args = parse_args(["auto", "-i", "a", "b", "-ggg"])
    assert args.garbage == 3


def test_enum_spellings():
    _, args = parse_args(["auto", "-i", "a", "b", "-C", "h265-10", "-O", "ps-vita"])
    assert args.video_codec is VideoCodec.H265_10
    assert args.optimize_target is OptimizeTarget.PS_VITA


def test_gif_options():
    opts, args = parse_args(
        [
            "gif", "-i", "a", "b.gif", "-P", "pico8", "--stats-mode", "single",
            "-D", "bayer", "--brightness", "-0.5", "--dedup", "-S", "lanczos",
        ]
    )
    assert isinstance(args, GifArgs)
    assert args.palette_name is BuiltInPalette.PICO8
    assert args.stats_mode is StatsMode.SINGLE
    assert args.dither is DitherMode.BAYER
    assert args.brightness == -0.5
    assert args.dedup is True
    assert opts.scale_mode is ScaleMode.LANCZOS


def test_quant_defaults():
    _, args = parse_args(["quant", "-i", "a.png", "b.png"])
    assert isinstance(args, QuantArgs)
    assert args.num_colors == 256
    assert args.bayer_scale == 2
    assert args.dither is DitherMode.SIERRA2_4A


@pytest.mark.parametrize(
    "argv",
    [
        ["--vw", "10", "--vh", "10", "info", "-i", "x"],
        ["auto", "-i", "a", "b", "-t", "5", "--to", "10"],
        ["auto", "-i", "a", "b", "-M", "-v", "2"],
        ["gif", "-i", "a", "b", "-p", "pal.gpl", "-P", "pico8"],
        ["auto", "-i", "a", "b", "-r", "30", "-R", "2"],
        ["auto", "-i", "a", "b", "-C", "vp9"],
        ["auto", "-i", "a", "b", "--video-index", "-1"],
        ["auto", "-i", "a", "b", "--audio-index", "256"],
        ["auto", "b"],
    ],
)
def test_invalid_command_lines_are_rejected(argv):
    with pytest.raises(SystemExit) as info:
        parse_args(argv)
    assert info.value.code == 2


def test_version_exits_successfully():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["--version"])
    assert info.value.code == 0


def test_parser_program_name():
    assert build_parser().prog == "ffauto"
    assert "Wraps common ffmpeg workflows" in build_parser().format_help()