from pathlib import Path

import pytest

from ffauto.enums import DitherMode, OptimizeTarget, ScaleMode, StatsMode, VideoCodec
from ffauto.options import AutoArgs, GifArgs, GlobalOptions, InfoArgs, QuantArgs


def _auto(**kwargs):
    return AutoArgs(Path("in.mkv"), Path("out.mp4"), **kwargs)


def test_global_defaults():
    opts = GlobalOptions()
    assert opts.scale_mode is ScaleMode.BICUBIC
    assert opts.seek is None and opts.size is None and opts.debug is False


@pytest.mark.parametrize(
    "target, size",
    [
        (OptimizeTarget.IPOD5, "320x240"),
        (OptimizeTarget.IPOD, "640x480"),
        (OptimizeTarget.PSP, "480x272"),
        (OptimizeTarget.PS_VITA, "960x540"),
    ],
)
def test_global_optimize_replaces_size(target, size):
    opts = GlobalOptions(width=1920, height=1080, size="hd720")
    opts.optimize_settings(target)
    assert opts.size == size
    assert opts.width is None
    assert opts.height is None


def test_global_optimize_without_target_keeps_settings():
    opts = GlobalOptions(width=1920, size="hd720")
    opts.optimize_settings(None)
    assert opts.width == 1920
    assert opts.size == "hd720"


def test_auto_defaults():
    args = _auto()
    assert args.faststart is True
    assert args.audio_volume == 1.0
    assert args.video_codec is VideoCodec.H264
    assert args.garbage == 0


def test_audio_copy_possible_for_plain_aac():
    assert _auto().audio_copy_possible("aac") is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mute": True},
        {"audio_channels": "2"},
        {"audio_volume": 0.5},
        {"fade": 1.0},
        {"fade_in": 1.0},
        {"fade_out": 1.0},
    ],
)
def test_audio_copy_blocked_by_options(kwargs):
    assert _auto(**kwargs).audio_copy_possible("aac") is False


@pytest.mark.parametrize("codec", ["opus", None])
def test_audio_copy_needs_aac(codec):
    assert _auto().audio_copy_possible(codec) is False


def test_needs_audio_filter():
    assert _auto().needs_audio_filter() is False
    assert _auto(audio_volume=2.0).needs_audio_filter() is True
    assert _auto(fade_out=0.5).needs_audio_filter() is True


def test_needs_video_filter_defaults_false():
    assert _auto().needs_video_filter(GlobalOptions()) is False


@pytest.mark.parametrize(
    "opts, kwargs",
    [
        (GlobalOptions(width=640), {}),
        (GlobalOptions(height=480), {}),
        (GlobalOptions(size="vga"), {}),
        (GlobalOptions(crop="100x100"), {}),
        (GlobalOptions(), {"fade": 1.0}),
        (GlobalOptions(), {"framerate": 24.0}),
        (GlobalOptions(), {"tonemap": True}),
    ],
)
def test_needs_video_filter_triggers(opts, kwargs):
    assert _auto(**kwargs).needs_video_filter(opts) is True


def test_auto_optimize_settings():
    args = _auto(optimize_target=OptimizeTarget.PSP, video_codec=VideoCodec.H265_10, faststart=False)
    args.optimize_settings()
    assert args.tonemap is True
    assert args.faststart is True
    assert args.audio_channels == "2"
    assert args.video_codec is VideoCodec.H264


def test_auto_optimize_settings_without_target():
    args = _auto(video_codec=VideoCodec.H265)
    args.optimize_settings()
    assert args.video_codec is VideoCodec.H265
    assert args.audio_channels is None
    assert args.tonemap is False


def test_gif_and_quant_defaults():
    gif = GifArgs(Path("a.mp4"), Path("a.gif"))
    quant = QuantArgs(Path("a.png"), Path("b.png"))
    assert gif.num_colors == 256 and quant.num_colors == 256
    assert gif.stats_mode is StatsMode.FULL
    assert gif.dither is DitherMode.SIERRA2_4A and quant.dither is DitherMode.SIERRA2_4A
    assert gif.bayer_scale == 2 and quant.bayer_scale == 2
    assert InfoArgs(Path("x.mkv")).input == Path("x.mkv")