import pytest

from ffauto.enums import Crop, DitherMode, OptimizeTarget, ScaleMode, StatsMode, VideoCodec

CROP_VALID = [
    ("1608", Crop(height=1608)),
    ("3840x1608", Crop(width=3840, height=1608)),
    ("3840x1608;32x64", Crop(width=3840, height=1608, x=32, y=64)),
    ("3840x1608x32x64", Crop(width=3840, height=1608, x=32, y=64)),
    ("3840:1608:32:64", Crop(width=3840, height=1608, x=32, y=64)),
]

CROP_INVALID = [
    "",
    "0",
    "0x0",
    "0x0x0x0",
    "-9000",
    "3840x1608;32",
    "3840x-1608;32x64",
]


@pytest.mark.parametrize("text,expected", CROP_VALID)
def test_crop_parsing(text, expected):
    assert Crop.parse(text) == expected


@pytest.mark.parametrize("text", CROP_INVALID)
def test_crop_invalid(text):
    with pytest.raises(ValueError, match="is not a valid crop value"):
        Crop.parse(text)


def test_crop_display():
    assert str(Crop(width=100, height=100, x=12, y=34)) == "w=100:h=100:x=12:y=34"
    assert str(Crop.parse("1608")) == "h=1608"
    assert str(Crop(width=3840)) == "w=3840"


def test_crop_display_round_trip():
    crop = Crop.parse("3840x1608;32x64")
    assert Crop.parse(str(crop)) == crop


def test_scale_mode_names():
    assert str(ScaleMode.NEAREST) == "neighbor"
    assert str(ScaleMode.FAST_BILINEAR) == "fast_bilinear"
    assert ScaleMode.default() is ScaleMode.BICUBIC


def test_dither_mode_names():
    assert str(DitherMode.FLOYD_STEINBERG) == "floyd_steinberg"
    assert str(DitherMode.SIERRA2_4A) == "sierra2-4a"
    assert DitherMode.default() is DitherMode.SIERRA2_4A


def test_stats_and_targets():
    assert str(StatsMode.default()) == "full"
    assert OptimizeTarget("ps-vita") is OptimizeTarget.PS_VITA


@pytest.mark.parametrize(
    "codec,video,pix_fmt,crf,name",
    [
        (VideoCodec.H264, "libx264", "yuv420p", 23, "h264"),
        (VideoCodec.H265, "libx265", "yuv420p", 28, "h265"),
        (VideoCodec.H265_10, "libx265", "yuv420p10le", 28, "h265"),
    ],
)
def test_video_codec_properties(codec, video, pix_fmt, crf, name):
    assert codec.video_codec() == video
    assert codec.audio_codec() == "aac"
    assert codec.pix_fmt() == pix_fmt
    assert codec.default_crf() == crf
    assert str(codec) == name


def test_crf_with_garbage():
    assert VideoCodec.H264.crf_with_garbage(0) == 23
    assert VideoCodec.H264.crf_with_garbage(2) == 29
    assert VideoCodec.H265.crf_with_garbage(20) == 51