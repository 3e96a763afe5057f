import pytest

from ffauto.sizes import Size, parse_ffmpeg_size


def test_named_size():
    assert parse_ffmpeg_size("hd1080") == Size(1920, 1080)


def test_named_size_alias_matches():
    assert parse_ffmpeg_size("4k") == parse_ffmpeg_size("4kdci")


@pytest.mark.parametrize("width,height", [(640, 480), (1, 1), (3840, 2160)])
def test_explicit_size(width, height):
    size = parse_ffmpeg_size(f"{width}x{height}")
    assert (size.width, size.height) == (width, height)


@pytest.mark.parametrize("text", ["", "640x", "x480", "640*480", "640x480\n", "huge", "-640x480"])
def test_invalid_sizes(text):
    with pytest.raises(ValueError, match="Invalid size string"):
        parse_ffmpeg_size(text)