from datetime import timedelta

import pytest

from ffauto.timestamps import TimestampFormat, format_ffmpeg_timestamp, parse_ffmpeg_duration

TIMESTAMP_DATA = [
    ("01:59:24.320000000", 7164.32, "01:59:24.320000"),
    ("01:59:24.32", 7164.32, "01:59:24.320000"),
    ("01:59:24", 7164.0, "01:59:24.000000"),
    ("01:59:02", 7142.0, "01:59:02.000000"),
    ("59:24.32", 3564.32, "00:59:24.320000"),
    ("59:24", 3564.0, "00:59:24.000000"),
    ("24.32", 24.32, "00:00:24.320000"),
    ("24", 24.0, "00:00:24.000000"),
    ("20.32", 20.32, "00:00:20.320000"),
    ("20", 20.0, "00:00:20.000000"),
    ("2.32", 2.32, "00:00:02.320000"),
    ("0.1", 0.1, "00:00:00.100000"),
    ("0.01", 0.01, "00:00:00.010000"),
    ("0", 0.0, "00:00:00.000000"),
]


@pytest.mark.parametrize("text,seconds,full", TIMESTAMP_DATA)
def test_timestamp_parsing(text, seconds, full):
    duration = parse_ffmpeg_duration(text)
    assert duration == timedelta(seconds=seconds)

    if not text.endswith("320000000"):
        assert format_ffmpeg_timestamp(duration, TimestampFormat.AUTO) == text

    assert format_ffmpeg_timestamp(duration, TimestampFormat.FULL) == full


@pytest.mark.parametrize("text", ["N/A", "abc", "-5", "1:2:3:4", "", "12:ab"])
def test_invalid_durations_return_none(text):
    assert parse_ffmpeg_duration(text) is None


def test_picoseconds_are_ignored():
    assert parse_ffmpeg_duration("00:01.1234567890") == timedelta(seconds=1)


def test_two_digit_format():
    duration = parse_ffmpeg_duration("24.5")
    assert format_ffmpeg_timestamp(duration, TimestampFormat.TWO_DIGITS) == "00:00:24.50"


def test_negative_duration_rejected():
    with pytest.raises(ValueError):
        format_ffmpeg_timestamp(timedelta(seconds=-1), TimestampFormat.FULL)