"""Parsing and formatting of ffmpeg-style timestamps."""

from __future__ import annotations

import math
import re
import sys
from datetime import timedelta
from enum import Enum

__all__ = ["TimestampFormat", "parse_ffmpeg_duration", "format_ffmpeg_timestamp"]

_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_TIMESTAMP_RE = re.compile(
    r"(?:(?:(?P<hours>\d+):)?(?P<minutes>\d+):)?(?P<seconds>\d+)(?:\.?(?P<millis>\d+))?",
    re.ASCII,
)


class TimestampFormat(Enum):
    """Output layouts understood by :func:`format_ffmpeg_timestamp`."""

    AUTO = "auto"
    FULL = "full"
    TWO_DIGITS = "two_digits"


def _fraction(digits: str) -> timedelta:
    value = int(digits.ljust(3, "0"))
    if value >= 1_000_000_000:
        print("ignoring picoseconds in duration string", file=sys.stderr)
        return timedelta(0)
    if value >= 1_000_000:
        return timedelta(microseconds=value / 1000)
    if value >= 1000:
        return timedelta(microseconds=value)
    return timedelta(milliseconds=value)


def parse_ffmpeg_duration(timestamp: str) -> timedelta | None:
    """Parse an ffmpeg-like duration string; return None for invalid input."""
    if timestamp == "N/A":
        return None

    if _FLOAT_RE.fullmatch(timestamp):
        seconds = float(timestamp)
        if not math.isfinite(seconds) or seconds < 0:
            return None
        try:
            return timedelta(seconds=seconds)
        except OverflowError:
            return None

    match = _TIMESTAMP_RE.fullmatch(timestamp)
    if match is None:
        return None

    duration = timedelta(
        hours=int(match["hours"] or 0),
        minutes=int(match["minutes"] or 0),
        seconds=int(match["seconds"]),
    )
    if match["millis"] is not None:
        duration += _fraction(match["millis"])
    return duration


def format_ffmpeg_timestamp(duration: timedelta, fmt: TimestampFormat = TimestampFormat.AUTO) -> str:
    """Format a duration the way ffmpeg prints timestamps."""
    if duration < timedelta(0):
        raise ValueError("negative durations cannot be formatted")

    total_us = duration // timedelta(microseconds=1)
    secs_total, sub_us = divmod(total_us, 1_000_000)
    hours = secs_total // 3600
    minutes = secs_total % 3600 // 60
    secs = secs_total % 60
    millis = sub_us // 1000

    if fmt is TimestampFormat.AUTO:
        millis_str = f".{millis:03}".rstrip("0").rstrip(".")
        if secs_total >= 3600:
            return f"{hours:02}:{minutes:02}:{secs:02}{millis_str}"
        if secs_total >= 60:
            return f"{minutes:02}:{secs:02}{millis_str}"
        return f"{secs}{millis_str}"

    if fmt is TimestampFormat.FULL:
        return f"{hours:02}:{minutes:02}:{secs:02}.{sub_us:06}"

    seconds_float = secs_total + sub_us / 1_000_000
    hundredths = math.floor(math.modf(seconds_float)[0] * 100)
    return f"{hours:02}:{minutes:02}:{secs:02}.{hundredths:02}"