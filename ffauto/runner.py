"""Running ffmpeg and reporting its progress."""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import IO, Sequence

from .timestamps import TimestampFormat, format_ffmpeg_timestamp, parse_ffmpeg_duration

__all__ = ["FFmpegError", "Progress", "quote_arguments", "parse_progress_line", "run_ffmpeg"]

# ffmpeg writes progress every half second, but heavy processing can delay it
_STALL_TIMEOUT = 5.0
_POLL_INTERVAL = 0.2

_IGNORED_KEYS = frozenset(
    {"stream_0_0_q", "total_size", "out_time_us", "out_time_ms", "dup_frames", "drop_frames"}
)


class FFmpegError(Exception):
    """ffmpeg could not be run or did not succeed."""


@dataclass(frozen=True)
class Progress:
    """One complete progress report from ffmpeg."""

    frame: int
    fps: float
    out_time: timedelta
    bitrate: str
    speed: float

    def __str__(self) -> str:
        time_str = format_ffmpeg_timestamp(self.out_time, TimestampFormat.TWO_DIGITS)
        return (
            f"frame: {self.frame} - fps: {self.fps:.2f} - time: {time_str}"
            f" - bitrate: {self.bitrate} - speed: {self.speed:.3f}x"
        )


def quote_arguments(args: Sequence[str]) -> list[str]:
    """Wrap arguments containing spaces in double quotes for display."""
    return [f'"{a}"' if " " in a else a for a in args]


def parse_progress_line(line: str) -> tuple[str, str] | None:
    """Split a ``key=value`` progress line; return None if it has no '='."""
    key, sep, value = line.strip().partition("=")
    if not sep:
        return None
    return key, value


def _parse_int(text: str) -> int:
    text = text.strip()
    return int(text) if text.isascii() and text.isdigit() else 0


def _parse_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


class _ProgressCollector:
    """Gathers progress values until a complete report is available."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.frame: int | None = None
        self.fps: float | None = None
        self.out_time: timedelta | None = None
        self.bitrate: str | None = None
        self.speed: float | None = None

    def update(self, key: str, value: str) -> bool:
        """Record one value; return True once ffmpeg reports the end."""
        if key == "frame":
            self.frame = _parse_int(value)
        elif key == "fps":
            self.fps = _parse_float(value)
        elif key == "out_time":
            self.out_time = parse_ffmpeg_duration(value)
        elif key == "bitrate":
            self.bitrate = value.strip()
        elif key == "speed":
            self.speed = _parse_float(value.strip().rstrip("x"))
        elif key == "progress":
            return value == "end"
        elif key not in _IGNORED_KEYS:
            pass
        return False

    def take(self) -> Progress | None:
        """Return and clear a complete report, if there is one."""
        if (
            self.frame is None
            or self.fps is None
            or self.out_time is None
            or self.bitrate is None
            or self.speed is None
        ):
            return None
        progress = Progress(self.frame, self.fps, self.out_time, self.bitrate, self.speed)
        self._reset()
        return progress


def _follow_progress(stream: IO[bytes], process: subprocess.Popen) -> None:
    collector = _ProgressCollector()
    last_progress = time.monotonic()

    while True:
        position = stream.tell()
        raw = stream.readline()
        if not raw.endswith(b"\n"):
            if process.poll() is not None:
                break
            if time.monotonic() - last_progress < _STALL_TIMEOUT:
                time.sleep(_POLL_INTERVAL)
                stream.seek(position)
                continue
            break

        last_progress = time.monotonic()
        parsed = parse_progress_line(raw.decode("utf-8", errors="replace"))
        if parsed is None:
            break
        if collector.update(*parsed):
            break

        progress = collector.take()
        if progress is not None:
            print(progress)


def run_ffmpeg(args: Sequence[str], show_progress: bool = False, debug: bool = False) -> None:
    """Run ffmpeg with the given arguments, optionally printing its progress."""
    try:
        fd, progress_path = tempfile.mkstemp(prefix="ffmpeg", suffix=".txt")
    except OSError as e:
        raise FFmpegError(f"Couldn't create temp file: {e}") from e
    os.close(fd)

    try:
        full_args = ["-progress", progress_path, *args]

        if debug:
            print(f"{' DEBUG MODE ':#^40}")
            print(f"full command: ffmpeg {' '.join(quote_arguments(full_args))}")
            input(f"{' Press Enter to continue… ':#^40}")
            print("Continuing…")

        start = time.monotonic()
        try:
            process = subprocess.Popen(["ffmpeg", *full_args])
        except OSError as e:
            raise FFmpegError(f"failed to run ffmpeg: {e}") from e

        if show_progress:
            try:
                with open(progress_path, "rb") as stream:
                    _follow_progress(stream, process)
            except OSError as e:
                process.wait()
                raise FFmpegError(f"failed to read progress file: {e}") from e

        code = process.wait()
        if code != 0:
            raise FFmpegError(f"ffmpeg exited with status code {code if code >= 0 else -1}")

        print(f"Encoding took {time.monotonic() - start:.2f}s!")
    finally:
        try:
            os.unlink(progress_path)
        except OSError:
            pass