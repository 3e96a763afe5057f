"""Running ffprobe and interpreting its JSON output."""

from __future__ import annotations

import json
import math
import subprocess
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from itertools import islice
from os import PathLike, fspath
from typing import Any

from .timestamps import parse_ffmpeg_duration

__all__ = [
    "ProbeError",
    "StreamType",
    "Tags",
    "Disposition",
    "Format",
    "Stream",
    "ProbeOutput",
    "ffprobe",
]


class ProbeError(Exception):
    """ffprobe failed or its output could not be used."""


class StreamType(Enum):
    """The kind of a media stream."""

    AUDIO = "audio"
    VIDEO = "video"
    SUBTITLE = "subtitle"
    DATA = "data"

    def __str__(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Tags:
    duration: str | None = None
    language: str | None = None
    title: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tags:
        return cls(
            duration=data.get("DURATION"),
            language=data.get("language"),
            title=data.get("title"),
        )


@dataclass(frozen=True)
class Disposition:
    default: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Disposition:
        return cls(default=int(data["default"]))


@dataclass(frozen=True)
class Format:
    duration: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Format:
        return cls(duration=data.get("duration"))


_STREAM_KEYS = {
    "codec_name": "codec_name",
    "profile": "profile",
    "width": "width",
    "height": "height",
    "sample_aspect_ratio": "sar",
    "display_aspect_ratio": "dar",
    "pix_fmt": "pix_fmt",
    "field_order": "field_order",
    "color_range": "color_range",
    "color_space": "color_space",
    "color_transfer": "color_transfer",
    "color_primaries": "color_primaries",
    "r_frame_rate": "r_frame_rate",
    "avg_frame_rate": "avg_frame_rate",
    "sample_fmt": "sample_fmt",
    "sample_rate": "sample_rate",
    "channels": "channels",
    "channel_layout": "channel_layout",
    "bits_per_raw_sample": "bits_per_raw_sample",
    "bit_rate": "bit_rate",
    "duration": "duration",
    "nb_read_frames": "nb_read_frames",
}


@dataclass(frozen=True)
class Stream:
    """One stream as described by ffprobe."""

    index: int
    codec_type: StreamType
    codec_name: str | None = None
    profile: str | None = None
    width: int | None = None
    height: int | None = None
    sar: str | None = None
    dar: str | None = None
    pix_fmt: str | None = None
    field_order: str | None = None
    color_range: str | None = None
    color_space: str | None = None
    color_transfer: str | None = None
    color_primaries: str | None = None
    r_frame_rate: str | None = None
    avg_frame_rate: str | None = None
    sample_fmt: str | None = None
    sample_rate: str | None = None
    channels: int | None = None
    channel_layout: str | None = None
    bits_per_raw_sample: str | None = None
    bit_rate: str | None = None
    duration: str | None = None
    nb_read_frames: str | None = None
    tags: Tags | None = None
    disposition: Disposition | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Stream:
        try:
            index = int(data["index"])
            codec_type = StreamType(data["codec_type"])
            tags = data.get("tags")
            disposition = data.get("disposition")
            return cls(
                index=index,
                codec_type=codec_type,
                tags=Tags.from_dict(tags) if tags is not None else None,
                disposition=Disposition.from_dict(disposition) if disposition is not None else None,
                **{attr: data.get(key) for key, attr in _STREAM_KEYS.items()},
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ProbeError(f"invalid stream description: {e}") from e

    def frame_rate(self) -> float | None:
        """Return the real frame rate, or None if unknown."""
        if self.r_frame_rate is None:
            return None
        fps = self.r_frame_rate
        if "/" in fps:
            left_text, right_text = fps.split("/", 1)
            left, right = float(left_text), float(right_text)
            if right == 0:
                return math.nan if left == 0 or math.isnan(left) else math.copysign(math.inf, left)
            return left / right
        try:
            return float(fps)
        except ValueError:
            return None

    def is_hdr(self) -> bool:
        """True if the transfer characteristics are PQ or HLG."""
        transfer = self.color_transfer
        return transfer is not None and ("smpte2084" in transfer or "arib-std-b67" in transfer)


def _seconds(value: float) -> timedelta:
    if not math.isfinite(value) or value < 0:
        raise ProbeError(f"invalid duration value {value}")
    try:
        return timedelta(seconds=value)
    except OverflowError as e:
        raise ProbeError(f"invalid duration value {value}") from e


@dataclass(frozen=True)
class ProbeOutput:
    """The streams and container format of a probed file."""

    streams: list[Stream] = field(default_factory=list)
    format: Format = field(default_factory=Format)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProbeOutput:
        try:
            streams = [Stream.from_dict(s) for s in data["streams"]]
            fmt = Format.from_dict(data["format"])
        except (KeyError, TypeError, AttributeError) as e:
            raise ProbeError(f"invalid ffprobe output: {e}") from e
        return cls(streams=streams, format=fmt)

    @classmethod
    def from_json(cls, text: str) -> ProbeOutput:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProbeError(str(e)) from e
        if not isinstance(data, dict):
            raise ProbeError("invalid ffprobe output: expected a JSON object")
        return cls.from_dict(data)

    def duration(self) -> timedelta:
        """Return the best available duration of the first video stream."""
        video = self.get_first_video_stream()
        if video is None:
            raise ProbeError("The input file needs to contain a usable video stream")

        if video.duration is not None:
            try:
                value = float(video.duration)
            except ValueError as e:
                raise ProbeError(f'{e}: stream duration "{video.duration}"') from e
            return _seconds(value)

        if video.tags is not None and video.tags.duration is not None:
            tags_duration = parse_ffmpeg_duration(video.tags.duration)
            if tags_duration is not None:
                return tags_duration

        if self.format.duration is not None:
            try:
                value = float(self.format.duration)
            except ValueError as e:
                raise ProbeError(str(e)) from e
            return _seconds(value)

        frame_rate = video.frame_rate()
        if video.nb_read_frames is not None and frame_rate is not None:
            try:
                frames = float(video.nb_read_frames)
            except ValueError as e:
                raise ProbeError(str(e)) from e
            return _seconds(frames / frame_rate if frame_rate else math.nan)

        raise ProbeError("ffprobe could not find a duration for the input file")

    def get_stream(self, index: int) -> Stream | None:
        if 0 <= index < len(self.streams):
            return self.streams[index]
        return None

    def _typed_stream(self, index: int, stream_type: StreamType) -> Stream | None:
        if index < 0:
            return None
        typed = (s for s in self.streams if s.codec_type is stream_type)
        return next(islice(typed, index, None), None)

    def get_video_stream(self, index: int) -> Stream | None:
        return self._typed_stream(index, StreamType.VIDEO)

    def get_audio_stream(self, index: int) -> Stream | None:
        return self._typed_stream(index, StreamType.AUDIO)

    def get_subtitle_stream(self, index: int) -> Stream | None:
        return self._typed_stream(index, StreamType.SUBTITLE)

    def get_first_video_stream(self) -> Stream | None:
        return self._typed_stream(0, StreamType.VIDEO)

    def get_first_audio_stream(self) -> Stream | None:
        return self._typed_stream(0, StreamType.AUDIO)

    def get_first_subtitle_stream(self) -> Stream | None:
        return self._typed_stream(0, StreamType.SUBTITLE)


def ffprobe(input_path: str | PathLike[str], count_frames: bool = False) -> ProbeOutput:
    """Run ffprobe on a file and parse its stream and format description."""
    args = [
        "ffprobe",
        "-hide_banner",
        "-loglevel",
        "error",
        "-print_format",
        "json",
        "-show_streams",
        "-show_format",
        "-i",
        fspath(input_path),
    ]
    if count_frames:
        args.append("-count_frames")

    try:
        result = subprocess.run(args, capture_output=True, check=False)
    except OSError as e:
        raise ProbeError(f"failed to run ffprobe: {e}") from e

    if result.returncode != 0:
        raise ProbeError(result.stderr.decode("utf-8").strip())

    return ProbeOutput.from_json(result.stdout.decode("utf-8"))