"""Wraps common ffmpeg workflows: re-encoding, GIF creation, palette quantization and stream info."""

__version__ = "0.1.0"