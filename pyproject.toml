[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ffauto"
version = "0.1.0"
description = "Wraps common ffmpeg workflows: video re-encoding, GIF creation, palette quantization and stream info"
requires-python = ">=3.10"
keywords = ["ffmpeg", "ffprobe", "video", "gif", "palette", "transcoding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
]
dependencies = [
    "termcolor",
    "humanize",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ffauto = "ffauto.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ffauto"]

[tool.pytest.ini_options]
addopts = "-ra"
