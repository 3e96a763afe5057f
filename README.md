# ffauto

A command-line helper that wraps common ffmpeg workflows. It builds the
ffmpeg command line for you, runs it and, once it has finished, prints the
size of the output file.

`ffmpeg` and `ffprobe` must be installed and on your `PATH`.

## Installation

```
pip install .
```

## Usage

```
ffauto [global options] <command> [command options]
```

Global options apply to every command. They may be given before or after
the command name:

- `-s`, `--seek`: start time offset (seconds such as `12.5`, or `MM:SS[.fff]`, or `HH:MM:SS[.fff]`)
- `-c`, `--crop`: crop the video before scaling: `H`, `WxH` or `WxH,X;Y`
- `--vw` / `--vh`: output width / height, keeping the aspect ratio
- `--vs`: a box the output must fit into: `WxH` or an ffmpeg size name such as `hd720`
- `-S`, `--scale-mode`: scaling algorithm (default `bicubic`)
- `--debug`: print the full ffmpeg command and wait for Enter before running it
- `-V`, `--version`: print the installed version

`--vw`, `--vh` and `--vs` are mutually exclusive.

The exit code is 0 on success and 1 on failure, or if no command is given.

### auto

Re-encode a video with H.264 or H.265 video and AAC audio:

```
ffauto auto -i input.mkv output.mp4
ffauto --vs hd720 auto -i input.mkv -t 30 --fade 1 output.mp4
ffauto auto -i input.mkv -O ipod output.m4v
```

Options:

- `-t` duration, or `--to` end time (used together with `--seek`)
- `--video-index` / `--video-lang`, `--audio-index` / `--audio-lang`,
  `--sub-index` / `--sub-lang`: stream selection. If no subtitle stream is
  chosen, all subtitles are kept unless the file only has image-based
  (`hdmv_pgs_subtitle`) subtitles, which are then dropped.
- `-M`, `--mute` or `-v`, `--volume FACTOR`
- `--channels N`: output audio channel count
- `-f`, `--fade`, `--fi`, `--fo`: fade durations in seconds; `--fade` sets
  both and takes precedence
- `-r`, `--framerate` or `-R`, `--framerate-mult`
- `-T`, `--tonemap`: HDR-to-SDR tonemapping
- `-C`, `--codec`: `h264` (default), `h265` or `h265-10`
- `-O`, `--optimize`: `ipod5`, `ipod`, `psp` or `ps-vita`. This replaces any
  requested size with the device's size, forces tonemapping, stereo audio
  and H.264, and adds the device's profile, level and rate limits.
- `-g`: repeat to raise the CRF by 3 each time (up to 51)

AAC input audio is copied unchanged when no volume, fade, channel or mute
option asks for re-encoding. The output is always written with
`-movflags faststart`. Encoding progress is printed while ffmpeg runs.

### gif

Make a GIF, generating a palette or using a given one:

```
ffauto --vw 480 gif -i clip.mp4 -t 5 --dedup out.gif
ffauto gif -i clip.mp4 -P pico8 -D bayer --bayer-scale 3 out.gif
ffauto gif -i clip.mp4 -p my_palette.gpl out.gif
```

Besides the duration, fade and frame-rate options of `auto`:

- `--dedup`: drop duplicate frames (variable frame rate output)
- `--brightness`, `--contrast`, `--saturation`, `--sharpness`
- `-p`, `--palette-file`, `-P`, `--palette-name` or `-n` (number of colours
  for a generated palette, default 256); these are mutually exclusive
- `--stats-mode`: `full` (default), `diff` or `single`
- `-D`, `--dither`: `bayer`, `heckbert`, `floyd-steinberg`, `sierra2`,
  `sierra2-4a` (default), `sierra3`, `burkes`, `atkinson`, `none`
- `--bayer-scale`: used with `bayer` dithering (default 2)
- `--diff-rect`: only reprocess the changed rectangle

Palette files may be ACT, COL, GPL, HEX, JSON or PAL; the format is chosen by
the file extension.

### quant

Quantize the first frame of an image or video to a palette:

```
ffauto quant -i photo.png -P db16 out.png
```

It takes the colour, palette and dithering options of `gif`.

### info

Print a one-line summary of every stream in a file:

```
ffauto info -i input.mkv
```

Each line shows the stream index, its index among streams of the same type,
the coloured stream type, language, title and default flag, and codec
details.

## Built-in palettes

`-P` accepts names such as `cmyk`, `monochrome`, `grayscale`, `websafe`,
`viridis`, `db16`, `pico8`, `gameboy` or `zx-spectrum`; the full list is
shown by `ffauto gif --help`. Only `cmyk` and `monochrome` are defined in
code. All others are read from data files in the package's `palettes`
directory, and a `PaletteError` ("built-in palette … is unavailable") is
raised when the file is not present.

## Library use

The building blocks are importable, for example:

```python
from ffauto.timestamps import parse_ffmpeg_duration, format_ffmpeg_timestamp, TimestampFormat
from ffauto.formats import load_from_file, load_from_string
from ffauto.palette import PaletteFormat
from ffauto.enums import Crop
from ffauto.sizes import parse_ffmpeg_size

parse_ffmpeg_duration("01:59:24.32")          # timedelta(seconds=7164, microseconds=320000)
format_ffmpeg_timestamp(parse_ffmpeg_duration("59:24"), TimestampFormat.FULL)  # "00:59:24.000000"
Crop.parse("3840x1608;32x64")                 # Crop(width=3840, height=1608, x=32, y=64)
parse_ffmpeg_size("hd720")                    # Size(width=1280, height=720)
palette = load_from_file("palette.gpl")
```

`ffauto.probe.ffprobe` runs ffprobe and returns a `ProbeOutput`.
`ffauto.commands.auto_arguments`, `gif_arguments` and `quant_arguments`
build ffmpeg argument lists from options and a `ProbeOutput` without running
anything. `ffauto.runner.run_ffmpeg` runs ffmpeg with a given argument list.