import os
from datetime import timedelta
from unittest import mock

import pytest

from ffauto.runner import FFmpegError, Progress, parse_progress_line, quote_arguments, run_ffmpeg

PROGRESS_TEXT = (
    "frame=10\n"
    "fps=25.00\n"
    "stream_0_0_q=28.0\n"
    "bitrate=1000.0kbits/s\n"
    "total_size=1\n"
    "out_time_us=1500000\n"
    "out_time_ms=1500000\n"
    "out_time=00:00:01.500000\n"
    "dup_frames=0\n"
    "drop_frames=0\n"
    "speed=1.25x\n"
    "progress=end\n"
)

EXPECTED_LINE = "frame: 10 - fps: 25.00 - time: 00:00:01.50 - bitrate: 1000.0kbits/s - speed: 1.250x"


def _fake_process(code):
    process = mock.MagicMock()
    process.wait.return_value = code
    process.poll.return_value = code
    return process


def test_quote_arguments():
    assert quote_arguments(["-i", "a b.mkv", "out.mp4"]) == ["-i", '"a b.mkv"', "out.mp4"]


def test_parse_progress_line_splits_on_first_equals():
    assert parse_progress_line("frame=10\n") == ("frame", "10")
    assert parse_progress_line("a=b=c") == ("a", "b=c")


def test_parse_progress_line_without_equals():
    assert parse_progress_line("garbage\n") is None


def test_progress_formatting():
    progress = Progress(10, 25.0, timedelta(seconds=1.5), "1000.0kbits/s", 1.25)
    assert str(progress) == EXPECTED_LINE


def test_nonzero_exit_raises():
    with mock.patch("ffauto.runner.subprocess.Popen", return_value=_fake_process(3)):
        with pytest.raises(FFmpegError, match="ffmpeg exited with status code 3"):
            run_ffmpeg(["-i", "in.mkv", "out.mp4"])


def test_missing_binary_raises():
    with mock.patch("ffauto.runner.subprocess.Popen", side_effect=FileNotFoundError("ffmpeg")):
        with pytest.raises(FFmpegError, match="failed to run ffmpeg"):
            run_ffmpeg(["out.mp4"])


def test_command_line_and_cleanup(capsys):
    with mock.patch("ffauto.runner.subprocess.Popen", return_value=_fake_process(0)) as popen:
        run_ffmpeg(["-i", "in.mkv", "out.mp4"])

    command = popen.call_args.args[0]
    assert command[0] == "ffmpeg"
    assert command[1] == "-progress"
    assert command[3:] == ["-i", "in.mkv", "out.mp4"]
    assert not os.path.exists(command[2])
    assert "Encoding took" in capsys.readouterr().out


def test_progress_is_reported(capsys):
    def spawn(command):
        with open(command[2], "w", encoding="utf-8") as f:
            f.write(PROGRESS_TEXT)
        return _fake_process(0)

    with mock.patch("ffauto.runner.subprocess.Popen", side_effect=spawn):
        run_ffmpeg(["out.mp4"], show_progress=True)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == EXPECTED_LINE
    assert lines[1].startswith("Encoding took")


def test_debug_prints_quoted_command(capsys):
    with mock.patch("ffauto.runner.subprocess.Popen", return_value=_fake_process(0)):
        with mock.patch("builtins.input", return_value="") as prompt:
            run_ffmpeg(["-vf", "a b", "out.mp4"], debug=True)

    out = capsys.readouterr().out
    assert "DEBUG MODE" in out
    assert '"a b" out.mp4' in out
    assert "Continuing…" in out
    assert prompt.call_count == 1