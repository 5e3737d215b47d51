"""Shared fixtures for audio sequencer tests."""

import os
import shutil

import pytest
from pydub import AudioSegment

from audio_sequencer.models import ClipStep, PauseStep, EmptyStep
from audio_sequencer.scratch import ScratchArea

HAS_FFMPEG = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None

requires_ffmpeg = pytest.mark.skipif(not HAS_FFMPEG, reason="ffmpeg/ffprobe not installed")

ENV_VARS = (
    "PATH_AND_FILENAME_AUDIO_CSV_FILE",
    "PATH_MP3_OUTPUT",
    "PATH_PROJECT_RESOURCES",
    "APP_ENV",
    "NAME_APP",
    "PATH_TO_LOGS",
    "LOG_MAX_SIZE",
    "LOG_MAX_FILES",
)


def write_csv(path, rows, header="id,audio_file_name_and_path,pause_duration"):
    """Write a sequence CSV; rows are tuples of (id, clip, pause)."""
    lines = [header] + [",".join(str(v) for v in row) for row in rows]
    path.write_text("\n".join(lines) + "\n")
    return str(path)


@pytest.fixture
def scratch(tmp_path):
    """ScratchArea rooted in a fresh resources directory (not yet created)."""
    return ScratchArea(str(tmp_path / "resources"))


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Replace ffmpeg invocations with a recorder that writes the output file.

    The output path is the last argument, as in every command the package builds.
    """
    calls = []

    def fake_run(args, ffmpeg=None):
        calls.append(list(args))
        output_path = args[-1]
        with open(output_path, "wb") as f:
            f.write(b"ID3")

    monkeypatch.setattr("audio_sequencer.planner.run_ffmpeg", fake_run)
    monkeypatch.setattr("audio_sequencer.executor.run_ffmpeg", fake_run)
    return calls


@pytest.fixture
def clip_files(tmp_path):
    """Two placeholder clip files (content is never decoded)."""
    clips_dir = tmp_path / "clips"
    clips_dir.mkdir()
    paths = []
    for name in ("a.mp3", "b.mp3"):
        path = clips_dir / name
        path.write_bytes(b"ID3")
        paths.append(str(path))
    return paths


@pytest.fixture
def mixed_steps(clip_files):
    """clip, pause 2.0, empty, pause 0, clip."""
    return [
        ClipStep(id="1", clip_reference=clip_files[0]),
        PauseStep(id="2", pause_seconds=2.0),
        EmptyStep(id="3"),
        PauseStep(id="4", pause_seconds=0),
        ClipStep(id="5", clip_reference=clip_files[1]),
    ]


@pytest.fixture
def make_mp3(tmp_path):
    """Factory for real silent MP3 clips of a given length (needs ffmpeg)."""
    def factory(name, duration_ms):
        path = tmp_path / name
        os.makedirs(path.parent, exist_ok=True)
        AudioSegment.silent(duration=duration_ms, frame_rate=44100).set_channels(2).export(str(path), format="mp3")
        return str(path)
    return factory
