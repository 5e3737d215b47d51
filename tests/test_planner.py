"""Tests for the segment planner."""

import os

import pytest

from audio_sequencer.errors import MediaToolError, NothingToProcessError, SilenceSynthesisError
from audio_sequencer.models import ClipStep, PauseStep, EmptyStep
from audio_sequencer.planner import plan, synthesize_silence, format_seconds


def test_clip_only_plan_is_unchanged(scratch, fake_ffmpeg):
    """Clip references pass through verbatim, in order, without ffmpeg."""
    steps = [ClipStep(id=str(i), clip_reference=f"/clips/{i}.mp3") for i in (3, 1, 2)]
    assert plan(steps, scratch) == ["/clips/3.mp3", "/clips/1.mp3", "/clips/2.mp3"]
    assert fake_ffmpeg == []
    assert not scratch.exists()


def test_mixed_plan(scratch, fake_ffmpeg, mixed_steps, clip_files):
    segments = plan(mixed_steps, scratch)
    assert segments == [clip_files[0], scratch.file("silence-1.mp3"), clip_files[1]]
    assert os.path.exists(scratch.file("silence-1.mp3"))
    assert len(fake_ffmpeg) == 1


def test_silence_named_by_step_index(scratch, fake_ffmpeg):
    steps = [EmptyStep(id="a"), PauseStep(id="b", pause_seconds=1.0), PauseStep(id="c", pause_seconds=0.5)]
    assert plan(steps, scratch) == [scratch.file("silence-1.mp3"), scratch.file("silence-2.mp3")]


@pytest.mark.parametrize("step", [
    PauseStep(id="p", pause_seconds=0),
    PauseStep(id="p", pause_seconds=-2.0),
    EmptyStep(id="p"),
])
def test_non_positive_pause_contributes_nothing(scratch, fake_ffmpeg, step):
    steps = [ClipStep(id="c", clip_reference="/clips/a.mp3"), step]
    assert plan(steps, scratch) == ["/clips/a.mp3"]
    assert fake_ffmpeg == []


def test_empty_plan_raises(scratch, fake_ffmpeg):
    """Only an invalid pause: nothing to process."""
    with pytest.raises(NothingToProcessError, match="No audio files or pauses to process"):
        plan([EmptyStep(id="1")], scratch)


def test_no_steps_raises(scratch, fake_ffmpeg):
    with pytest.raises(NothingToProcessError):
        plan([], scratch)


def test_silence_command(scratch, fake_ffmpeg):
    plan([PauseStep(id="1", pause_seconds=1.25)], scratch)
    args = fake_ffmpeg[0]
    assert args[args.index("-f") + 1] == "lavfi"
    assert args[args.index("-i") + 1] == "anullsrc=r=44100:cl=stereo"
    assert float(args[args.index("-t") + 1]) == 1.25
    assert args[args.index("-c:a") + 1] == "libmp3lame"
    assert args[args.index("-b:a") + 1] == "128k"
    assert args[-1] == scratch.file("silence-0.mp3")


def test_format_seconds_keeps_fraction():
    assert float(format_seconds(0.001)) == 0.001
    assert format_seconds(2) == "2.000000"


def test_synthesis_failure_stops_plan(scratch, monkeypatch):
    """The first failure aborts planning; later steps are not attempted."""
    calls = []

    def failing_run(args, ffmpeg=None):
        calls.append(args)
        raise MediaToolError("ffmpeg exited with status 1")

    monkeypatch.setattr("audio_sequencer.planner.run_ffmpeg", failing_run)
    steps = [PauseStep(id="1", pause_seconds=1.0), PauseStep(id="2", pause_seconds=1.0)]
    with pytest.raises(SilenceSynthesisError):
        plan(steps, scratch)
    assert len(calls) == 1


def test_synthesis_without_output_file(tmp_path, monkeypatch):
    monkeypatch.setattr("audio_sequencer.planner.run_ffmpeg", lambda args, ffmpeg=None: None)
    with pytest.raises(SilenceSynthesisError, match="Output file was not created"):
        synthesize_silence(1.0, str(tmp_path / "silence-0.mp3"))
