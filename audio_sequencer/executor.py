"""Concatenate a segment plan into one MP3 and measure it."""

import os
from collections.abc import Callable

from audio_sequencer.constants import (
    SAMPLE_RATE,
    OUTPUT_CHANNELS,
    AUDIO_CODEC,
    OUTPUT_BITRATE,
    CONCAT_LIST_FILENAME,
)
from audio_sequencer.errors import MediaToolError, ConcatenationError, NothingToProcessError
from audio_sequencer.logging_utils import get_logger
from audio_sequencer.media import run_ffmpeg, probe_duration
from audio_sequencer.models import SegmentPlan, ProcessingResult, RunState
from audio_sequencer.scratch import ScratchArea

log = get_logger(__name__)


def quote_concat_path(path: str) -> str:
    """Quote a path for ffmpeg's concat list.

    "it's.mp3" → "'it'\\''s.mp3'"
    """
    return "'" + path.replace("'", "'\\''") + "'"


def build_concat_manifest(plan: SegmentPlan) -> str:
    """Render the concat demuxer list: one file directive per segment.

    ffmpeg resolves relative entries against the list's own directory, so
    every path is written absolute.
    """
    return "\n".join(f"file {quote_concat_path(os.path.abspath(path))}" for path in plan)


def write_concat_manifest(plan: SegmentPlan, scratch: ScratchArea) -> str:
    """Write the concat list into the scratch area. Returns its path."""
    scratch.ensure()
    manifest_path = scratch.file(CONCAT_LIST_FILENAME)
    with open(manifest_path, "w", encoding="utf-8") as f:
        f.write(build_concat_manifest(plan))
    log.info("Created concat list with %d entries", len(plan))
    return manifest_path


def concatenate(manifest_path: str, output_path: str) -> None:
    """Re-encode every listed segment into output_path with the fixed output profile."""
    log.info("Concatenating audio files to: %s", output_path)
    try:
        run_ffmpeg([
            "-f", "concat",
            "-safe", "0",
            "-i", manifest_path,
            "-c:a", AUDIO_CODEC,
            "-b:a", OUTPUT_BITRATE,
            "-ar", str(SAMPLE_RATE),
            "-ac", str(OUTPUT_CHANNELS),
            "-y", output_path,
        ])
    except MediaToolError as e:
        log.error("Error concatenating audio: %s", e)
        raise ConcatenationError(f"Could not concatenate into {output_path}: {e}") from e
    log.info("Audio concatenation completed successfully")


def _discard_output(output_path: str) -> None:
    if os.path.exists(output_path):
        os.remove(output_path)
        log.warning("Removed incomplete output file: %s", output_path)


def execute(
    plan: SegmentPlan,
    output_path: str,
    scratch: ScratchArea,
    on_state: Callable[[RunState], None] | None = None,
) -> ProcessingResult:
    """Concatenate plan into output_path and probe the result's duration.

    The scratch area is deleted on every exit path. If concatenation or the
    duration probe fails, any file at output_path is removed before the error
    propagates. on_state, if given, is called with RunState.CONCATENATING and
    RunState.PROBING as the work progresses.
    """
    try:
        if not plan:
            raise NothingToProcessError("No audio files or pauses to process")

        manifest_path = write_concat_manifest(plan, scratch)

        if on_state:
            on_state(RunState.CONCATENATING)
        try:
            concatenate(manifest_path, output_path)
            if on_state:
                on_state(RunState.PROBING)
            audio_length_seconds = probe_duration(output_path)
        except Exception:
            _discard_output(output_path)
            raise

        log.info("Final audio duration: %.2f seconds", audio_length_seconds)
        return ProcessingResult(output_path=output_path, audio_length_seconds=audio_length_seconds)
    finally:
        log.info("Cleaning up temporary directory")
        scratch.cleanup()
