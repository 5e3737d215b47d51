"""Turn a step sequence into an ordered list of playable segment files."""

import os

from audio_sequencer.constants import (
    SAMPLE_RATE,
    CHANNEL_LAYOUT,
    AUDIO_CODEC,
    OUTPUT_BITRATE,
    SILENCE_FILENAME,
)
from audio_sequencer.errors import MediaToolError, SilenceSynthesisError, NothingToProcessError
from audio_sequencer.logging_utils import get_logger
from audio_sequencer.media import run_ffmpeg
from audio_sequencer.models import Step, ClipStep, PauseStep, SegmentPlan
from audio_sequencer.scratch import ScratchArea

log = get_logger(__name__)


def format_seconds(seconds: float) -> str:
    """Render a duration for ffmpeg's -t option, keeping fractional seconds."""
    return f"{seconds:.6f}"


def synthesize_silence(duration_seconds: float, output_path: str) -> str:
    """Render duration_seconds of silence to output_path with ffmpeg's anullsrc.

    Uses the output sample rate, channel layout, and codec so concatenation
    needs no implicit resampling. Raises SilenceSynthesisError on failure.
    """
    log.info("Generating %ss silence: %s", duration_seconds, output_path)
    try:
        run_ffmpeg([
            "-f", "lavfi",
            "-i", f"anullsrc=r={SAMPLE_RATE}:cl={CHANNEL_LAYOUT}",
            "-t", format_seconds(duration_seconds),
            "-c:a", AUDIO_CODEC,
            "-b:a", OUTPUT_BITRATE,
            "-y", output_path,
        ])
    except MediaToolError as e:
        log.error("Error generating silence: %s", e)
        raise SilenceSynthesisError(f"Could not generate silence {output_path}: {e}") from e

    if not os.path.exists(output_path):
        log.error("Error generating silence: output file was not created")
        raise SilenceSynthesisError(f"Output file was not created: {output_path}")
    return output_path


def plan(steps: list[Step], scratch: ScratchArea) -> SegmentPlan:
    """Resolve steps into segment paths, in step order.

    - Clip steps pass their reference through unchanged.
    - Pause steps with a positive duration get a silence file in the scratch
      area, named by step index.
    - Non-positive pauses and empty steps contribute nothing.

    Stops at the first synthesis failure. Raises NothingToProcessError if no
    step contributes a segment.
    """
    segments: SegmentPlan = []

    for index, step in enumerate(steps):
        if isinstance(step, ClipStep):
            log.info("Step %s: Adding audio file %s", step.id, step.clip_reference)
            segments.append(step.clip_reference)
        elif isinstance(step, PauseStep) and step.pause_seconds > 0:
            scratch.ensure()
            silence_path = scratch.file(SILENCE_FILENAME.format(index=index))
            segments.append(synthesize_silence(step.pause_seconds, silence_path))
        else:
            log.debug("Step %s: no clip or positive pause, skipping", step.id)

    if not segments:
        raise NothingToProcessError("No audio files or pauses to process")

    log.info("Planned %d segments from %d steps", len(segments), len(steps))
    return segments
