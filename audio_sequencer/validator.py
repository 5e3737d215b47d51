"""Existence and permission checks on sequence inputs and the output location."""

import os

from audio_sequencer.logging_utils import get_logger
from audio_sequencer.models import Step, ClipStep

log = get_logger(__name__)


def validate_clip_files(steps: list[Step]) -> bool:
    """Check that every clip step references an existing file.

    Each missing file is logged; returns False if any are missing.
    """
    log.info("Validating audio files existence...")

    clip_steps = [s for s in steps if isinstance(s, ClipStep)]
    missing = []
    for step in clip_steps:
        if not os.path.isfile(step.clip_reference):
            missing.append(step.clip_reference)
            log.error("Audio file not found for step %s: %s", step.id, step.clip_reference)

    if missing:
        log.error("Validation failed: %d audio file(s) not found", len(missing))
        return False

    log.info("All %d audio files validated successfully", len(clip_steps))
    return True


def validate_output_directory(output_dir: str) -> bool:
    """Check that output_dir exists, is a directory, and is writable."""
    log.info("Validating output directory: %s", output_dir)

    if not os.path.exists(output_dir):
        log.error("Output directory does not exist: %s", output_dir)
        return False

    if not os.path.isdir(output_dir):
        log.error("Output path is not a directory: %s", output_dir)
        return False

    if not os.access(output_dir, os.W_OK):
        log.error("Output directory is not writable: %s", output_dir)
        return False

    log.info("Output directory validated successfully: %s", output_dir)
    return True
