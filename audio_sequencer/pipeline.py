"""Run orchestration: read, validate, plan, and concatenate a sequence."""

import os
from datetime import datetime

from audio_sequencer.constants import OUTPUT_FILENAME_FORMAT
from audio_sequencer.errors import InputValidationError
from audio_sequencer.executor import execute
from audio_sequencer.logging_utils import get_logger
from audio_sequencer.media import find_ffmpeg
from audio_sequencer.models import Step, ProcessingResult, RunState
from audio_sequencer.parser import parse_sequence_csv
from audio_sequencer.planner import plan
from audio_sequencer.scratch import ScratchArea
from audio_sequencer.validator import validate_clip_files, validate_output_directory

log = get_logger(__name__)

# Allowed transitions; FAILED and DONE are terminal
_TRANSITIONS = {
    RunState.IDLE: {RunState.PLANNING},
    RunState.PLANNING: {RunState.CONCATENATING, RunState.FAILED},
    RunState.CONCATENATING: {RunState.PROBING, RunState.FAILED},
    RunState.PROBING: {RunState.DONE, RunState.FAILED},
    RunState.DONE: set(),
    RunState.FAILED: set(),
}


def output_filename_for(now: datetime | None = None) -> str:
    """Timestamped output name: output_YYYYMMDD_HHMMSS.mp3 (local time)."""
    return (now or datetime.now()).strftime(OUTPUT_FILENAME_FORMAT)


class SequenceRun:
    """One planning + concatenation pass over already-validated steps.

    Tracks its RunState; the scratch area is removed on entry into DONE or FAILED.
    """

    def __init__(self, steps: list[Step], output_path: str, scratch: ScratchArea):
        self.steps = steps
        self.output_path = output_path
        self.scratch = scratch
        self.state = RunState.IDLE
        self.result: ProcessingResult | None = None

    def _transition(self, state: RunState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid run state transition: {self.state.value} -> {state.value}")
        log.debug("Run state: %s -> %s", self.state.value, state.value)
        self.state = state
        if state in (RunState.DONE, RunState.FAILED):
            self.scratch.cleanup()

    def run(self) -> ProcessingResult:
        self._transition(RunState.PLANNING)
        try:
            segments = plan(self.steps, self.scratch)
            self._transition(RunState.CONCATENATING)
            self.result = execute(
                segments, self.output_path, self.scratch,
                on_state=self._on_executor_state,
            )
        except Exception as e:
            log.error("Run failed while %s: %s", self.state.value, e)
            self._transition(RunState.FAILED)
            raise
        self._transition(RunState.DONE)
        return self.result

    def _on_executor_state(self, state: RunState) -> None:
        if state != self.state:
            self._transition(state)


def load_and_validate(sequence_file_path: str, output_directory: str) -> list[Step]:
    """Parse the sequence and check the output directory and every clip.

    Raises SequenceParseError or InputValidationError; touches no media.
    """
    steps = parse_sequence_csv(sequence_file_path)

    if not validate_output_directory(output_directory):
        raise InputValidationError("Output directory validation failed")

    if not validate_clip_files(steps):
        raise InputValidationError("Audio file validation failed - one or more files not found")

    return steps


def run(
    sequence_file_path: str,
    output_directory: str,
    scratch_base_path: str,
    output_filename: str | None = None,
    run_id: str | None = None,
) -> ProcessingResult:
    """Build one MP3 from a sequence CSV.

    The output is written to output_directory under output_filename (default:
    a timestamped name). Scratch files live under scratch_base_path and never
    outlive the call. Pass a distinct run_id when runs may share a base path.
    """
    find_ffmpeg()

    steps = load_and_validate(sequence_file_path, output_directory)
    output_path = os.path.join(output_directory, output_filename or output_filename_for())
    log.info("All validations passed - starting audio processing")
    log.info("Full output path: %s", output_path)

    sequence_run = SequenceRun(steps, output_path, ScratchArea(scratch_base_path, run_id=run_id))
    return sequence_run.run()
