"""Parse a sequence CSV into ordered steps."""

import csv
import math
import os
import re

from audio_sequencer.constants import CSV_ID_COLUMN, CSV_CLIP_COLUMN, CSV_PAUSE_COLUMN
from audio_sequencer.errors import SequenceParseError
from audio_sequencer.logging_utils import get_logger
from audio_sequencer.models import Step, ClipStep, PauseStep, EmptyStep

log = get_logger(__name__)

# Leading decimal number, as in "2.5", "2.5s", ".5", "-1", "3e-1"
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_pause(raw: str) -> float | None:
    """Parse a pause duration leniently.

    Uses the longest leading numeric prefix ("2.5s" → 2.5). Returns None when
    there is no number at the start or the value is not finite.
    """
    match = _LEADING_NUMBER_RE.match(raw.strip())
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def _row_to_step(row: dict) -> Step:
    """Convert one CSV row into a Step variant."""
    step_id = (row.get(CSV_ID_COLUMN) or "").strip()
    clip = (row.get(CSV_CLIP_COLUMN) or "").strip()
    pause_raw = (row.get(CSV_PAUSE_COLUMN) or "").strip()

    pause = None
    if pause_raw:
        pause = parse_pause(pause_raw)
        if pause is None:
            log.warning("Invalid pause_duration for step %s: %s", step_id, pause_raw)

    if clip:
        if pause is not None:
            log.warning("Step %s has both a clip and a pause; ignoring the pause", step_id)
        return ClipStep(id=step_id, clip_reference=clip)
    if pause is not None:
        return PauseStep(id=step_id, pause_seconds=pause)
    return EmptyStep(id=step_id)


def parse_sequence_csv(csv_path: str) -> list[Step]:
    """Read a sequence CSV with columns id, audio_file_name_and_path, pause_duration.

    Row order is sequence order. Raises SequenceParseError if the file is
    missing, unreadable, or lacks the id column.
    """
    log.info("Parsing CSV file: %s", csv_path)

    if not os.path.exists(csv_path):
        message = f"CSV file not found: {csv_path}"
        log.error(message)
        raise SequenceParseError(message)

    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            fieldnames = [name.strip() for name in (reader.fieldnames or [])]
            if CSV_ID_COLUMN not in fieldnames:
                raise SequenceParseError(
                    f"CSV file {csv_path} is missing the '{CSV_ID_COLUMN}' column"
                )
            reader.fieldnames = fieldnames
            steps = [_row_to_step(row) for row in reader]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        log.error("Error parsing CSV file: %s", e)
        raise SequenceParseError(f"Error parsing CSV file {csv_path}: {e}") from e

    log.info("Successfully parsed %d steps from CSV", len(steps))
    return steps
