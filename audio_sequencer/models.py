"""Data models for audio sequencing."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ClipStep:
    id: str
    clip_reference: str    # path to an existing audio clip


@dataclass(frozen=True)
class PauseStep:
    id: str
    pause_seconds: float   # <= 0 contributes no segment


@dataclass(frozen=True)
class EmptyStep:
    id: str


Step = ClipStep | PauseStep | EmptyStep

# Ordered segment file paths, one per contributing step
SegmentPlan = list[str]


@dataclass(frozen=True)
class ProcessingResult:
    output_path: str
    audio_length_seconds: float


class RunState(Enum):
    IDLE = "idle"
    PLANNING = "planning"
    CONCATENATING = "concatenating"
    PROBING = "probing"
    DONE = "done"
    FAILED = "failed"
