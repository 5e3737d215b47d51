"""ffmpeg/ffprobe resolution, invocation, and duration probing."""

import json
import os
import shutil
import subprocess

from pydub import AudioSegment

from audio_sequencer.constants import FFMPEG_COMMON_PATHS, STDERR_TAIL_LINES
from audio_sequencer.errors import ConfigurationError, MediaToolError, ProbeError
from audio_sequencer.logging_utils import get_logger

log = get_logger(__name__)

_ffmpeg_path: str | None = None
_ffprobe_path: str | None = None


def _find_ffprobe(ffmpeg_path: str) -> str | None:
    # Prefer the ffprobe shipped alongside the resolved ffmpeg
    sibling = os.path.join(os.path.dirname(ffmpeg_path), "ffprobe")
    if os.path.exists(sibling):
        return sibling
    return shutil.which("ffprobe")


def find_ffmpeg(refresh: bool = False) -> str:
    """Locate the ffmpeg and ffprobe binaries once and point pydub at ffmpeg.

    Tries PATH first, then the usual package-manager install locations.
    ffprobe is looked for next to ffmpeg, then on PATH. Raises
    ConfigurationError if either is missing.
    """
    global _ffmpeg_path, _ffprobe_path
    if _ffmpeg_path and _ffprobe_path and not refresh:
        return _ffmpeg_path

    candidate = shutil.which("ffmpeg")
    if not candidate:
        log.warning("Could not find ffmpeg on PATH, trying common paths")
        candidate = next((p for p in FFMPEG_COMMON_PATHS if os.path.exists(p)), None)

    if not candidate:
        log.error("Could not find FFmpeg installation. Install FFmpeg and ensure it's in your PATH.")
        raise ConfigurationError("FFmpeg not found")

    prober = _find_ffprobe(candidate)
    if not prober:
        log.error("Could not find FFprobe next to %s or on PATH", candidate)
        raise ConfigurationError("FFprobe not found")

    AudioSegment.converter = candidate
    _ffmpeg_path = candidate
    _ffprobe_path = prober
    log.info("Using FFmpeg at: %s", candidate)
    log.info("Using FFprobe at: %s", prober)
    return candidate


def find_ffprobe() -> str:
    """Path of the ffprobe resolved alongside ffmpeg."""
    find_ffmpeg()
    return _ffprobe_path


def _stderr_tail(stderr: bytes | str | None) -> str:
    if not stderr:
        return ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", "replace")
    return "\n".join(stderr.strip().splitlines()[-STDERR_TAIL_LINES:])


def run_ffmpeg(args: list[str], ffmpeg: str | None = None) -> None:
    """Run ffmpeg with the given arguments and block until it exits.

    Raises MediaToolError if the binary cannot be started or exits non-zero.
    """
    command = [ffmpeg or find_ffmpeg(), "-hide_banner", "-nostdin", *args]
    log.debug("Running: %s", " ".join(command))
    try:
        completed = subprocess.run(command, capture_output=True)
    except OSError as e:
        raise MediaToolError(f"Could not run ffmpeg: {e}") from e

    if completed.returncode != 0:
        tail = _stderr_tail(completed.stderr)
        message = f"ffmpeg exited with status {completed.returncode}"
        if tail:
            message += f": {tail}"
        raise MediaToolError(message)


def probe_duration(path: str, ffprobe: str | None = None) -> float:
    """Return the duration of a media file in seconds via ffprobe."""
    command = [
        ffprobe or find_ffprobe(),
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "json",
        path,
    ]
    log.debug("Running: %s", " ".join(command))
    try:
        completed = subprocess.run(command, capture_output=True)
    except OSError as e:
        log.error("Error probing audio file %s: %s", path, e)
        raise ProbeError(f"Could not probe {path}: {e}") from e

    if completed.returncode != 0:
        tail = _stderr_tail(completed.stderr)
        log.error("Error probing audio file %s: %s", path, tail)
        raise ProbeError(f"Could not probe {path}: ffprobe exited with status {completed.returncode}")

    try:
        info = json.loads(completed.stdout or "{}")
    except ValueError as e:
        log.error("Error probing audio file %s: %s", path, e)
        raise ProbeError(f"Could not probe {path}: {e}") from e

    raw = (info or {}).get("format", {}).get("duration")
    try:
        duration = float(raw)
    except (TypeError, ValueError):
        log.error("Error probing audio file %s: no duration reported", path)
        raise ProbeError(f"No duration reported for {path}")
    return duration
