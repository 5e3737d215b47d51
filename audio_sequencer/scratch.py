"""Per-run scratch directory with guaranteed cleanup."""

import os
import shutil

from audio_sequencer.constants import SCRATCH_DIR_NAME
from audio_sequencer.logging_utils import get_logger

log = get_logger(__name__)


class ScratchArea:
    """Working directory for one run, holding generated silence and the concat list.

    The directory is created lazily by ensure() and removed by cleanup().
    """

    def __init__(self, base_path: str, run_id: str | None = None):
        name = f"{SCRATCH_DIR_NAME}-{run_id}" if run_id else SCRATCH_DIR_NAME
        self.base_path = base_path
        self.path = os.path.join(base_path, name)

    def ensure(self) -> str:
        """Create the directory (and parents) if missing. Returns its path."""
        if not os.path.isdir(self.path):
            os.makedirs(self.path, exist_ok=True)
            log.info("Created temporary directory: %s", self.path)
        return self.path

    def file(self, filename: str) -> str:
        """Path of a file inside the scratch directory."""
        return os.path.join(self.path, filename)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def cleanup(self) -> None:
        """Recursively delete the directory if it exists."""
        if os.path.exists(self.path):
            shutil.rmtree(self.path)
            log.info("Deleted temporary directory: %s", self.path)
