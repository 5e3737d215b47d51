"""Exception hierarchy for the audio sequencer."""


class SequencerError(Exception):
    """Base error for the audio sequencer."""


class ConfigurationError(SequencerError):
    """Raised when a required setting is missing or ffmpeg cannot be found."""


class InputError(SequencerError):
    """Raised when the run inputs are unusable, before any media work starts."""


class SequenceParseError(InputError):
    """Raised when the sequence CSV is missing or malformed."""


class InputValidationError(InputError):
    """Raised when a referenced clip is missing or the output directory is unusable."""


class ProcessingError(SequencerError):
    """Raised when planning, concatenation, or probing fails."""


class MediaToolError(ProcessingError):
    """Raised when an ffmpeg invocation fails or cannot be started."""


class SilenceSynthesisError(MediaToolError):
    """Raised when a silence segment cannot be generated."""


class ConcatenationError(MediaToolError):
    """Raised when the final concatenation fails."""


class ProbeError(ProcessingError):
    """Raised when the duration of a media file cannot be determined."""


class NothingToProcessError(ProcessingError):
    """Raised when a sequence yields no segments at all (nothing to process)."""
