"""Output profile, file names, and other fixed values."""

SAMPLE_RATE = 44100                 # Hz, shared by silence and output
CHANNEL_LAYOUT = "stereo"           # anullsrc channel layout, matches OUTPUT_CHANNELS
OUTPUT_CHANNELS = 2
AUDIO_CODEC = "libmp3lame"          # codec for silence and the final output
OUTPUT_BITRATE = "128k"             # MP3 output bitrate
SILENCE_FILENAME = "silence-{index}.mp3"
CONCAT_LIST_FILENAME = "concat-list.txt"
SCRATCH_DIR_NAME = "temporary_deletable"
OUTPUT_FILENAME_FORMAT = "output_%Y%m%d_%H%M%S.mp3"
FFMPEG_COMMON_PATHS = (
    "/opt/homebrew/bin/ffmpeg",     # macOS Apple Silicon (Homebrew)
    "/usr/local/bin/ffmpeg",        # macOS Intel (Homebrew)
    "/usr/bin/ffmpeg",              # Debian/Ubuntu
)
CSV_ID_COLUMN = "id"
CSV_CLIP_COLUMN = "audio_file_name_and_path"
CSV_PAUSE_COLUMN = "pause_duration"
STDERR_TAIL_LINES = 10              # lines of ffmpeg stderr kept in error messages
DEFAULT_APP_ENV = "development"
DEFAULT_APP_NAME = "audio-sequencer"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_MAX_SIZE_MB = 5
DEFAULT_LOG_MAX_FILES = 5
VERSION = "0.1.0"
