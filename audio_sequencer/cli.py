"""CLI interface with subcommand routing and process exit handling."""

import argparse
import sys

from audio_sequencer.config import load_settings
from audio_sequencer.constants import VERSION
from audio_sequencer.errors import ConfigurationError, SequencerError
from audio_sequencer.logging_utils import setup_logging, get_logger
from audio_sequencer.models import ClipStep, PauseStep
from audio_sequencer.pipeline import run, load_and_validate

log = get_logger(__name__)


def _fatal(message: str) -> None:
    log.error(message)
    print(f"FATAL ERROR: {message}", file=sys.stderr)
    raise SystemExit(1)


def _error(message: str) -> None:
    log.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    raise SystemExit(1)


def cmd_run(args, settings):
    """Assemble the sequence into a timestamped MP3."""
    settings.override(
        csv_path=args.csv,
        output_dir=args.output_dir,
        resources_dir=args.resources,
    )
    try:
        settings.require("csv_path", "output_dir", "resources_dir")
    except ConfigurationError as e:
        _fatal(str(e))

    log.info("CSV file: %s", settings.csv_path)
    log.info("Output directory: %s", settings.output_dir)

    try:
        result = run(
            settings.csv_path,
            settings.output_dir,
            settings.resources_dir,
            output_filename=args.output_name,
        )
    except ConfigurationError as e:
        _fatal(str(e))
    except SequencerError as e:
        _error(str(e))

    log.info("=== Processing Complete ===")
    log.info("Output file: %s", result.output_path)
    log.info("Audio length: %.2f seconds", result.audio_length_seconds)

    print("\n=== Success ===")
    print(f"Output file: {result.output_path}")
    print(f"Audio length: {result.audio_length_seconds:.2f} seconds")


def cmd_validate(args, settings):
    """Parse and validate the sequence without producing audio."""
    settings.override(csv_path=args.csv, output_dir=args.output_dir)
    try:
        settings.require("csv_path", "output_dir")
    except ConfigurationError as e:
        _fatal(str(e))

    try:
        steps = load_and_validate(settings.csv_path, settings.output_dir)
    except SequencerError as e:
        _error(str(e))

    clips = sum(1 for s in steps if isinstance(s, ClipStep))
    pauses = sum(1 for s in steps if isinstance(s, PauseStep) and s.pause_seconds > 0)
    skipped = len(steps) - clips - pauses
    print(f"Sequence OK: {len(steps)} steps ({clips} clips, {pauses} pauses, {skipped} skipped)")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="audio-sequencer",
        description="Audio Sequencer: join audio clips and timed pauses into one MP3",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    run_parser = subparsers.add_parser("run", help="Build the output MP3 from a sequence CSV")
    run_parser.add_argument("--csv", help="Sequence CSV (default: $PATH_AND_FILENAME_AUDIO_CSV_FILE)")
    run_parser.add_argument("--output-dir", help="Output directory (default: $PATH_MP3_OUTPUT)")
    run_parser.add_argument("--resources", help="Scratch base directory (default: $PATH_PROJECT_RESOURCES)")
    run_parser.add_argument("--output-name", help="Output filename (default: output_<timestamp>.mp3)")
    run_parser.set_defaults(func=cmd_run)

    # validate
    validate_parser = subparsers.add_parser("validate", help="Check the sequence and inputs only")
    validate_parser.add_argument("--csv", help="Sequence CSV (default: $PATH_AND_FILENAME_AUDIO_CSV_FILE)")
    validate_parser.add_argument("--output-dir", help="Output directory (default: $PATH_MP3_OUTPUT)")
    validate_parser.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        settings = load_settings(args.env_file)
    except ConfigurationError as e:
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        raise SystemExit(1)

    setup_logging(
        app_env=settings.app_env,
        app_name=settings.app_name,
        log_dir=settings.log_dir,
        max_size_mb=settings.log_max_size_mb,
        max_files=settings.log_max_files,
    )
    log.info("=== Audio Sequencer %s - Starting ===", VERSION)

    try:
        args.func(args, settings)
    except SystemExit:
        raise
    except Exception as e:
        log.exception("Unexpected error")
        print(f"FATAL ERROR: Unexpected error: {e}", file=sys.stderr)
        raise SystemExit(1)
