"""Environment-driven settings, loaded from the process environment and .env."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from audio_sequencer.constants import (
    DEFAULT_APP_ENV,
    DEFAULT_APP_NAME,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_MAX_SIZE_MB,
    DEFAULT_LOG_MAX_FILES,
)
from audio_sequencer.errors import ConfigurationError

APP_ENVIRONMENTS = ("development", "testing", "production")

# Settings field → environment variable
ENV_VARS = {
    "csv_path": "PATH_AND_FILENAME_AUDIO_CSV_FILE",
    "output_dir": "PATH_MP3_OUTPUT",
    "resources_dir": "PATH_PROJECT_RESOURCES",
    "app_env": "APP_ENV",
    "app_name": "NAME_APP",
    "log_dir": "PATH_TO_LOGS",
    "log_max_size_mb": "LOG_MAX_SIZE",
    "log_max_files": "LOG_MAX_FILES",
}


@dataclass
class Settings:
    csv_path: str | None = None
    output_dir: str | None = None
    resources_dir: str | None = None
    app_env: str = DEFAULT_APP_ENV
    app_name: str = DEFAULT_APP_NAME
    log_dir: str = DEFAULT_LOG_DIR
    log_max_size_mb: int = DEFAULT_LOG_MAX_SIZE_MB
    log_max_files: int = DEFAULT_LOG_MAX_FILES

    def require(self, *fields: str) -> None:
        """Raise ConfigurationError naming the first unset field's variable."""
        for field in fields:
            if not getattr(self, field):
                raise ConfigurationError(f"{ENV_VARS[field]} environment variable is not set")

    def override(self, **values) -> "Settings":
        """Apply non-empty overrides (e.g. CLI flags) in place and return self."""
        for field, value in values.items():
            if value:
                setattr(self, field, value)
        return self


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got: {raw}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got: {raw}")
    return value


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Build Settings from the environment, reading a .env file first if present.

    Variables already set in the environment win over .env entries.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    app_env = os.getenv("APP_ENV") or DEFAULT_APP_ENV
    if app_env not in APP_ENVIRONMENTS:
        raise ConfigurationError(
            f"APP_ENV must be one of {', '.join(APP_ENVIRONMENTS)}, got: {app_env}"
        )

    return Settings(
        csv_path=os.getenv("PATH_AND_FILENAME_AUDIO_CSV_FILE") or None,
        output_dir=os.getenv("PATH_MP3_OUTPUT") or None,
        resources_dir=os.getenv("PATH_PROJECT_RESOURCES") or None,
        app_env=app_env,
        app_name=os.getenv("NAME_APP") or DEFAULT_APP_NAME,
        log_dir=os.getenv("PATH_TO_LOGS") or DEFAULT_LOG_DIR,
        log_max_size_mb=_int_env("LOG_MAX_SIZE", DEFAULT_LOG_MAX_SIZE_MB),
        log_max_files=_int_env("LOG_MAX_FILES", DEFAULT_LOG_MAX_FILES),
    )
