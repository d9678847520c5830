"""
Configuration for Passmint.

Engine bounds are fixed constants. Service settings are read from the
environment (PASSMINT_HOST, PASSMINT_PORT, PASSMINT_LOG_LEVEL) and can be
overridden by CLI options.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

# Password length bounds (inclusive)
MIN_LENGTH = 4
MAX_LENGTH = 128
DEFAULT_LENGTH = 16

# Batch size bounds (inclusive)
MIN_COUNT = 1
MAX_COUNT = 100
DEFAULT_COUNT = 1

# Validation defaults
DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = MAX_LENGTH

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_PREFIX = "PASSMINT_"


@dataclass(frozen=True)
class Settings:
    """HTTP service settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from PASSMINT_* environment variables."""
        defaults = cls()

        port_raw = os.environ.get(f"{ENV_PREFIX}PORT")
        try:
            port = int(port_raw) if port_raw else defaults.port
        except ValueError:
            port = defaults.port

        return cls(
            host=os.environ.get(f"{ENV_PREFIX}HOST", defaults.host),
            port=port,
            log_level=os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper(),
        )


def get_settings() -> Settings:
    """Get settings for the current process environment."""
    return Settings.from_env()


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure root logging once for CLI and server entry points.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        stream: Output stream, stdout when not given
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stdout)]
    )
