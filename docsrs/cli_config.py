"""Configuration loading helpers for the CLI and server entrypoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

# Configuration directory for global CLI usage
CONFIG_DIR = Path.home() / ".config" / "docsrs-mcp"
CONFIG_ENV_FILE = CONFIG_DIR / ".env"


def load_config(
    *,
    cwd: Optional[Path] = None,
    config_env_file: Path = CONFIG_ENV_FILE,
    load_env: Callable[[Path], bool] = load_dotenv,
) -> Optional[Path]:
    """Load .env configuration with fallback to the user config directory.

    Search order:
    1. .env in the current working directory
    2. ~/.config/docsrs-mcp/.env

    Returns the file that was loaded, or None when neither exists and the
    built-in defaults apply.
    """
    local_env = (cwd or Path.cwd()) / ".env"
    for candidate in (local_env, config_env_file):
        if candidate.is_file():
            load_env(candidate)
            logging.debug("Loaded configuration from %s", candidate)
            return candidate
    return None
