"""Environment helper utilities.

Loads a `.env` file from the project root so that settings such as
``CATALOG_API_BASE_URL`` defined there become visible to ``config.config``
through ``os.getenv``, and reads typed values back out of the environment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

__all__ = ["env_float", "load_project_dotenv"]

logger = logging.getLogger(__name__)

_MAX_PARENT_LEVELS = 10


def _find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory holding `pyproject.toml` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(_MAX_PARENT_LEVELS):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(override: bool = False) -> bool:
    """Load the project-level `.env` if present. Returns True when a file was loaded."""
    dotenv_path = _find_project_root() / ".env"
    if not dotenv_path.exists():
        return False
    load_dotenv(dotenv_path=dotenv_path, override=override)
    return True


def env_float(name: str, default: float) -> float:
    """Read a float setting; blank or malformed values fall back to ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default
