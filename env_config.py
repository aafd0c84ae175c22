"""Centralized environment configuration for AMP Hero Preload.

Loads `.env` once at import time and exposes typed getters used by the
optimizer configuration filter and the CLI.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent
load_dotenv(PROJECT_ROOT / ".env", override=False)
logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_JSON = False
ALLOWED_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}

# Kill switch for the hero preload transformer (mirrors the request flag)
DEFAULT_DISABLE_FORCE_PRELOAD_HERO_IMAGE = False


def get_log_level() -> str:
    """Return process log level name (upper case)."""
    return get_choice_env("LOG_LEVEL", DEFAULT_LOG_LEVEL.lower(), ALLOWED_LOG_LEVELS).upper()


def get_log_json() -> bool:
    """Return whether logs should be emitted as JSON lines."""
    return get_bool_env("LOG_JSON", DEFAULT_LOG_JSON)


def get_disable_force_preload_hero_image() -> bool:
    """Return whether hero image preload injection is switched off.

    When True, the configuration filter leaves the transformer list untouched.

    Default: False
    """
    return get_bool_env(
        "AMP_DISABLE_FORCE_PRELOAD_HERO_IMAGE",
        DEFAULT_DISABLE_FORCE_PRELOAD_HERO_IMAGE,
    )


def get_bool_env(name: str, default: bool) -> bool:
    """Parse bool environment variable with fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


def get_choice_env(name: str, default: str, allowed: set[str]) -> str:
    """Parse enum-like env values with fallback to default on invalid input."""
    raw = os.getenv(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in allowed:
        return value

    logger.warning(
        "Invalid %s value '%s'. Allowed values: %s. Falling back to '%s'.",
        name,
        raw,
        ", ".join(sorted(allowed)),
        default,
    )
    return default
