# FILE: livetext/config/source_edit.py
"""
Source edit configuration.

Centralized knobs for the scanner, matchers and committer. Defaults mirror
what typical front-end projects look like; a few can be overridden through
environment variables (loaded from .env by main.py).
"""

import logging
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

# Searched in this order, before root-level files
SEARCH_DIRS: Tuple[str, ...] = (
    "src",
    "app",
    "pages",
    "components",
    "views",
    "lib",
    "public",
    "frontend",
    "client",
)

VALID_EXTENSIONS: Tuple[str, ...] = (
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".vue",
    ".svelte",
    ".html",
    ".css",
    ".scss",
    ".json",
)

IGNORED_DIRS: Tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
)

SELECTOR_SEARCH_KEY_LENGTH: int = 30
PROJECT_SEARCH_KEY_LENGTH: int = 50

DEFAULT_MAX_SCAN_DEPTH: int = 32

# Classes added by the inspector overlay while editing
RESERVED_CLASS_PREFIX: str = "edit-mode"


class ReplaceMode(str, Enum):
    """How many files an operation may rewrite."""
    BEST_EFFORT_MULTI_FILE = "best_effort_multi_file"
    STRICT_SINGLE_FILE = "strict_single_file"


# =============================================================================
# SETTINGS
# =============================================================================

@dataclass(frozen=True)
class ScanSettings:
    """Directory scanner settings."""
    search_dirs: Tuple[str, ...] = SEARCH_DIRS
    valid_extensions: Tuple[str, ...] = VALID_EXTENSIONS
    ignored_dirs: Tuple[str, ...] = IGNORED_DIRS
    max_depth: int = DEFAULT_MAX_SCAN_DEPTH


@dataclass(frozen=True)
class SourceEditSettings:
    """
    Master configuration for source edits.
    """
    scan: ScanSettings = field(default_factory=ScanSettings)
    selector_search_key_length: int = SELECTOR_SEARCH_KEY_LENGTH
    project_search_key_length: int = PROJECT_SEARCH_KEY_LENGTH
    reserved_class_prefix: str = RESERVED_CLASS_PREFIX
    replace_mode: ReplaceMode = ReplaceMode.BEST_EFFORT_MULTI_FILE


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not an integer, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("[config] %s must be >= 1, using %d", name, default)
        return default
    return value


def _env_mode(name: str, default: ReplaceMode) -> ReplaceMode:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return ReplaceMode(raw.strip().lower())
    except ValueError:
        logger.warning("[config] Unknown %s=%r, using %s", name, raw, default.value)
        return default


def load_settings() -> SourceEditSettings:
    """Build settings from defaults plus environment overrides.

    Recognized variables:
        LIVETEXT_MAX_SCAN_DEPTH: directory depth cap for the scanner
        LIVETEXT_REPLACE_MODE: best_effort_multi_file | strict_single_file
    """
    base = SourceEditSettings()
    scan = replace(
        base.scan,
        max_depth=_env_int("LIVETEXT_MAX_SCAN_DEPTH", DEFAULT_MAX_SCAN_DEPTH),
    )
    return replace(
        base,
        scan=scan,
        replace_mode=_env_mode("LIVETEXT_REPLACE_MODE", base.replace_mode),
    )


__all__ = [
    "SEARCH_DIRS",
    "VALID_EXTENSIONS",
    "IGNORED_DIRS",
    "SELECTOR_SEARCH_KEY_LENGTH",
    "PROJECT_SEARCH_KEY_LENGTH",
    "DEFAULT_MAX_SCAN_DEPTH",
    "RESERVED_CLASS_PREFIX",
    "ReplaceMode",
    "ScanSettings",
    "SourceEditSettings",
    "load_settings",
]
