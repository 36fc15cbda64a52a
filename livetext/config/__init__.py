"""Configuration package for LiveText.

Contains:
- source_edit.py: scanner, matcher and replace-mode settings
"""

from livetext.config.source_edit import (
    SEARCH_DIRS,
    VALID_EXTENSIONS,
    IGNORED_DIRS,
    RESERVED_CLASS_PREFIX,
    ReplaceMode,
    ScanSettings,
    SourceEditSettings,
    load_settings,
)

__all__ = [
    "SEARCH_DIRS",
    "VALID_EXTENSIONS",
    "IGNORED_DIRS",
    "RESERVED_CLASS_PREFIX",
    "ReplaceMode",
    "ScanSettings",
    "SourceEditSettings",
    "load_settings",
]
