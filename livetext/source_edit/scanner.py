# FILE: livetext/source_edit/scanner.py
"""Directory Scanner

Finds the project files whose raw text contains a short search key. The key
is only a cheap pre-filter; matchers decide what actually gets replaced.

Search order:
    1. Priority subdirectories (src, app, pages, ...), each walked depth-first
       in pre-order, entries sorted by name
    2. Files sitting directly in the project root

The walk is an explicit stack rather than recursion. A depth cap and a set of
visited canonical paths stop symlink cycles, and anything whose resolved path
leaves the project root is skipped.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

from livetext.config.source_edit import ScanSettings
from livetext.source_edit.errors import InvalidInputError
from livetext.source_edit.fs import is_within, read_text_async, to_relative

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    path: Path
    is_dir: bool
    is_file: bool


def _list_dir(path: Path) -> List[_Entry]:
    with os.scandir(path) as it:
        entries = [
            _Entry(path=Path(e.path), is_dir=e.is_dir(), is_file=e.is_file())
            for e in it
        ]
    entries.sort(key=lambda e: e.path.name)
    return entries


def _resolve(path: Path) -> Optional[Path]:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        # Symlink loops raise RuntimeError before Python 3.13
        return None


class DirectoryScanner:
    """
    Scans a project tree for files containing a search key.

    Args:
        settings: Directory list, extension allowlist, ignored names, depth cap
        log: Optional logger; defaults to this module's logger
    """

    def __init__(
        self,
        settings: Optional[ScanSettings] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.settings = settings or ScanSettings()
        self.log = log or logger

    async def scan(self, root: str, search_key: str) -> List[str]:
        """
        Return project-relative POSIX paths of files containing `search_key`.

        Raises:
            InvalidInputError: If search_key is empty
        """
        if not search_key:
            raise InvalidInputError("Search key must not be empty")

        root_path = await asyncio.to_thread(_resolve, Path(root))
        if root_path is None or not await asyncio.to_thread(root_path.is_dir):
            self.log.warning("[scanner] Project root is not a directory: %s", root)
            return []

        visited: Set[Path] = set()
        matches: List[str] = []

        for dir_name in self.settings.search_dirs:
            dir_path = root_path / dir_name
            if not await asyncio.to_thread(dir_path.is_dir):
                continue
            await self._walk(root_path, dir_path, search_key, visited, matches)

        try:
            root_entries = await asyncio.to_thread(_list_dir, root_path)
        except OSError as exc:
            self.log.error("[scanner] Could not list project root %s: %s", root_path, exc)
            root_entries = []

        for entry in root_entries:
            if entry.is_file and self._is_valid_file(entry.path):
                await self._visit_file(root_path, entry.path, search_key, visited, matches)

        self.log.debug(
            "[scanner] %d file(s) under %s contain %r",
            len(matches), root_path, search_key,
        )
        return matches

    def _is_valid_file(self, path: Path) -> bool:
        return path.suffix in self.settings.valid_extensions

    async def _walk(
        self,
        root: Path,
        start: Path,
        search_key: str,
        visited: Set[Path],
        matches: List[str],
    ) -> None:
        # (path, depth, is_dir)
        stack = [(start, 0, True)]

        while stack:
            path, depth, is_dir = stack.pop()

            if not is_dir:
                await self._visit_file(root, path, search_key, visited, matches)
                continue

            resolved = await asyncio.to_thread(_resolve, path)
            if resolved is None or not is_within(root, resolved):
                self.log.debug("[scanner] Skipping directory outside project: %s", path)
                continue
            if resolved in visited:
                continue
            visited.add(resolved)

            if depth >= self.settings.max_depth:
                self.log.warning("[scanner] Depth cap %d reached at %s", self.settings.max_depth, path)
                continue

            try:
                entries = await asyncio.to_thread(_list_dir, path)
            except OSError as exc:
                self.log.error("[scanner] Error searching directory %s: %s", path, exc)
                continue

            children = []
            for entry in entries:
                if entry.is_dir:
                    if entry.path.name in self.settings.ignored_dirs:
                        continue
                    children.append((entry.path, depth + 1, True))
                elif entry.is_file and self._is_valid_file(entry.path):
                    children.append((entry.path, depth + 1, False))

            # Reversed so the first entry is popped first (pre-order)
            stack.extend(reversed(children))

    async def _visit_file(
        self,
        root: Path,
        path: Path,
        search_key: str,
        visited: Set[Path],
        matches: List[str],
    ) -> None:
        resolved = await asyncio.to_thread(_resolve, path)
        if resolved is None or not is_within(root, resolved):
            self.log.debug("[scanner] Skipping file outside project: %s", path)
            return
        if resolved in visited:
            return
        visited.add(resolved)

        try:
            content = await read_text_async(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.log.warning("[scanner] Could not read file %s: %s", path, exc)
            return

        if search_key in content:
            matches.append(to_relative(root, path))


async def scan(root: str, search_key: str, settings: Optional[ScanSettings] = None) -> List[str]:
    """Convenience wrapper around DirectoryScanner.scan."""
    return await DirectoryScanner(settings).scan(root, search_key)


__all__ = ["DirectoryScanner", "scan"]
