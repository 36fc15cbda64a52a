# FILE: livetext/source_edit/committer.py
"""
Replacement Committer

Reads each candidate file, hands its content to a locate function, and writes
the result back only when it differs. Per-file I/O problems are logged and
recorded; they never abort the remaining candidates.

Modes:
    best_effort_multi_file: every matching file is rewritten, every occurrence
        inside it replaced
    strict_single_file: all candidates are evaluated first; exactly one
        changed file is written (first occurrence only), more than one is
        reported as ambiguous and nothing is written
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from livetext.config.source_edit import ReplaceMode
from livetext.source_edit.errors import PathOutsideProjectError
from livetext.source_edit.fs import read_text_async, resolve_in_project, write_text_async
from livetext.source_edit.schemas import ErrorKind, OperationResult

logger = logging.getLogger(__name__)

NO_CANDIDATES_MESSAGE = "Text not found in any project files"
UNCHANGED_MESSAGE = "Matching text found but content already up to date"

# (content, count) -> new content, or None when nothing matched
LocateFn = Callable[[str, int], Optional[str]]


class FileOutcome(str, Enum):
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    NO_MATCH = "no_match"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"
    SKIPPED_AMBIGUOUS = "skipped_ambiguous"


@dataclass
class FileReport:
    path: str
    outcome: FileOutcome
    error: Optional[str] = None


@dataclass
class CommitReport:
    """Per-file outcomes of one operation, in processing order."""
    candidates: List[str] = field(default_factory=list)
    files: List[FileReport] = field(default_factory=list)
    ambiguous: bool = False

    @property
    def modified_files(self) -> List[str]:
        return [f.path for f in self.files if f.outcome == FileOutcome.MODIFIED]

    @property
    def files_modified(self) -> int:
        return len(self.modified_files)

    def count(self, outcome: FileOutcome) -> int:
        return sum(1 for f in self.files if f.outcome == outcome)

    def first_failure(self) -> Optional[FileReport]:
        for f in self.files:
            if f.outcome in (FileOutcome.READ_FAILED, FileOutcome.WRITE_FAILED):
                return f
        return None

    def to_result(self, no_match_message: str) -> OperationResult:
        if not self.candidates:
            return OperationResult.failure(ErrorKind.NO_CANDIDATES, NO_CANDIDATES_MESSAGE)

        if self.ambiguous:
            return OperationResult.failure(
                ErrorKind.AMBIGUOUS_MATCH,
                f"Text matched in {self.count(FileOutcome.SKIPPED_AMBIGUOUS)} files; "
                f"strict single-file mode will not pick one",
            )

        if self.files_modified == 0:
            failed = self.first_failure()
            if failed is not None:
                return OperationResult.failure(
                    ErrorKind.IO_ERROR, f"Could not update {failed.path}: {failed.error}",
                )
            if self.count(FileOutcome.UNCHANGED):
                return OperationResult.failure(ErrorKind.UNCHANGED, UNCHANGED_MESSAGE)
            return OperationResult.failure(ErrorKind.NO_MATCH, no_match_message)

        return OperationResult(
            success=True,
            files_modified=self.files_modified,
            modified_files=self.modified_files,
        )


class ReplacementCommitter:
    """Applies a locate function to candidate files and writes the changes."""

    def __init__(
        self,
        mode: ReplaceMode = ReplaceMode.BEST_EFFORT_MULTI_FILE,
        log: Optional[logging.Logger] = None,
    ):
        self.mode = mode
        self.log = log or logger

    async def commit(self, root: str, candidates: List[str], locate_fn: LocateFn) -> CommitReport:
        report = CommitReport(candidates=list(candidates))
        if not candidates:
            return report

        if self.mode == ReplaceMode.STRICT_SINGLE_FILE:
            await self._commit_strict(root, report, locate_fn)
        else:
            await self._commit_best_effort(root, report, locate_fn)

        self.log.info(
            "[committer] %d of %d candidate(s) modified (%s)",
            report.files_modified, len(candidates), self.mode.value,
        )
        return report

    async def _load(self, root: str, rel_path: str, report: CommitReport) -> Optional[Tuple[Path, str]]:
        try:
            path = await asyncio.to_thread(resolve_in_project, root, rel_path)
            content = await read_text_async(path)
        except (OSError, UnicodeDecodeError, PathOutsideProjectError) as exc:
            self.log.error("[committer] Failed to read %s: %s", rel_path, exc)
            report.files.append(FileReport(rel_path, FileOutcome.READ_FAILED, str(exc)))
            return None
        return path, content

    async def _write(self, path: Path, rel_path: str, content: str, report: CommitReport) -> None:
        try:
            await write_text_async(path, content)
        except OSError as exc:
            self.log.error("[committer] Failed to write %s: %s", rel_path, exc)
            report.files.append(FileReport(rel_path, FileOutcome.WRITE_FAILED, str(exc)))
            return
        self.log.info("[committer] Replaced text in: %s", rel_path)
        report.files.append(FileReport(rel_path, FileOutcome.MODIFIED))

    async def _commit_best_effort(self, root: str, report: CommitReport, locate_fn: LocateFn) -> None:
        for rel_path in report.candidates:
            loaded = await self._load(root, rel_path, report)
            if loaded is None:
                continue
            path, content = loaded

            new_content = locate_fn(content, 0)
            if new_content is None:
                report.files.append(FileReport(rel_path, FileOutcome.NO_MATCH))
            elif new_content == content:
                report.files.append(FileReport(rel_path, FileOutcome.UNCHANGED))
            else:
                await self._write(path, rel_path, new_content, report)

    async def _commit_strict(self, root: str, report: CommitReport, locate_fn: LocateFn) -> None:
        pending: List[Tuple[str, Path, str]] = []

        for rel_path in report.candidates:
            loaded = await self._load(root, rel_path, report)
            if loaded is None:
                continue
            path, content = loaded

            new_content = locate_fn(content, 1)
            if new_content is None:
                report.files.append(FileReport(rel_path, FileOutcome.NO_MATCH))
            elif new_content == content:
                report.files.append(FileReport(rel_path, FileOutcome.UNCHANGED))
            else:
                pending.append((rel_path, path, new_content))

        if len(pending) > 1:
            report.ambiguous = True
            self.log.warning(
                "[committer] %d files match; refusing to write in strict mode: %s",
                len(pending), ", ".join(p[0] for p in pending),
            )
            for rel_path, _path, _content in pending:
                report.files.append(FileReport(rel_path, FileOutcome.SKIPPED_AMBIGUOUS))
            return

        for rel_path, path, new_content in pending:
            await self._write(path, rel_path, new_content, report)


__all__ = [
    "NO_CANDIDATES_MESSAGE",
    "UNCHANGED_MESSAGE",
    "LocateFn",
    "FileOutcome",
    "FileReport",
    "CommitReport",
    "ReplacementCommitter",
]
