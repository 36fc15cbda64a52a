# FILE: livetext/source_edit/service.py
"""
Source edit service.

The two operations the inspector UI calls after the user edits text on a live
page:

    replace_text_by_selector: element hint known (tag, id, class); uses the
        matcher cascade and a 30 character search key
    replace_text_in_project: plain text only; uses the whitespace tolerant
        locator and a 50 character search key

Both always return an OperationResult. Validation and registry lookups happen
before any file is touched; every exception is converted at this boundary.
"""
from __future__ import annotations

import logging
from functools import partial
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from livetext.config.source_edit import SourceEditSettings, load_settings
from livetext.source_edit.committer import ReplacementCommitter
from livetext.source_edit.errors import (
    InvalidInputError,
    ProjectNotFoundError,
    SourceEditError,
)
from livetext.source_edit.locator import locate_text
from livetext.source_edit.matchers import build_cascade, run_cascade
from livetext.source_edit.scanner import DirectoryScanner
from livetext.source_edit.schemas import ElementHint, ErrorKind, OperationResult

logger = logging.getLogger(__name__)

NO_ELEMENT_MESSAGE = "Could not find matching element in source files"
NO_TEXT_MESSAGE = "Failed to replace text in any files"


class ProjectRegistry(Protocol):
    def get_project_path(self, project_id: str) -> Optional[str]:
        ...


def _preview(text: Any, limit: int = 100) -> str:
    if not isinstance(text, str):
        return repr(text)
    return text[:limit] + ("..." if len(text) > limit else "")


class SourceEditService:
    """
    Locates rendered text in a project's sources and rewrites it.

    Args:
        registry: Resolves project ids to root directories
        settings: Scanner/matcher/mode settings (defaults from environment)
        log: Optional logger shared with scanner and committer
    """

    def __init__(
        self,
        registry: ProjectRegistry,
        settings: Optional[SourceEditSettings] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.registry = registry
        self.settings = settings or load_settings()
        self.log = log or logger
        self.scanner = DirectoryScanner(self.settings.scan, log=self.log)
        self.committer = ReplacementCommitter(self.settings.replace_mode, log=self.log)

    # =========================================================================
    # Operations
    # =========================================================================

    async def replace_text_by_selector(
        self,
        project_id: Any,
        element_hint: Any,
        original_text: Any,
        new_text: Any,
    ) -> OperationResult:
        try:
            return await self._replace_by_selector(project_id, element_hint, original_text, new_text)
        except SourceEditError as exc:
            self.log.warning("[source_edit] Replace by selector rejected: %s", exc)
            return OperationResult.failure(ErrorKind(exc.kind), str(exc))
        except Exception as exc:
            self.log.exception("[source_edit] Failed to replace text by selector")
            return OperationResult.failure(ErrorKind.INTERNAL, str(exc) or "Failed to replace text")

    async def replace_text_in_project(
        self,
        project_id: Any,
        original_text: Any,
        new_text: Any,
    ) -> OperationResult:
        try:
            return await self._replace_in_project(project_id, original_text, new_text)
        except SourceEditError as exc:
            self.log.warning("[source_edit] Replace in project rejected: %s", exc)
            return OperationResult.failure(ErrorKind(exc.kind), str(exc))
        except Exception as exc:
            self.log.exception("[source_edit] Failed to replace text in project")
            return OperationResult.failure(ErrorKind.INTERNAL, str(exc) or "Failed to replace text")

    # =========================================================================
    # Internals
    # =========================================================================

    def resolve_root(self, project_id: Any) -> str:
        if not project_id or not isinstance(project_id, str):
            raise InvalidInputError("Invalid project ID")
        root = self.registry.get_project_path(project_id)
        if not root:
            raise ProjectNotFoundError("Project not found")
        return root

    @staticmethod
    def _coerce_hint(element_hint: Any) -> ElementHint:
        if isinstance(element_hint, dict):
            try:
                element_hint = ElementHint.model_validate(element_hint)
            except ValidationError as exc:
                raise InvalidInputError("Invalid element info") from exc
        if not isinstance(element_hint, ElementHint) or not element_hint.tag or not element_hint.tag.strip():
            raise InvalidInputError("Invalid element info")
        return element_hint

    async def _replace_by_selector(self, project_id, element_hint, original_text, new_text) -> OperationResult:
        if not project_id or not isinstance(project_id, str):
            raise InvalidInputError("Invalid project ID")
        hint = self._coerce_hint(element_hint)
        if not isinstance(original_text, str) or not original_text.strip():
            raise InvalidInputError("Invalid original text")
        if not isinstance(new_text, str):
            raise InvalidInputError("Invalid new text")

        self.log.info(
            "[source_edit] Replacing text by selector in project %s (tag=%s id=%s class=%s selector=%s)",
            project_id, hint.tag, hint.id, hint.class_name, hint.selector,
        )
        self.log.debug("[source_edit]   Original: %s", _preview(original_text))
        self.log.debug("[source_edit]   New: %s", _preview(new_text))

        root = self.resolve_root(project_id)

        search_key = original_text[: self.settings.selector_search_key_length]
        candidates = await self.scanner.scan(root, search_key)
        if not candidates:
            self.log.warning("[source_edit] No files found containing the text")
        else:
            self.log.info("[source_edit] Found %d candidate file(s)", len(candidates))

        cascade = build_cascade(hint, original_text, self.settings.reserved_class_prefix)

        def locate(content: str, count: int) -> Optional[str]:
            return run_cascade(content, cascade, new_text, count=count, log=self.log)

        report = await self.committer.commit(root, candidates, locate)
        return report.to_result(NO_ELEMENT_MESSAGE)

    async def _replace_in_project(self, project_id, original_text, new_text) -> OperationResult:
        if not project_id or not isinstance(project_id, str):
            raise InvalidInputError("Invalid project ID")
        if not original_text or not isinstance(original_text, str):
            raise InvalidInputError("Invalid original text")
        if not new_text or not isinstance(new_text, str):
            raise InvalidInputError("Invalid new text")

        self.log.info("[source_edit] Replacing text in project %s", project_id)
        self.log.debug("[source_edit]   Original: %s", _preview(original_text))
        self.log.debug("[source_edit]   New: %s", _preview(new_text))

        root = self.resolve_root(project_id)

        search_key = original_text[: self.settings.project_search_key_length]
        self.log.debug("[source_edit]   Search key: %r", search_key)
        candidates = await self.scanner.scan(root, search_key)
        if not candidates:
            self.log.warning("[source_edit] No files found containing the text")
        else:
            self.log.info("[source_edit] Found %d file(s) containing the text", len(candidates))

        locate = partial(_locate_plain, original_text=original_text, new_text=new_text)
        report = await self.committer.commit(root, candidates, locate)
        return report.to_result(NO_TEXT_MESSAGE)


def _locate_plain(content: str, count: int, *, original_text: str, new_text: str) -> Optional[str]:
    return locate_text(content, original_text, new_text, count=count)


__all__ = [
    "NO_ELEMENT_MESSAGE",
    "NO_TEXT_MESSAGE",
    "ProjectRegistry",
    "SourceEditService",
]
