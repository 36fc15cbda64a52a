"""Source Edit Module: find rendered page text in project sources and rewrite it.

Components:
- scanner.py: Directory Scanner (search-key pre-filter over the project tree)
- locator.py: Plain-text locator (exact, then whitespace tolerant)
- matchers.py: Element-aware matcher cascade (id > class > tag)
- committer.py: Writes changed files and builds the OperationResult
- service.py: The two caller-facing operations
- assets.py: base64 read/save helpers for project images
- router.py: FastAPI endpoints

Usage:
    from livetext.source_edit import SourceEditService, ElementHint

    service = SourceEditService(registry)
    result = await service.replace_text_by_selector(
        project_id, ElementHint(tag="h1", id="title"), "Hello", "Hi",
    )
    if not result.success:
        print(result.error)
"""

from livetext.source_edit.schemas import (
    ElementHint,
    ErrorKind,
    OperationResult,
)
from livetext.source_edit.scanner import DirectoryScanner
from livetext.source_edit.locator import locate_text
from livetext.source_edit.matchers import (
    SourceMatcher,
    IdMatcher,
    ClassMatcher,
    TagMatcher,
    build_cascade,
    locate_element,
)
from livetext.source_edit.committer import ReplacementCommitter
from livetext.source_edit.service import ProjectRegistry, SourceEditService

__all__ = [
    "ElementHint",
    "ErrorKind",
    "OperationResult",
    "DirectoryScanner",
    "locate_text",
    "SourceMatcher",
    "IdMatcher",
    "ClassMatcher",
    "TagMatcher",
    "build_cascade",
    "locate_element",
    "ReplacementCommitter",
    "ProjectRegistry",
    "SourceEditService",
]
