# FILE: livetext/source_edit/assets.py
"""
Project asset helpers used by the inspector's image tools.

- read_file_as_base64: any project file, base64 encoded
- save_base64_image: decode a (data-URL or bare) base64 payload into a file

Paths are project-relative and must stay inside the project root. Image
processing itself happens elsewhere; these only move bytes.
"""
from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import re
from pathlib import Path

from livetext.source_edit.errors import InvalidInputError, ProjectNotFoundError
from livetext.source_edit.fs import resolve_in_project, to_relative
from livetext.source_edit.schemas import FileWriteResult
from livetext.source_edit.service import ProjectRegistry

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,")


async def _project_root(registry: ProjectRegistry, project_id: str) -> Path:
    if not project_id or not isinstance(project_id, str):
        raise InvalidInputError("Invalid project ID")
    root = registry.get_project_path(project_id)
    if not root:
        raise ProjectNotFoundError("Project not found")
    return await asyncio.to_thread(Path(root).resolve)


def decode_base64_payload(data: str) -> bytes:
    """Strip an optional data:image/...;base64, prefix and decode."""
    if not isinstance(data, str) or not data:
        raise InvalidInputError("Invalid base64 data")
    payload = _DATA_URL_PREFIX.sub("", data.strip(), count=1)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"Invalid base64 data: {exc}") from exc


async def read_file_as_base64(registry: ProjectRegistry, project_id: str, relative_path: str) -> str:
    """
    Read a project file and return its bytes base64 encoded.

    Raises:
        InvalidInputError / PathOutsideProjectError: bad path
        ProjectNotFoundError: unknown project
        OSError: the file could not be read
    """
    root = await _project_root(registry, project_id)
    path = await asyncio.to_thread(resolve_in_project, root, relative_path)
    data = await asyncio.to_thread(path.read_bytes)
    return base64.b64encode(data).decode("ascii")


async def save_base64_image(
    registry: ProjectRegistry,
    project_id: str,
    relative_path: str,
    base64_data: str,
) -> FileWriteResult:
    """Decode `base64_data` and write it to `relative_path` inside the project.

    Validation problems raise; a failing write is reported in the result.
    """
    root = await _project_root(registry, project_id)
    path = await asyncio.to_thread(resolve_in_project, root, relative_path)
    payload = decode_base64_payload(base64_data)

    logger.info("[assets] Saving image to: %s", path)
    try:
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_bytes, payload)
    except OSError as exc:
        logger.error("[assets] Error saving image %s: %s", path, exc)
        return FileWriteResult(success=False, error=str(exc) or "Failed to save image")

    return FileWriteResult(success=True, path=to_relative(root, path), bytes_written=len(payload))


__all__ = ["decode_base64_payload", "read_file_as_base64", "save_base64_image"]
