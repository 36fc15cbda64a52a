# FILE: livetext/source_edit/fs.py
"""
Project-rooted file access.

Reads and writes are UTF-8 with newline translation disabled so CRLF files
come back byte-identical outside the replaced span. The async helpers push
each call onto a worker thread, one call at a time.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Union

from livetext.source_edit.errors import InvalidInputError, PathOutsideProjectError

PathLike = Union[str, Path]


def is_within(root: Path, candidate: Path) -> bool:
    """True if resolved `candidate` is `root` or lives below it."""
    try:
        candidate.relative_to(root)
    except ValueError:
        return False
    return True


def resolve_in_project(root: PathLike, relative_path: str) -> Path:
    """Resolve a project-relative path, refusing anything that escapes root."""
    if not relative_path or not isinstance(relative_path, str):
        raise InvalidInputError("Invalid file path")
    root_path = Path(root).resolve()
    target = (root_path / relative_path).resolve()
    if not is_within(root_path, target):
        raise PathOutsideProjectError(f"Path escapes project root: {relative_path}")
    return target


def to_relative(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


def read_text(path: PathLike) -> str:
    with open(path, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


def write_text(path: PathLike, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)


async def read_text_async(path: PathLike) -> str:
    return await asyncio.to_thread(read_text, path)


async def write_text_async(path: PathLike, content: str) -> None:
    await asyncio.to_thread(write_text, path, content)
