# FILE: livetext/source_edit/matchers.py
"""
Element-aware matchers.

Regex heuristics standing in for a markup parser. Each SourceMatcher compiles
one pattern with three groups:

    1. opening tag, kept verbatim
    2. inner text: optional whitespace, the trimmed original text, optional
       whitespace
    3. closing tag, kept verbatim

Cascade (most specific first): IdMatcher > ClassMatcher > TagMatcher. The first
matcher that finds anything in a file owns that file; lower tiers are never
tried afterwards, even if its substitution turns out to be a no-op.

Tag names are case-insensitive; attribute values and the text itself are
literal. Every caller-supplied value goes through re.escape.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from livetext.config.source_edit import RESERVED_CLASS_PREFIX
from livetext.source_edit.schemas import ElementHint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSpan:
    """First match of a matcher inside a file."""
    start: int
    end: int
    opening: str
    inner: str
    closing: str


class SourceMatcher(ABC):
    """Base class for one specificity tier."""

    name: str = "source"
    specificity: int = 0

    def __init__(self, tag: str, original_text: str):
        self.tag = tag.strip()
        self.text = original_text.strip()
        self._pattern: Optional["re.Pattern[str]"] = None

    @abstractmethod
    def attribute_pattern(self) -> str:
        """Regex fragment constraining the opening tag's attribute list."""

    @property
    def pattern(self) -> "re.Pattern[str]":
        if self._pattern is None:
            tag = re.escape(self.tag)
            self._pattern = re.compile(
                rf"(<(?i:{tag})\b{self.attribute_pattern()}[^>]*>)"
                rf"(\s*{re.escape(self.text)}\s*)"
                rf"(</(?i:{tag})\s*>)"
            )
        return self._pattern

    def try_match(self, content: str) -> Optional[MatchSpan]:
        m = self.pattern.search(content)
        if m is None:
            return None
        return MatchSpan(
            start=m.start(),
            end=m.end(),
            opening=m.group(1),
            inner=m.group(2),
            closing=m.group(3),
        )

    def substitute(self, content: str, new_text: str, count: int = 0) -> str:
        """Swap the inner group for `new_text`, keeping both tags verbatim."""
        return self.pattern.sub(
            lambda m: m.group(1) + new_text + m.group(3),
            content,
            count=count,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag!r})"


class IdMatcher(SourceMatcher):
    name = "id"
    specificity = 3

    def __init__(self, tag: str, original_text: str, element_id: str):
        super().__init__(tag, original_text)
        self.element_id = element_id

    def attribute_pattern(self) -> str:
        return rf"[^>]*?\sid\s*=\s*[\"']{re.escape(self.element_id)}[\"']"


class ClassMatcher(SourceMatcher):
    name = "class"
    specificity = 2

    def __init__(self, tag: str, original_text: str, class_token: str):
        super().__init__(tag, original_text)
        self.class_token = class_token

    def attribute_pattern(self) -> str:
        return (
            r"[^>]*?\s(?:className|class)\s*=\s*[\"']"
            rf"[^\"']*{re.escape(self.class_token)}[^\"']*[\"']"
        )


class TagMatcher(SourceMatcher):
    name = "tag"
    specificity = 1

    def attribute_pattern(self) -> str:
        return ""


def first_class_token(class_name: Optional[str], reserved_prefix: str = RESERVED_CLASS_PREFIX) -> Optional[str]:
    """First class in the list that the inspector overlay did not add."""
    if not class_name:
        return None
    for token in class_name.split():
        if not token.startswith(reserved_prefix):
            return token
    return None


def build_cascade(
    hint: ElementHint,
    original_text: str,
    reserved_prefix: str = RESERVED_CLASS_PREFIX,
) -> List[SourceMatcher]:
    """Matchers for `hint`, most specific first. Empty if there is nothing to match."""
    if not hint.tag or not hint.tag.strip() or not original_text.strip():
        return []

    cascade: List[SourceMatcher] = []
    if hint.id:
        cascade.append(IdMatcher(hint.tag, original_text, hint.id))
    token = first_class_token(hint.class_name, reserved_prefix)
    if token:
        cascade.append(ClassMatcher(hint.tag, original_text, token))
    cascade.append(TagMatcher(hint.tag, original_text))

    cascade.sort(key=lambda m: m.specificity, reverse=True)
    return cascade


def run_cascade(
    content: str,
    cascade: List[SourceMatcher],
    new_text: str,
    count: int = 0,
    log: Optional[logging.Logger] = None,
) -> Optional[str]:
    """Apply the first matcher that finds a span. None if none does."""
    log = log or logger
    for matcher in cascade:
        span = matcher.try_match(content)
        if span is None:
            continue
        log.debug("[matchers] %s tier matched at %d-%d", matcher.name, span.start, span.end)
        return matcher.substitute(content, new_text, count=count)
    return None


def locate_element(
    content: str,
    hint: ElementHint,
    original_text: str,
    new_text: str,
    count: int = 0,
    reserved_prefix: str = RESERVED_CLASS_PREFIX,
    log: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Replace the text of the element described by `hint`.

    Returns:
        New content (possibly identical to `content` when the matched text
        already equals `new_text`), or None if no tier matched.
    """
    cascade = build_cascade(hint, original_text, reserved_prefix)
    return run_cascade(content, cascade, new_text, count=count, log=log)


__all__ = [
    "MatchSpan",
    "SourceMatcher",
    "IdMatcher",
    "ClassMatcher",
    "TagMatcher",
    "first_class_token",
    "build_cascade",
    "run_cascade",
    "locate_element",
]
