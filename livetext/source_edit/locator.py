# FILE: livetext/source_edit/locator.py
"""
Plain-text locator.

Browser textContent collapses whitespace, so the captured text may not appear
verbatim in the source. Tiers, first success wins:

    1. Exact literal match: every occurrence replaced
    2. Token match: whitespace-separated tokens joined by \\s+, every
       occurrence replaced (original internal whitespace is discarded)

count=1 limits either tier to the first occurrence.
"""
from __future__ import annotations

import re
from typing import Optional


def build_token_pattern(original_text: str) -> Optional["re.Pattern[str]"]:
    """Pattern matching the tokens of `original_text` separated by any whitespace.

    Returns None for fewer than two tokens; a single token is already covered
    by the exact tier.
    """
    tokens = [t for t in original_text.split() if t]
    if len(tokens) < 2:
        return None
    return re.compile(r"\s+".join(re.escape(t) for t in tokens))


def locate_text(
    content: str,
    original_text: str,
    new_text: str,
    count: int = 0,
) -> Optional[str]:
    """Replace `original_text` in `content`, tolerant of whitespace differences.

    Returns the new content, or None when neither tier matches.
    """
    if not original_text:
        return None

    if original_text in content:
        return content.replace(original_text, new_text, count if count > 0 else -1)

    pattern = build_token_pattern(original_text)
    if pattern is None or pattern.search(content) is None:
        return None
    # Callable replacement keeps backslashes in new_text literal
    return pattern.sub(lambda _m: new_text, content, count=count)


__all__ = ["build_token_pattern", "locate_text"]
