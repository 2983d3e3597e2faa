from __future__ import annotations

import re

_SEARCH_SEPARATORS_RE = re.compile(r"[\s,.;:()\-]+")
_LEADING_QUOTE_RE = re.compile(r"^['\"]")
_TRAILING_QUOTE_RE = re.compile(r"['\"]\Z")


def normalize_for_search(text: str | None) -> str:
    """Lowercase and collapse whitespace/punctuation runs into single spaces."""
    if not text:
        return ""
    return _SEARCH_SEPARATORS_RE.sub(" ", text.lower()).strip()


def strip_wrapping_quotes(text: str) -> str:
    """Remove one leading and one trailing quote character, if present."""
    return _TRAILING_QUOTE_RE.sub("", _LEADING_QUOTE_RE.sub("", text))


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    normalized = normalize_for_search(text)
    return any(marker and marker in normalized for marker in (normalize_for_search(item) for item in markers))
