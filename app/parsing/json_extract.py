from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)

ExtractionStrategy = Callable[[str], "dict[str, Any] | None"]


class ResponseParseError(RuntimeError):
    def __init__(self, message: str = "Failed to parse AI response. Please try again.", *, code: str = "parse_failed"):
        super().__init__(message)
        self.code = code


def _loads_object(text: str) -> dict[str, Any] | None:
    if not text:
        return None
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_direct(raw_text: str) -> dict[str, Any] | None:
    return _loads_object(raw_text.strip())


def parse_fenced_block(raw_text: str) -> dict[str, Any] | None:
    match = _FENCED_BLOCK_RE.search(raw_text)
    if not match or not match.group(1):
        return None
    return _loads_object(match.group(1).strip())


def parse_brace_slice(raw_text: str) -> dict[str, Any] | None:
    first = raw_text.find("{")
    last = raw_text.rfind("}")
    if first == -1 or last <= first:
        return None
    return _loads_object(raw_text[first : last + 1])


EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    parse_direct,
    parse_fenced_block,
    parse_brace_slice,
)


def extract_json(raw_text: str | None) -> dict[str, Any]:
    """Recover a JSON object from model output, trying each strategy in order.

    Raises ResponseParseError when no strategy yields an object.
    """
    text = raw_text or ""
    for strategy in EXTRACTION_STRATEGIES:
        parsed = strategy(text)
        if parsed is not None:
            logger.debug("json_extracted strategy=%s", strategy.__name__)
            return parsed

    logger.warning("json_extract_failed raw_len=%s", len(text))
    raise ResponseParseError()
