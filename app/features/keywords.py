from __future__ import annotations

import logging
import math
import sys
from typing import Any

from app.core.config import MatchingPolicy, get_matching_policy
from app.normalize.utils import normalize_for_search, strip_wrapping_quotes
from app.schemas.analyze import KeywordCount

from .duplicates import ResumeIndex

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_finite_number(value: Any) -> float | None:
    """Return the value as a float if it is a real, finite JSON number.

    Integer literals too large for a float saturate to the largest finite float
    of the same sign.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return sys.float_info.max if value > 0 else -sys.float_info.max
    if not math.isfinite(number):
        return None
    return number


def coerce_keyword_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def coerce_keyword_frequency(value: Any) -> list[KeywordCount]:
    if not isinstance(value, list):
        return []

    output: list[KeywordCount] = []
    for row in value:
        if not isinstance(row, dict):
            continue
        keyword = row.get("keyword")
        jd_count = as_finite_number(row.get("jobDescriptionCount"))
        resume_count = as_finite_number(row.get("resumeCount"))
        if not isinstance(keyword, str) or not keyword.strip() or jd_count is None or resume_count is None:
            logger.debug("keyword_frequency_dropped keyword=%r", keyword)
            continue
        output.append(
            KeywordCount(
                keyword=keyword.strip(),
                job_description_count=max(0, round_half_up(jd_count)),
                resume_count=max(0, round_half_up(resume_count)),
            )
        )
    return output


def _dedupe_normalized(keywords: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for keyword in keywords:
        key = normalize_for_search(keyword)
        if key in seen:
            continue
        seen.add(key)
        output.append(keyword)
    return output


def reconcile_keywords(
    matched: list[str],
    missing: list[str],
    resume_text: str,
    policy: MatchingPolicy | None = None,
    *,
    index: ResumeIndex | None = None,
) -> tuple[list[str], list[str]]:
    """Move "missing" keywords that appear verbatim in the resume into "matched".

    Returns new lists; matched keeps its order with additions appended, and no
    keyword ends up in both lists (compared by normalized form).
    """
    policy = policy or get_matching_policy()
    index = index or ResumeIndex.build(resume_text)

    new_matched = _dedupe_normalized(list(matched))
    matched_keys = {normalize_for_search(keyword) for keyword in new_matched}
    new_missing: list[str] = []

    for keyword in missing:
        cleaned = strip_wrapping_quotes(keyword)
        key = normalize_for_search(cleaned)
        if len(key) < policy.keyword_min_chars:
            new_missing.append(keyword)
            continue
        if index.contains(key):
            if key not in matched_keys:
                new_matched.append(cleaned)
                matched_keys.add(key)
            logger.debug("keyword_moved_to_matched keyword=%r", cleaned)
        else:
            new_missing.append(keyword)

    # Drop anything the model listed as both matched and missing.
    new_missing = [
        keyword
        for keyword in _dedupe_normalized(new_missing)
        if normalize_for_search(strip_wrapping_quotes(keyword)) not in matched_keys
        and normalize_for_search(keyword) not in matched_keys
    ]
    return new_matched, new_missing
