from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

from app.core.config import MatchingPolicy, get_matching_policy
from app.normalize.utils import contains_any, normalize_for_search, strip_wrapping_quotes
from app.schemas.analyze import SUGGESTION_CATEGORIES, Suggestion

from .duplicates import ResumeIndex, is_duplicate_in_index

logger = logging.getLogger(__name__)

_INSTRUCTIONAL_PREFIX_RE = re.compile(
    r"^(add|consider|include|write|you (could|should|can)|this bullet)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class SanitizeContext:
    index: ResumeIndex
    policy: MatchingPolicy
    resume_has_summary: bool


RewriteStrategy = Callable[[str, SanitizeContext], list[str]]


@lru_cache(maxsize=16)
def _quoted_re(min_chars: int, max_chars: int | None = None) -> re.Pattern[str]:
    upper = "" if max_chars is None else str(max_chars)
    return re.compile(rf"['\"]([^'\"]{{{min_chars},{upper}}})['\"]")


def _clean_plain(text: str) -> str:
    return strip_wrapping_quotes(text.strip()).strip()


def is_instructional(text: str) -> bool:
    return bool(_INSTRUCTIONAL_PREFIX_RE.match(text.strip()))


def looks_like_non_skill(text: str, policy: MatchingPolicy) -> bool:
    return contains_any(text, policy.non_skill_phrases)


def _text_after_last_colon(text: str) -> str | None:
    index = text.rfind(":")
    if index == -1:
        return None
    return text[index + 1 :]


def rewrite_skill(text: str, context: SanitizeContext) -> list[str]:
    """Split instructional skill prose into bare skill names."""
    if not is_instructional(text):
        return [_clean_plain(text)]

    quoted = _quoted_re(1, context.policy.skill_quote_max_chars).findall(text)
    if quoted:
        return [item.strip() for item in quoted]

    remainder = _text_after_last_colon(text)
    if remainder is None:
        return []
    return [strip_wrapping_quotes(part.strip()) for part in remainder.split(",")]


def rewrite_prose(text: str, context: SanitizeContext) -> list[str]:
    """Recover the pastable bullet or paragraph from instructional prose."""
    if not is_instructional(text):
        return [_clean_plain(text)]

    min_chars = context.policy.recovered_text_min_chars
    match = _quoted_re(min_chars).search(text)
    if match:
        return [match.group(1).strip()]

    remainder = _text_after_last_colon(text)
    recovered = strip_wrapping_quotes(remainder.strip()) if remainder is not None else ""
    if len(recovered) > min_chars:
        return [recovered]
    return []


def keep_plain(text: str, context: SanitizeContext) -> list[str]:
    _ = context
    return [_clean_plain(text)]


CATEGORY_STRATEGIES: dict[str, RewriteStrategy] = {
    "Skills": rewrite_skill,
    "Experience": rewrite_prose,
    "Summary": rewrite_prose,
    "Education": keep_plain,
}


def _structural_drop_reason(row: Any, context: SanitizeContext) -> str | None:
    if not isinstance(row, dict):
        return "not_an_object"
    row_id = row.get("id")
    if row_id is None or isinstance(row_id, bool) or not isinstance(row_id, (str, int)):
        return "missing_id"
    category = row.get("category")
    if category not in SUGGESTION_CATEGORIES:
        return "unknown_category"
    text = row.get("text")
    if not isinstance(text, str) or not text.strip():
        return "missing_text"
    if is_duplicate_in_index(text, context.index, context.policy):
        return "duplicate_of_resume"
    if category == "Summary" and context.resume_has_summary:
        return "resume_has_summary"
    if category == "Skills" and looks_like_non_skill(text, context.policy):
        return "non_skill"
    return None


def _skill_drop_reason(skill: str, context: SanitizeContext) -> str | None:
    if looks_like_non_skill(skill, context.policy):
        return "non_skill"
    if is_duplicate_in_index(skill, context.index, context.policy):
        return "duplicate_of_resume"
    return None


def sanitize_suggestions(
    raw_suggestions: Any,
    resume_text: str,
    policy: MatchingPolicy | None = None,
    *,
    index: ResumeIndex | None = None,
) -> list[Suggestion]:
    """Filter, rewrite and renumber model suggestions. Never raises."""
    if not isinstance(raw_suggestions, list):
        return []

    policy = policy or get_matching_policy()
    index = index or ResumeIndex.build(resume_text)
    context = SanitizeContext(
        index=index,
        policy=policy,
        resume_has_summary=index.has_summary_section(policy),
    )

    output: list[Suggestion] = []
    seen_skills: set[str] = set()
    for row in raw_suggestions:
        reason = _structural_drop_reason(row, context)
        if reason is not None:
            logger.debug("suggestion_dropped reason=%s", reason)
            continue

        category = row["category"]
        texts = CATEGORY_STRATEGIES[category](row["text"], context)
        if not texts:
            logger.debug("suggestion_dropped reason=no_pastable_content category=%s", category)
            continue

        for text in texts:
            if not text:
                logger.debug("suggestion_dropped reason=empty_text category=%s", category)
                continue
            if category == "Skills":
                skill_reason = _skill_drop_reason(text, context)
                key = normalize_for_search(text)
                if skill_reason is None and key in seen_skills:
                    skill_reason = "duplicate_skill"
                if skill_reason is not None:
                    logger.debug("suggestion_dropped reason=%s category=Skills", skill_reason)
                    continue
                seen_skills.add(key)
            output.append(Suggestion(id=str(len(output) + 1), category=category, text=text))

    return output
