from __future__ import annotations

import logging

from app.core.config import MatchingPolicy, get_matching_policy
from app.features import (
    ResumeIndex,
    coerce_keyword_frequency,
    coerce_keyword_list,
    reconcile_keywords,
    reconcile_score,
    sanitize_suggestions,
)
from app.parsing.json_extract import ResponseParseError, extract_json
from app.schemas.analyze import AnalyzeResult

logger = logging.getLogger(__name__)

__all__ = ["ResponseParseError", "analyze"]


def analyze(
    resume_text: str,
    job_description_text: str,
    raw_model_output: str,
    policy: MatchingPolicy | None = None,
) -> AnalyzeResult:
    """Turn a raw model completion into a consistent match report.

    Raises ResponseParseError when no JSON object can be recovered from
    raw_model_output. Every other malformed piece is dropped, not fatal.
    """
    policy = policy or get_matching_policy()
    parsed = extract_json(raw_model_output)

    index = ResumeIndex.build(resume_text)
    matched = coerce_keyword_list(parsed.get("matchedKeywords"))
    missing = coerce_keyword_list(parsed.get("missingKeywords"))
    keyword_frequency = coerce_keyword_frequency(parsed.get("keywordFrequency"))
    suggestions = sanitize_suggestions(parsed.get("suggestions"), resume_text, policy, index=index)

    matched, missing = reconcile_keywords(matched, missing, resume_text, policy, index=index)
    outcome = reconcile_score(
        parsed.get("score"),
        matched,
        missing,
        suggestions,
        message=parsed.get("message"),
        policy=policy,
    )

    logger.info(
        "analyze_completed score=%s matched=%s missing=%s suggestions=%s resume_len=%s jd_len=%s",
        outcome.score,
        len(outcome.matched_keywords),
        len(outcome.missing_keywords),
        len(outcome.suggestions),
        len(resume_text or ""),
        len(job_description_text or ""),
    )
    return AnalyzeResult(
        score=outcome.score,
        message=outcome.message,
        matched_keywords=outcome.matched_keywords,
        missing_keywords=outcome.missing_keywords,
        keyword_frequency=keyword_frequency,
        suggestions=outcome.suggestions,
    )
