from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.core.config import MatchingPolicy, get_matching_policy
from app.schemas.analyze import Suggestion

from .keywords import as_finite_number, round_half_up

PERFECT_SCORE = 100


@dataclass(slots=True)
class ScoreOutcome:
    score: int
    message: str | None
    matched_keywords: list[str] = field(default_factory=list)
    missing_keywords: list[str] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)


def clamp_model_score(value: Any) -> int:
    number = as_finite_number(value)
    if number is None:
        return 0
    return max(0, min(PERFECT_SCORE, round_half_up(number)))


def keyword_coverage_score(matched_count: int, missing_count: int) -> int | None:
    total = matched_count + missing_count
    if total == 0:
        return None
    return round_half_up(PERFECT_SCORE * matched_count / total)


def reconcile_score(
    model_score: Any,
    matched: list[str],
    missing: list[str],
    suggestions: list[Suggestion],
    message: Any = None,
    policy: MatchingPolicy | None = None,
) -> ScoreOutcome:
    """Merge the model score with keyword coverage and enforce the perfect-match rule.

    Coverage can only raise the model score. Full coverage forces 100, and a
    score of 100 always ships with no missing keywords and no suggestions.
    """
    policy = policy or get_matching_policy()
    final_score = clamp_model_score(model_score)

    coverage = keyword_coverage_score(len(matched), len(missing))
    if coverage is not None:
        final_score = max(final_score, coverage)
        if not missing:
            final_score = PERFECT_SCORE

    final_message = message if isinstance(message, str) and message.strip() else None
    if final_score == PERFECT_SCORE:
        return ScoreOutcome(
            score=PERFECT_SCORE,
            message=final_message or policy.perfect_match_message,
            matched_keywords=list(matched),
            missing_keywords=[],
            suggestions=[],
        )

    return ScoreOutcome(
        score=final_score,
        message=final_message,
        matched_keywords=list(matched),
        missing_keywords=list(missing),
        suggestions=list(suggestions),
    )
