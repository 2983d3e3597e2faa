from __future__ import annotations

from dataclasses import dataclass

from app.core.config import MatchingPolicy, get_matching_policy
from app.normalize.utils import normalize_for_search


@dataclass(frozen=True, slots=True)
class ResumeIndex:
    raw_text: str
    normalized: str

    @classmethod
    def build(cls, resume_text: str | None) -> ResumeIndex:
        raw = resume_text or ""
        return cls(raw_text=raw, normalized=normalize_for_search(raw))

    def contains(self, normalized_fragment: str) -> bool:
        return normalized_fragment in self.normalized

    def has_summary_section(self, policy: MatchingPolicy) -> bool:
        # Length and keyword-position guess; there is no real section detection here.
        if len(self.normalized) <= policy.summary_min_normalized_chars:
            return False
        if "summary" in self.normalized:
            return True
        return (
            len(self.raw_text.strip()) > policy.summary_long_resume_chars
            and self.normalized.find("experience") > policy.summary_experience_offset
        )


def token_overlap_ratio(normalized_candidate: str, index: ResumeIndex, policy: MatchingPolicy) -> float | None:
    """Share of the candidate's content tokens found in the resume.

    Returns None when the candidate has too few content tokens to judge.
    """
    tokens = [token for token in normalized_candidate.split() if len(token) >= policy.duplicate_min_token_chars]
    if len(tokens) < policy.duplicate_min_tokens:
        return None
    hits = sum(1 for token in tokens if index.contains(token))
    return hits / len(tokens)


def is_duplicate_in_index(candidate: str, index: ResumeIndex, policy: MatchingPolicy) -> bool:
    normalized = normalize_for_search(candidate)
    if len(normalized) < policy.duplicate_min_chars:
        return False
    if index.contains(normalized):
        return True
    ratio = token_overlap_ratio(normalized, index, policy)
    return ratio is not None and ratio >= policy.duplicate_overlap_threshold


def is_duplicate_of_resume(candidate: str, resume_text: str, policy: MatchingPolicy | None = None) -> bool:
    """True when the candidate is already substantively present in the resume."""
    return is_duplicate_in_index(candidate, ResumeIndex.build(resume_text), policy or get_matching_policy())
