from .duplicates import ResumeIndex, is_duplicate_of_resume, token_overlap_ratio
from .keywords import coerce_keyword_frequency, coerce_keyword_list, reconcile_keywords
from .scoring import ScoreOutcome, clamp_model_score, reconcile_score
from .suggestions import CATEGORY_STRATEGIES, is_instructional, sanitize_suggestions

__all__ = [
    "ResumeIndex",
    "is_duplicate_of_resume",
    "token_overlap_ratio",
    "coerce_keyword_frequency",
    "coerce_keyword_list",
    "reconcile_keywords",
    "ScoreOutcome",
    "clamp_model_score",
    "reconcile_score",
    "CATEGORY_STRATEGIES",
    "is_instructional",
    "sanitize_suggestions",
]
