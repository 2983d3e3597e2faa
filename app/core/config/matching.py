from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .settings import settings

logger = logging.getLogger(__name__)

_MATCHING_CONFIG_CACHE: dict[str, Any] | None = None
_MATCHING_POLICY_CACHE: MatchingPolicy | None = None
_DEFAULT_MATCHING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "matching.yaml"

DEFAULT_NON_SKILL_PHRASES = (
    "root cause analysis",
    "system analysis",
    "functional design",
    "technical documentation",
)
DEFAULT_PERFECT_MATCH_MESSAGE = (
    "Congratulations! Your resume perfectly matches this job description. "
    "No additional changes are required."
)


class MatchingConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class MatchingPolicy:
    """Tunable thresholds for the match normalization pipeline."""

    duplicate_min_chars: int = 20
    duplicate_min_token_chars: int = 4
    duplicate_min_tokens: int = 5
    duplicate_overlap_threshold: float = 0.65
    keyword_min_chars: int = 3
    recovered_text_min_chars: int = 20
    skill_quote_max_chars: int = 60
    summary_min_normalized_chars: int = 200
    summary_long_resume_chars: int = 400
    summary_experience_offset: int = 150
    non_skill_phrases: tuple[str, ...] = field(default=DEFAULT_NON_SKILL_PHRASES)
    perfect_match_message: str = DEFAULT_PERFECT_MATCH_MESSAGE

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> MatchingPolicy:
        duplicates = _section(config, "duplicates")
        keywords = _section(config, "keywords")
        suggestions = _section(config, "suggestions")
        summary = _section(suggestions, "summary_detection")
        scoring = _section(config, "scoring")

        return cls(
            duplicate_min_chars=_int_value(duplicates, "min_chars", cls.duplicate_min_chars),
            duplicate_min_token_chars=_int_value(duplicates, "min_token_chars", cls.duplicate_min_token_chars),
            duplicate_min_tokens=_int_value(duplicates, "min_tokens", cls.duplicate_min_tokens),
            duplicate_overlap_threshold=_ratio_value(
                duplicates, "overlap_threshold", cls.duplicate_overlap_threshold
            ),
            keyword_min_chars=_int_value(keywords, "min_chars", cls.keyword_min_chars),
            recovered_text_min_chars=_int_value(
                suggestions, "recovered_text_min_chars", cls.recovered_text_min_chars
            ),
            skill_quote_max_chars=_int_value(suggestions, "skill_quote_max_chars", cls.skill_quote_max_chars),
            summary_min_normalized_chars=_int_value(
                summary, "min_normalized_chars", cls.summary_min_normalized_chars
            ),
            summary_long_resume_chars=_int_value(summary, "long_resume_chars", cls.summary_long_resume_chars),
            summary_experience_offset=_int_value(summary, "experience_offset", cls.summary_experience_offset),
            non_skill_phrases=_phrases_value(suggestions, "non_skill_phrases", DEFAULT_NON_SKILL_PHRASES),
            perfect_match_message=_str_value(scoring, "perfect_match_message", cls.perfect_match_message),
        )


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MatchingConfigError(f"Invalid matching config: '{name}' must be a mapping.")
    return value


def _int_value(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MatchingConfigError(f"Invalid matching config: '{key}' must be a non-negative integer.")
    return value


def _ratio_value(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise MatchingConfigError(f"Invalid matching config: '{key}' must be a number between 0 and 1.")
    return float(value)


def _str_value(section: dict[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise MatchingConfigError(f"Invalid matching config: '{key}' must be a non-empty string.")
    return value.strip()


def _phrases_value(section: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MatchingConfigError(f"Invalid matching config: '{key}' must be a list of strings.")
    return tuple(item.strip().lower() for item in value if item.strip())


def _matching_config_path() -> Path:
    if settings.matching_config_path:
        return Path(settings.matching_config_path)
    return _DEFAULT_MATCHING_CONFIG_PATH


def get_matching_config() -> dict[str, Any]:
    """Load matching config from config/matching.yaml (or MATCHING_CONFIG_PATH) and cache it."""
    global _MATCHING_CONFIG_CACHE

    if _MATCHING_CONFIG_CACHE is not None:
        return _MATCHING_CONFIG_CACHE

    path = _matching_config_path()
    if not path.exists():
        logger.warning("matching_config_missing path=%s using_defaults=true", path)
        _MATCHING_CONFIG_CACHE = {}
        return _MATCHING_CONFIG_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MatchingConfigError(f"Failed to read matching config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MatchingConfigError(f"Invalid YAML in matching config '{path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise MatchingConfigError(f"Invalid matching config '{path}': expected a top-level mapping.")

    _MATCHING_CONFIG_CACHE = parsed
    return _MATCHING_CONFIG_CACHE


def get_matching_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'duplicates.overlap_threshold'."""
    if not path:
        return default

    current: Any = get_matching_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def get_matching_policy() -> MatchingPolicy:
    global _MATCHING_POLICY_CACHE

    if _MATCHING_POLICY_CACHE is None:
        _MATCHING_POLICY_CACHE = MatchingPolicy.from_config(get_matching_config())
    return _MATCHING_POLICY_CACHE


def clear_matching_config_cache() -> None:
    global _MATCHING_CONFIG_CACHE, _MATCHING_POLICY_CACHE
    _MATCHING_CONFIG_CACHE = None
    _MATCHING_POLICY_CACHE = None
