from __future__ import annotations

from .matching import (
    MatchingConfigError,
    MatchingPolicy,
    clear_matching_config_cache,
    get_matching_config,
    get_matching_policy,
    get_matching_value,
)
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    "MatchingConfigError",
    "MatchingPolicy",
    "clear_matching_config_cache",
    "get_matching_config",
    "get_matching_policy",
    "get_matching_value",
]
