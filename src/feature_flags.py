"""Runtime feature flag helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

__all__ = ["PARALLEL_ENV_KEYS", "coerce_bool", "get_feature", "is_parallel_trials_enabled", "reload"]

_FEATURES_FILENAME = "config/features.toml"

# CLI flag first, then the process environment
PARALLEL_ENV_KEYS = ("CLI_SOLVER_PARALLEL", "SUDOKU_SOLVER_PARALLEL")


def _features_path() -> Path:
    return Path(__file__).resolve().parents[1] / _FEATURES_FILENAME


@lru_cache(maxsize=1)
def _load_features() -> dict[str, Any]:
    path = _features_path()
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def reload() -> None:
    """Clear the cached feature configuration."""

    _load_features.cache_clear()


def coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def get_feature(name: str, profile: str | None = None) -> dict[str, Any]:
    """Return the feature block ``name`` merged with its profile overrides."""

    features = _load_features()
    entry = features.get(name)
    merged: dict[str, Any] = {}
    if isinstance(entry, dict):
        for key, value in entry.items():
            if key == "by_profile":
                continue
            merged[key] = value

        if profile:
            by_profile = entry.get("by_profile")
            if isinstance(by_profile, dict):
                profile_block = by_profile.get(profile.lower())
                if isinstance(profile_block, dict):
                    merged.update(profile_block)
    return merged


def is_parallel_trials_enabled(env: Mapping[str, str] | None = None, *, profile: str | None = None) -> bool:
    """Return ``True`` when hypothesis trials should run on a pool."""

    enabled = bool(get_feature("parallel_trials", profile).get("enabled", False))

    if env:
        for key in PARALLEL_ENV_KEYS:
            override = coerce_bool(env.get(key))
            if override is not None:
                enabled = override
                break

    return enabled
