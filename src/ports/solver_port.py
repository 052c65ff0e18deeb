"""Configured facade around the solving engine."""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from contracts.validator import assert_valid_puzzle
from feature_flags import coerce_bool, get_feature, is_parallel_trials_enabled
from orchestrator import log as event_log
from orchestrator.executor import EXECUTOR_KINDS, make_executor
from project_config import get_config
from sudoku_solver.solver import CONTRADICTION_POLICIES, SolveResult, solve
from sudoku_solver.text import format_values
from sudoku_solver.trace import TRACE_LEVELS

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSettings:
    """Finalised solver policy after precedence resolution."""

    parallel: bool
    executor: str
    max_workers: int
    trace_level: str
    on_contradiction: str
    validate_input: bool
    log_events: bool
    events_dir: str
    events_max_bytes: int


_DEFAULTS = SolverSettings(
    parallel=False,
    executor="process",
    max_workers=0,
    trace_level="none",
    on_contradiction="status",
    validate_input=True,
    log_events=False,
    events_dir="logs/solver",
    events_max_bytes=100 * 1024 * 1024,
)

_ENV_KEYS = {
    "executor": "SUDOKU_SOLVER_EXECUTOR",
    "max_workers": "SUDOKU_SOLVER_MAX_WORKERS",
    "trace_level": "SUDOKU_SOLVER_TRACE_LEVEL",
    "on_contradiction": "SUDOKU_SOLVER_ON_CONTRADICTION",
    "validate_input": "SUDOKU_SOLVER_VALIDATE_INPUT",
    "log_events": "SUDOKU_SOLVER_LOG_EVENTS",
    "events_dir": "SUDOKU_SOLVER_EVENTS_DIR",
}

_CHOICES = {
    "executor": EXECUTOR_KINDS,
    "trace_level": TRACE_LEVELS,
    "on_contradiction": CONTRADICTION_POLICIES,
}


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _apply_overrides(settings: SolverSettings, overrides: Mapping[str, Any]) -> SolverSettings:
    fields = asdict(settings)

    for name in ("validate_input", "log_events"):
        if name in overrides:
            maybe = coerce_bool(overrides[name])
            if maybe is not None:
                fields[name] = maybe
    for name, choices in _CHOICES.items():
        if name in overrides:
            value = overrides[name]
            if isinstance(value, str) and value.strip().lower() in choices:
                fields[name] = value.strip().lower()
    for name in ("max_workers", "events_max_bytes"):
        if name in overrides:
            maybe_int = _parse_int(overrides[name])
            if maybe_int is not None and maybe_int >= 0:
                fields[name] = maybe_int
    if "events_dir" in overrides:
        value = overrides["events_dir"]
        if isinstance(value, str) and value:
            fields["events_dir"] = value

    return SolverSettings(**fields)


def _config_overrides(profile: str) -> Dict[str, Any]:
    config = get_config()
    section = config.get("solver", {})
    payload: Dict[str, Any] = {}
    if isinstance(section, dict):
        payload.update({key: value for key, value in section.items() if key != "by_profile"})
        by_profile = section.get("by_profile")
        if isinstance(by_profile, dict):
            block = by_profile.get(profile.lower())
            if isinstance(block, dict):
                payload.update(block)

    logging_section = config.get("logging", {})
    if isinstance(logging_section, dict):
        if "events_enabled" in logging_section:
            payload["log_events"] = logging_section["events_enabled"]
        if "events_dir" in logging_section:
            payload["events_dir"] = logging_section["events_dir"]
        if "max_bytes" in logging_section:
            payload["events_max_bytes"] = logging_section["max_bytes"]
    return payload


def _feature_overrides(profile: str) -> Dict[str, Any]:
    feature = get_feature("parallel_trials", profile)
    payload: Dict[str, Any] = {}
    if "max_workers" in feature:
        payload["max_workers"] = feature["max_workers"]
    return payload


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    return {field: env[alias] for field, alias in _ENV_KEYS.items() if alias in env}


def _cli_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for field, alias in _ENV_KEYS.items():
        cli_alias = alias.replace("SUDOKU_SOLVER_", "CLI_SOLVER_", 1)
        if cli_alias in env:
            payload[field] = env[cli_alias]
    return payload


def resolve_settings(profile: str = "dev", env: Mapping[str, str] | None = None) -> SolverSettings:
    """Resolve defaults < config.toml < features.toml < environment < CLI.

    ``parallel`` comes from the ``parallel_trials`` feature and its
    ``CLI_SOLVER_PARALLEL`` / ``SUDOKU_SOLVER_PARALLEL`` overrides only.
    """

    env_map = build_env(env)
    settings = _DEFAULTS
    settings = _apply_overrides(settings, _config_overrides(profile))
    settings = _apply_overrides(settings, _feature_overrides(profile))
    settings = _apply_overrides(settings, _env_overrides(env_map))
    settings = _apply_overrides(settings, _cli_overrides(env_map))
    return replace(settings, parallel=is_parallel_trials_enabled(env_map, profile=profile))


def _puzzle_digest(puzzle: Sequence[Any]) -> str:
    text = format_values(puzzle)
    return "sha256-" + hashlib.sha256(text.encode("ascii")).hexdigest()


def _log_event(settings: SolverSettings, profile: str, puzzle: Sequence[Any], result: SolveResult, elapsed_ms: int) -> None:
    event_log.configure(settings.events_dir, max_bytes=settings.events_max_bytes)
    event_log.append_event(
        {
            "event": "solver.completed",
            "profile": profile,
            "puzzle_digest": _puzzle_digest(puzzle),
            "givens": sum(1 for value in puzzle if value),
            "status": result.status.value,
            "solved": result.solved,
            "passes": result.passes,
            "trials": result.trials,
            "parallel": settings.parallel,
            "time_ms": elapsed_ms,
        }
    )


def solve_puzzle(
    puzzle: Sequence[Any],
    *,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> Tuple[SolveResult, SolverSettings]:
    """Solve ``puzzle`` with the policy resolved for ``profile`` and ``env``.

    Raises :class:`contracts.errors.PuzzleValidationError` when input
    validation is enabled and the puzzle is not 81 blanks or digits.
    """

    settings = resolve_settings(profile, env)
    if settings.validate_input:
        assert_valid_puzzle(puzzle)

    executor = make_executor(settings.parallel, kind=settings.executor, max_workers=settings.max_workers)
    started = time.perf_counter()
    try:
        result = solve(
            puzzle,
            executor=executor,
            trace_level=settings.trace_level,
            on_contradiction=settings.on_contradiction,
        )
    finally:
        executor.shutdown()
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    _LOGGER.debug("solve finished status=%s in %d ms", result.status.value, elapsed_ms)

    if settings.log_events:
        _log_event(settings, profile, puzzle, result, elapsed_ms)
    return result, settings


__all__ = ["SolverSettings", "build_env", "resolve_settings", "solve_puzzle"]
