"""Command line entry point for solving puzzles."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from contracts.errors import ContradictionError, PuzzleValidationError
from ports.solver_port import solve_puzzle
from project_config import get_section
from sudoku_solver.examples import EXAMPLES
from sudoku_solver.solver import SolveResult
from sudoku_solver.text import format_values, parse_puzzle, render_grid
from tools.reports import status_report


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        configured = str(get_section("logging.level", "WARNING")).upper()
        level = getattr(logging, configured, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_cli_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if args.parallel is not None:
        env["CLI_SOLVER_PARALLEL"] = "1" if args.parallel else "0"
    if args.workers is not None:
        env["CLI_SOLVER_MAX_WORKERS"] = str(args.workers)
    if args.executor is not None:
        env["CLI_SOLVER_EXECUTOR"] = args.executor
    if getattr(args, "trace", False):
        env["CLI_SOLVER_TRACE_LEVEL"] = "steps"
    if args.log_events:
        env["CLI_SOLVER_LOG_EVENTS"] = "1"
    return env


def _read_puzzle(args: argparse.Namespace) -> List[Optional[int]]:
    if args.example:
        return list(EXAMPLES[args.example])
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    elif args.puzzle:
        text = args.puzzle
    else:
        raise SystemExit("Provide a puzzle string, --file or --example")
    try:
        return parse_puzzle(text)
    except ValueError as exc:
        raise SystemExit(f"Invalid puzzle: {exc}") from exc


def _solve_one(puzzle: List[Optional[int]], args: argparse.Namespace) -> Tuple[SolveResult, dict]:
    try:
        result, _ = solve_puzzle(puzzle, profile=args.profile, env=_build_cli_env(args))
    except PuzzleValidationError as exc:
        raise SystemExit(f"Invalid puzzle: {exc}") from exc
    except ContradictionError as exc:
        raise SystemExit(str(exc)) from exc
    payload = result.to_payload()
    payload["grid"] = format_values(result.values)
    return result, payload


def cmd_solve(args: argparse.Namespace) -> int:
    result, payload = _solve_one(_read_puzzle(args), args)
    if args.json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(render_grid(payload["values"]))
        print(f"status: {payload['status']}")
        if payload["hypothesis"] is not None:
            hypothesis = payload["hypothesis"]
            row, col = divmod(hypothesis["cell"], 9)
            print(f"hypothesis: r{row + 1}c{col + 1}={hypothesis['digit']} after {payload['trials']} trial(s)")
        if result.trace is not None:
            print("trace:")
            print(result.trace.to_json(indent=2))
    return 0 if payload["solved"] else 1


def _iter_puzzles(path: Path) -> Iterable[str]:
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        yield value


def cmd_batch(args: argparse.Namespace) -> int:
    summaries: List[dict] = []
    for line in _iter_puzzles(Path(args.file)):
        try:
            puzzle = parse_puzzle(line)
        except ValueError as exc:
            raise SystemExit(f"Invalid puzzle {line!r}: {exc}") from exc
        _, payload = _solve_one(puzzle, args)
        summaries.append(
            {
                "puzzle": line,
                "grid": payload["grid"],
                "status": payload["status"],
                "solved": payload["solved"],
                "trials": payload["trials"],
            }
        )
    print(json.dumps(summaries, indent=2, sort_keys=True))
    return 0 if all(item["solved"] for item in summaries) else 1


def cmd_report(args: argparse.Namespace) -> int:
    base_dir = Path(args.path)
    files = sorted(base_dir.glob("**/*.jsonl"))
    if not files:
        raise SystemExit(f"No JSONL logs found under {base_dir}")
    summary = status_report.aggregate(files, top=args.top)
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", default="dev")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--parallel", dest="parallel", action="store_true", default=None, help="Evaluate hypothesis trials on a pool")
    mode.add_argument("--sequential", dest="parallel", action="store_false", help="Evaluate hypothesis trials one by one")
    parser.set_defaults(parallel=None)
    parser.add_argument("--workers", type=int, default=None, help="Pool size (0 = one per CPU)")
    parser.add_argument("--executor", choices=("process", "thread"), default=None)
    parser.add_argument("--log-events", action="store_true", help="Append a solver.completed event to the JSONL log")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve 9x9 Sudoku by elimination and single hypotheses")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Solve one puzzle")
    solve.add_argument("puzzle", nargs="?", help="81 symbols; 1-9 givens, 0 or . blanks")
    source = solve.add_mutually_exclusive_group()
    source.add_argument("--file", default=None, help="Read the puzzle from a file")
    source.add_argument("--example", choices=sorted(EXAMPLES), default=None)
    solve.add_argument("--trace", action="store_true", help="Record elimination steps")
    solve.add_argument("--json", action="store_true", help="Print the JSON report")
    _add_policy_arguments(solve)
    solve.set_defaults(func=cmd_solve)

    batch = sub.add_parser("batch", help="Solve one puzzle per line of a file")
    batch.add_argument("file")
    _add_policy_arguments(batch)
    batch.set_defaults(func=cmd_batch)

    report = sub.add_parser("report", help="Aggregate solver event logs")
    report.add_argument("path", help="Directory containing JSONL logs")
    report.add_argument("--top", type=int, default=5)
    report.set_defaults(func=cmd_report)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
