"""Step trace helpers recording how a grid was reduced."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, MutableSequence, Sequence

from .delta import Delta, canonicalise_deltas

TRACE_LEVELS = ("none", "steps")


class TraceValidationError(ValueError):
    """Raised when a trace entry is malformed or out of order."""


@dataclass(frozen=True)
class SolveTraceEntry:
    """Immutable record of one reduction step."""

    step: int
    technique_id: str
    deltas: Sequence[Delta]
    placements: int
    candidates_removed: int
    state_hash_before: str
    state_hash_after: str
    note: str | None = None

    def __post_init__(self) -> None:
        if self.step < 1:
            raise TraceValidationError("step must be >= 1")
        if not self.technique_id:
            raise TraceValidationError("technique_id must be a non-empty string")
        if self.placements < 0:
            raise TraceValidationError("placements must be >= 0")
        if self.candidates_removed < 0:
            raise TraceValidationError("candidates_removed must be >= 0")

    def to_payload(self) -> dict:
        payload = {
            "step": int(self.step),
            "technique_id": str(self.technique_id),
            "deltas": [delta.to_payload() for delta in canonicalise_deltas(self.deltas)],
            "placements": int(self.placements),
            "candidates_removed": int(self.candidates_removed),
            "state_hash_before": str(self.state_hash_before),
            "state_hash_after": str(self.state_hash_after),
        }
        if self.note is not None:
            payload["note"] = str(self.note)
        return payload


@dataclass
class SolveTrace:
    """Mutable accumulator of :class:`SolveTraceEntry` records."""

    entries: MutableSequence[SolveTraceEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def next_step(self) -> int:
        return self.entries[-1].step + 1 if self.entries else 1

    def append(self, entry: SolveTraceEntry) -> None:
        if self.entries and entry.step <= self.entries[-1].step:
            raise TraceValidationError("trace steps must be strictly increasing")
        self.entries.append(entry)

    def techniques(self) -> List[str]:
        return [entry.technique_id for entry in self.entries]

    def to_payload(self) -> List[dict]:
        return [entry.to_payload() for entry in self.entries]

    def to_json(self, *, indent: int | None = None) -> str:
        separators = (",", ":") if indent is None else None
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=separators, indent=indent)


__all__ = ["TRACE_LEVELS", "SolveTrace", "SolveTraceEntry", "TraceValidationError"]
