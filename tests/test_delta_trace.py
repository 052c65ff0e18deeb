from __future__ import annotations

import json

import pytest

from sudoku_solver.delta import Delta, DeltaOp, DeltaValidationError, canonicalise_deltas
from sudoku_solver.trace import SolveTrace, SolveTraceEntry, TraceValidationError


def _entry(step: int, **overrides) -> SolveTraceEntry:
    payload = {
        "step": step,
        "technique_id": "level0.eliminate",
        "deltas": (Delta(DeltaOp.ELIM, 3, 4),),
        "placements": 0,
        "candidates_removed": 1,
        "state_hash_before": "sha256-a",
        "state_hash_after": "sha256-b",
    }
    payload.update(overrides)
    return SolveTraceEntry(**payload)


def test_delta_accepts_string_ops():
    delta = Delta("PLACE", 80, 9)

    assert delta.op is DeltaOp.PLACE
    assert delta.to_payload() == {"op": "PLACE", "cell": 80, "digit": 9}


@pytest.mark.parametrize(
    "op, cell, digit",
    [("SWAP", 0, 1), ("ELIM", -1, 1), ("ELIM", 81, 1), ("ELIM", 0, 0), ("PLACE", 0, 10)],
)
def test_delta_rejects_out_of_range_values(op, cell, digit):
    with pytest.raises(DeltaValidationError):
        Delta(op, cell, digit)


def test_canonical_order_is_op_then_cell_then_digit():
    deltas = [
        Delta(DeltaOp.PLACE, 0, 1),
        Delta(DeltaOp.ELIM, 9, 2),
        Delta(DeltaOp.ELIM, 3, 7),
        Delta(DeltaOp.ELIM, 3, 1),
    ]

    ordered = canonicalise_deltas(deltas)

    assert [(d.op.value, d.cell, d.digit) for d in ordered] == [
        ("ELIM", 3, 1),
        ("ELIM", 3, 7),
        ("ELIM", 9, 2),
        ("PLACE", 0, 1),
    ]


def test_trace_steps_must_increase():
    trace = SolveTrace()
    trace.append(_entry(1))
    trace.append(_entry(2))

    with pytest.raises(TraceValidationError):
        trace.append(_entry(2))

    assert len(trace) == 2
    assert trace.next_step == 3


@pytest.mark.parametrize(
    "overrides",
    [{"step": 0}, {"technique_id": ""}, {"placements": -1}, {"candidates_removed": -2}],
)
def test_trace_entry_validation(overrides):
    fields = dict(overrides)
    step = fields.pop("step", 1)

    with pytest.raises(TraceValidationError):
        _entry(step, **fields)


def test_trace_json_is_compact_and_canonical():
    trace = SolveTrace()
    trace.append(_entry(1, deltas=(Delta(DeltaOp.ELIM, 5, 2), Delta(DeltaOp.ELIM, 1, 9))))
    trace.append(_entry(2, technique_id="level1.hypothesis", note="trials=3"))

    text = trace.to_json()
    payload = json.loads(text)

    assert " " not in text
    assert payload[0]["deltas"] == [
        {"op": "ELIM", "cell": 1, "digit": 9},
        {"op": "ELIM", "cell": 5, "digit": 2},
    ]
    assert "note" not in payload[0]
    assert payload[1]["note"] == "trials=3"
    assert trace.techniques() == ["level0.eliminate", "level1.hypothesis"]
