from __future__ import annotations

import json
from typing import IO, Iterable, List, Optional, Sequence

from gocyclo.core.record import ComplexityRecord


NO_DATA = "no data (no functions found)"


def sort_records(records: Iterable[ComplexityRecord]) -> List[ComplexityRecord]:
    """Most complex first; equal scores keep their incoming order."""
    return sorted(records, key=lambda record: -record.complexity)


def select_records(
    sorted_records: Sequence[ComplexityRecord],
    over: int = 0,
    top: Optional[int] = None,
) -> List[ComplexityRecord]:
    selected: List[ComplexityRecord] = []
    for i, record in enumerate(sorted_records):
        if top is not None and i == top:
            break
        if record.complexity <= over:
            break
        selected.append(record)
    return selected


def write_records(
    out: IO[str],
    sorted_records: Sequence[ComplexityRecord],
    over: int = 0,
    top: Optional[int] = None,
) -> int:
    selected = select_records(sorted_records, over, top)
    for record in selected:
        out.write(f"{record}\n")
    return len(selected)


def average(records: Sequence[ComplexityRecord]) -> Optional[float]:
    if not records:
        return None
    return sum(record.complexity for record in records) / len(records)


def format_average(value: Optional[float]) -> str:
    if value is None:
        return f"Average: {NO_DATA}"
    return f"Average: {value:.2f}"


def format_json(
    selected: Sequence[ComplexityRecord],
    records: Sequence[ComplexityRecord],
    show_average: bool = False,
) -> str:
    summary = {
        "total": len(records),
        "reported": len(selected),
    }
    if show_average:
        value = average(records)
        summary["average"] = round(value, 2) if value is not None else None
    data = {
        "summary": summary,
        "functions": [record.to_dict() for record in selected],
    }
    return json.dumps(data, indent=2)


def write_report(
    out: IO[str],
    records: Sequence[ComplexityRecord],
    over: int = 0,
    top: Optional[int] = None,
    show_average: bool = False,
    fmt: str = "text",
) -> int:
    """Rank, filter and print ``records``; returns how many were reported.

    The average always covers every record, not just the reported ones.
    """
    ranked = sort_records(records)
    if fmt == "json":
        selected = select_records(ranked, over, top)
        out.write(format_json(selected, ranked, show_average) + "\n")
        return len(selected)
    written = write_records(out, ranked, over, top)
    if show_average:
        out.write(format_average(average(records)) + "\n")
    return written
