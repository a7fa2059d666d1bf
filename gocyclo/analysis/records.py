from __future__ import annotations

import threading
from typing import List

from gocyclo.analysis.complexity import cyclomatic
from gocyclo.analysis.naming import function_name
from gocyclo.core.record import ComplexityRecord, Position
from gocyclo.parsing.treesitter import FUNCTION_NODE_TYPES, ParsedFile


class IdAllocator:
    """Hands out record ids 1, 2, 3, ... to any number of threads.

    One allocator is shared by every worker of a run; ids are never
    reused.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def allocate(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def issued(self) -> int:
        with self._lock:
            return self._next - 1


def build_records(parsed: ParsedFile, allocator: IdAllocator) -> List[ComplexityRecord]:
    """One record per top-level function or method, in declaration order."""
    records: List[ComplexityRecord] = []
    for node in parsed.root.named_children:
        if node.type not in FUNCTION_NODE_TYPES:
            continue
        records.append(
            ComplexityRecord(
                package_name=parsed.package_name,
                function_name=function_name(parsed.source, node),
                complexity=cyclomatic(node),
                start=Position.from_point(parsed.path, node.start_point),
                end=Position.from_point(parsed.path, node.end_point),
                id=allocator.allocate(),
            )
        )
    return records
