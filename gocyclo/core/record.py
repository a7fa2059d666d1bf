from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Position:
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    @classmethod
    def from_point(cls, file: str, point) -> "Position":
        # tree-sitter points are 0-based (row, byte column).
        return cls(file=file, line=point[0] + 1, column=point[1] + 1)


@dataclass(frozen=True)
class ComplexityRecord:
    package_name: str
    function_name: str
    complexity: int
    start: Position
    end: Position
    id: int

    def __str__(self) -> str:
        return (
            f"{self.complexity} {self.package_name} {self.function_name} "
            f"{self.start} {self.end} {self.id}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "complexity": self.complexity,
            "package": self.package_name,
            "function": self.function_name,
            "start": {"file": self.start.file, "line": self.start.line, "column": self.start.column},
            "end": {"file": self.end.file, "line": self.end.line, "column": self.end.column},
        }
