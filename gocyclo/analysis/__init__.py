from gocyclo.analysis.complexity import NodeKind, classify, cyclomatic
from gocyclo.analysis.naming import BAD_RECEIVER, function_name, receiver_type
from gocyclo.analysis.records import IdAllocator, build_records

__all__ = [
    "BAD_RECEIVER",
    "IdAllocator",
    "NodeKind",
    "build_records",
    "classify",
    "cyclomatic",
    "function_name",
    "receiver_type",
]
