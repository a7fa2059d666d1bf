"""
gocyclo

Calculates the cyclomatic complexities of functions and methods in Go
source code, ranks them, and reports the most complex ones.
"""

__version__ = "1.0.0"

from gocyclo.analysis.records import IdAllocator, build_records
from gocyclo.core.config import Config
from gocyclo.core.engine import AnalysisEngine
from gocyclo.core.errors import ConfigError, GocycloError, ParseError, UsageError
from gocyclo.core.record import ComplexityRecord, Position

__all__ = [
    "AnalysisEngine",
    "ComplexityRecord",
    "Config",
    "ConfigError",
    "GocycloError",
    "IdAllocator",
    "ParseError",
    "Position",
    "UsageError",
    "build_records",
]
