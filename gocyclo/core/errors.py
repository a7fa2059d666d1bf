"""
Error types raised by the complexity analyzer.

Malformed method receivers and empty result sets are not errors; they are
handled where they occur.
"""


class GocycloError(Exception):
    """Base class for analyzer errors."""


class UsageError(GocycloError):
    """The analyzer was invoked incorrectly (no paths, missing path, ...)."""


class ConfigError(UsageError):
    """A configuration file or value could not be used."""


class ParseError(GocycloError):
    """A source file is not valid Go. Always fatal for the run."""

    def __init__(self, path: str, line: int, column: int, message: str):
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line <= 0:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}:{self.column}: {self.message}"
