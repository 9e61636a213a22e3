"""Exceptions raised by convergraph."""


class ConvergraphError(Exception):
    """Base class for fatal convergraph errors."""


class ConfigurationError(ConvergraphError, ValueError):
    """Invalid option value or unreadable reference file."""


class RecordParseError(ConvergraphError, ValueError):
    """
    Malformed input record or missing required column.

    Attributes:
        line: 1-based line number in the input, when known
    """

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
