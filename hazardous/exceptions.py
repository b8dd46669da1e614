"""Custom exceptions for hazardous.

Only failures that stop a single file from being analyzed are modelled as
exceptions. "No match" and unresolvable bindings are ordinary return values.
"""


class HazardousError(Exception):
    """Base class for hazardous errors."""


class ParseFailure(HazardousError):
    """Raised when a source file cannot be turned into a usable syntax tree.

    Attributes:
        file_path: Path of the file that failed to parse
        line: 1-based line of the first syntax error, if known
        col: 1-based column of the first syntax error, if known
    """

    def __init__(self, file_path: str, message: str, line: int | None = None, col: int | None = None):
        self.file_path = file_path
        self.line = line
        self.col = col
        location = f"{file_path}:{line}:{col}" if line is not None else file_path
        super().__init__(f"{location}: {message}")
