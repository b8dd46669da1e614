"""Finding type and the log-based diagnostic sink."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from hazardous.ir import CommandNode
from hazardous.utils.logging import logger


@dataclass(frozen=True)
class Finding:
    """One hazardous invocation at a 1-based position."""

    filepath: str
    line: int
    col: int
    command: str
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "file": self.filepath,
            "line": self.line,
            "column": self.col,
            "command": self.command,
        }
        if self.message:
            result["message"] = self.message
        return result

    def __str__(self) -> str:
        return f"unsafe code found at position {self.line},{self.col} in {self.filepath}"


def emit_finding(file_path: str, node: CommandNode, command: str, message: str = "") -> Finding:
    """Package a matched command node into a Finding."""
    return Finding(
        filepath=file_path,
        line=node.line,
        col=node.col,
        command=command,
        message=message,
    )


def report_findings(findings: Iterable[Finding]) -> None:
    """Log each finding at WARNING level."""
    for finding in findings:
        logger.bind(command=finding.command).warning(str(finding))
