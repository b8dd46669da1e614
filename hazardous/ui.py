"""Central UI handler for hazardous.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from hazardous.ui import console, print_findings

    console.print("[success]No hazardous commands found[/success]")
"""

import sys
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from hazardous.findings import Finding

HAZARDOUS_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=HAZARDOUS_THEME,
    force_terminal=sys.stdout.isatty(),
)

err_console = Console(theme=HAZARDOUS_THEME, stderr=True)


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    """Print an error message in red."""
    err_console.print(f"[error]ERROR:[/error] {msg}", highlight=False)


def print_findings(findings: Sequence[Finding]) -> None:
    """Render findings as a table, one row per hazardous invocation."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2, 0, 0))
    table.add_column("Location", style="path")
    table.add_column("Command", style="cmd")
    table.add_column("Detail", style="dim")

    for finding in findings:
        table.add_row(
            f"{finding.filepath}:{finding.line}:{finding.col}",
            finding.command,
            finding.message,
        )

    console.print(table)
