"""Show the active hazardous command definition."""

import click
from rich.table import Table

from hazardous.config import load_runtime_config
from hazardous.definitions import build_rules
from hazardous.ui import console, print_header
from hazardous.utils.error_handler import handle_exceptions


@click.command("rules")
@handle_exceptions
@click.option("--root", default=".", show_default=True, help="Directory holding .hazardous.json")
def rules(root):
    """Print the command, flag combinations and unsafe paths being checked.

    Reflects .hazardous.json in --root and HAZARDOUS_RULES_* environment
    overrides, so this is what `hazardous scan` would use from the same place.
    """
    cfg = load_runtime_config(root)
    ruleset = build_rules(cfg["rules"])

    print_header("Hazardous command")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Command", style="cmd")
    table.add_column("Label")
    table.add_column("Flags")
    table.add_row(
        ruleset.command.name,
        ruleset.command.label,
        ", ".join(sorted(ruleset.command.flags)),
    )
    console.print(table)

    console.print(
        f"Unsafe paths: {', '.join(sorted(ruleset.unsafe_paths))}",
        highlight=False,
    )
