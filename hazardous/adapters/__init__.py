"""Syntax adapters: shell, Makefile and Go sources to the shared command model."""

from .go import extract_go_commands
from .makefile import check_hazardous_line
from .shell import extract_shell_commands

__all__ = [
    "check_hazardous_line",
    "extract_go_commands",
    "extract_shell_commands",
]
