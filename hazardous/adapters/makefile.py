"""Makefile adapter: line-based matching of recipe commands.

Makefiles get no binding table: macros such as ``$(BUILD_DIR)`` stay opaque
and are never path-classified, so a hazardous flag alone is reported.
"""

import re

from hazardous.definitions import HazardousCommand
from hazardous.matcher import match_hazardous_flags

_WORD_RE = re.compile(r"\S+")

# Recipe line prefixes: @ (silent), - (ignore errors), + (always run)
RECIPE_PREFIXES = "@-+"

SHELL_SEPARATORS = frozenset([";", "&&", "||", "|", "&"])


def _words_until_separator(words: list[str]) -> list[str]:
    """Words belonging to the current shell command only."""
    result = []
    for word in words:
        if word in SHELL_SEPARATORS:
            break
        if word.endswith(";"):
            result.append(word.rstrip(";"))
            break
        result.append(word)
    return result


def check_hazardous_line(line: str, command: HazardousCommand) -> tuple[str, int] | None:
    """Check one Makefile line for a hazardous invocation of ``command``.

    Returns:
        (matched flag, 1-based column of the command name) or None
    """
    if line.lstrip().startswith("#"):
        return None

    matches = list(_WORD_RE.finditer(line))
    target = command.name.lower()

    for position, match in enumerate(matches):
        word = match.group(0)
        stripped = word.lstrip(RECIPE_PREFIXES)
        if stripped.lower() != target:
            continue

        following = _words_until_separator([m.group(0) for m in matches[position + 1:]])
        flag_match = match_hazardous_flags(following, command.flags)
        if flag_match is not None:
            name_offset = match.start() + (len(word) - len(stripped))
            return flag_match.flag, name_offset + 1

    return None
