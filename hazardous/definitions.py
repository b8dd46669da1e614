"""Hazardous command definitions and the unsafe path denylist.

Built once at start-up (defaults or the ``rules`` config section) and passed
by reference to every matcher call. All values are immutable.
"""

import posixpath
from dataclasses import dataclass
from typing import Any

RM_FLAGS = frozenset(["-rf", "-fr", "--recursive --force"])

UNSAFE_PATHS = frozenset(["/", "/*"])


@dataclass(frozen=True)
class HazardousCommand:
    """A command name plus the flag strings that make it hazardous."""

    name: str
    flags: frozenset[str]
    label: str

    def matches_name(self, command_name: str) -> bool:
        """True for the bare name or a path ending in it (``/bin/rm``)."""
        if not command_name:
            return False
        return command_name == self.name or posixpath.basename(command_name) == self.name


@dataclass(frozen=True)
class RuleSet:
    """Everything a scan needs to know about what is hazardous."""

    command: HazardousCommand
    unsafe_paths: frozenset[str]


RM_RF = HazardousCommand(name="rm", flags=RM_FLAGS, label="rm -rf")

DEFAULT_RULES = RuleSet(command=RM_RF, unsafe_paths=UNSAFE_PATHS)


def build_rules(rules_config: dict[str, Any] | None) -> RuleSet:
    """Create a RuleSet from the ``rules`` section of the runtime config.

    Missing keys fall back to the built-in ``rm -rf`` definition.
    """
    if not rules_config:
        return DEFAULT_RULES

    name = rules_config.get("command") or RM_RF.name
    flags = rules_config.get("flags")
    label = rules_config.get("label") or (RM_RF.label if name == RM_RF.name else name)
    unsafe_paths = rules_config.get("unsafe_paths")

    command = HazardousCommand(
        name=name,
        flags=frozenset(flags) if flags is not None else RM_FLAGS,
        label=label,
    )
    return RuleSet(
        command=command,
        unsafe_paths=frozenset(unsafe_paths) if unsafe_paths is not None else UNSAFE_PATHS,
    )
