"""Syntax-neutral command model shared by all adapters.

Adapters turn a syntax tree (or raw Makefile text) into ``CommandNode``
values plus a ``BindingTable``. The matchers only ever look at these types,
never at the tree they came from.
"""

from dataclasses import dataclass, field
from enum import Enum


class ArgOrigin(Enum):
    """Where the text of an argument came from."""

    LITERAL = "literal"
    VARIABLE = "variable"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ArgumentToken:
    """One argument word, quotes stripped and expansions rendered as ``${NAME}``."""

    text: str
    origin: ArgOrigin = ArgOrigin.LITERAL


@dataclass(frozen=True)
class CommandNode:
    """One command invocation with 1-based source position."""

    name: str
    args: tuple[ArgumentToken, ...]
    line: int
    col: int

    @property
    def arg_texts(self) -> list[str]:
        return [arg.text for arg in self.args]


@dataclass
class BindingTable:
    """Flat, last-write-wins map of variable name to textual value.

    An empty string means the variable exists but has no resolvable value
    (declared without initializer, or assigned from something we could not
    render). There is no scoping: the most recent assignment anywhere in the
    file wins.
    """

    values: dict[str, str] = field(default_factory=dict)

    def bind(self, name: str, value: str) -> None:
        self.values[name] = value

    def declare(self, name: str) -> None:
        """Record a declaration without initializer, keeping any existing value."""
        self.values.setdefault(name, "")

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def unassigned(self) -> list[str]:
        """Names bound to an empty or whitespace-only value, in binding order."""
        return [name for name, value in self.values.items() if not value.strip()]
