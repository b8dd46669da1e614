"""Flag-hazard matching.

Arguments are folded left to right into an accumulator:

- a long flag (``--force``) that follows a run of long flags is appended
  with a space, so ``--recursive --force`` is seen as one string;
- any other token restarts the accumulator at itself, so separate short
  flags never fuse (``-r -f`` is not ``-rf``).

After each token both the raw token and the accumulator are looked up in the
flag set. Lookups are exact and case-sensitive: ``-RF`` and ``--force=true``
never match.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class FlagMatch:
    """A hazardous flag hit.

    Attributes:
        flag: The set member that matched (raw token or accumulated run)
        index: Index of the token that completed the match
    """

    flag: str
    index: int


def _is_long_flag(token: str) -> bool:
    return token.startswith("--")


def match_hazardous_flags(tokens: Sequence[str], flags: Collection[str]) -> FlagMatch | None:
    """Return the first hazardous flag found in ``tokens``, or None."""
    if not flags:
        return None

    acc = ""
    for index, token in enumerate(tokens):
        if not token:
            continue

        if _is_long_flag(token) and _is_long_flag(acc):
            acc = f"{acc} {token}"
        else:
            acc = token

        if token in flags:
            return FlagMatch(flag=token, index=index)
        if acc in flags:
            return FlagMatch(flag=acc, index=index)

    return None


def has_hazardous_flags(tokens: Sequence[str], flags: Collection[str]) -> bool:
    """Boolean form of :func:`match_hazardous_flags`."""
    return match_hazardous_flags(tokens, flags) is not None
