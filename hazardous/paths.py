"""Path-hazard classification for the arguments that follow a hazardous flag."""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from hazardous.ir import BindingTable


@dataclass(frozen=True)
class PathHazard:
    """Why an argument was judged unsafe."""

    reason: str
    path: str
    var_name: str | None = None


def extract_var_name(arg: str) -> tuple[str, str]:
    """Split ``$(NAME)rest``, ``${NAME}rest`` or ``$NAME/rest`` into (NAME, rest).

    For the bare ``$NAME`` form the name ends at the first ``/``, space or
    ``*`` and the rest keeps that delimiter. Anything else yields ("", "").
    """
    if arg.startswith("$(") and ")" in arg:
        end = arg.index(")")
        return arg[2:end], arg[end + 1:]

    if arg.startswith("${") and "}" in arg:
        end = arg.index("}")
        return arg[2:end], arg[end + 1:]

    if arg.startswith("$"):
        var_name = arg[1:]
        for idx, ch in enumerate(var_name):
            if ch in "/ *":
                return var_name[:idx], var_name[idx:]
        return var_name, ""

    return "", ""


def has_expansion(arg: str) -> bool:
    return "$(" in arg or "${" in arg


def classify_path_args(
    args: Sequence[str],
    bindings: BindingTable,
    unsafe_paths: Collection[str],
) -> PathHazard | None:
    """Decide whether any path argument resolves to an unsafe path.

    Literal arguments are checked in order and a safe literal does not stop
    the scan. The first argument carrying an expansion is decisive: it is
    resolved through ``bindings`` and its verdict is returned, later
    arguments are not examined. Unknown variables fail open.
    """
    for raw in args:
        arg = raw.strip()

        if has_expansion(arg):
            var_name, rest = extract_var_name(arg)
            value = bindings.get(var_name)

            if value is None:
                if rest in unsafe_paths:
                    return PathHazard(
                        reason="located unsafe path used, consider using ./ instead",
                        path=arg,
                    )
                return None

            value = value.strip()
            if value in unsafe_paths:
                return PathHazard(
                    reason="unsafe value for variable, consider using ./ instead",
                    path=arg,
                    var_name=var_name,
                )
            if value + rest in unsafe_paths:
                return PathHazard(
                    reason="located unsafe path used, consider using ./ instead",
                    path=arg,
                    var_name=var_name,
                )
            return None

        if arg in unsafe_paths:
            return PathHazard(
                reason="located unsafe path used, consider using ./ instead",
                path=arg,
            )

    return None
