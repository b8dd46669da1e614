"""Scan driver: picks an adapter per file and applies the reporting policy.

Two reporting policies exist and are kept separate:

flag policy
    A hazardous flag on the command is enough. Used for shell scripts by
    default and always for Makefiles (macros are opaque there).

path policy
    After the flag match, the remaining arguments must resolve to an unsafe
    path through the binding table. Always used for Go sources and for shell
    scripts when path resolution is requested.

Parse and I/O failures are logged and the file yields no findings; they
never abort a run.
"""

from pathlib import Path

from hazardous.adapters.go import extract_go_commands
from hazardous.adapters.makefile import check_hazardous_line
from hazardous.adapters.shell import extract_shell_commands
from hazardous.definitions import DEFAULT_RULES, RuleSet
from hazardous.exceptions import ParseFailure
from hazardous.findings import Finding, emit_finding
from hazardous.ir import BindingTable, CommandNode
from hazardous.matcher import match_hazardous_flags
from hazardous.parsers import parse_source
from hazardous.paths import classify_path_args
from hazardous.utils.logging import logger

MAKEFILE_NAMES = ("Makefile", "makefile", "GNUmakefile")


def detect_file_kind(file_path: str) -> str:
    """Return "go", "makefile" or "shell" for a path."""
    if file_path.endswith(".go"):
        return "go"
    if file_path.endswith(MAKEFILE_NAMES) or file_path.endswith(".mk"):
        return "makefile"
    return "shell"


def _flag_policy(commands: list[CommandNode], file_path: str, rules: RuleSet) -> list[Finding]:
    findings = []
    for command in commands:
        if not rules.command.matches_name(command.name):
            continue
        if match_hazardous_flags(command.arg_texts, rules.command.flags) is not None:
            findings.append(emit_finding(file_path, command, rules.command.label))
    return findings


def _path_policy(
    commands: list[CommandNode],
    bindings: BindingTable,
    file_path: str,
    rules: RuleSet,
) -> list[Finding]:
    findings = []
    for command in commands:
        if not rules.command.matches_name(command.name):
            continue

        arg_texts = command.arg_texts
        flag_match = match_hazardous_flags(arg_texts, rules.command.flags)
        if flag_match is None:
            continue

        hazard = classify_path_args(arg_texts[flag_match.index + 1:], bindings, rules.unsafe_paths)
        if hazard is None:
            continue

        logger.debug("{path}: {reason} ({arg})", path=file_path, reason=hazard.reason, arg=hazard.path)
        findings.append(emit_finding(file_path, command, rules.command.label, hazard.reason))

    if findings:
        for name in bindings.unassigned():
            logger.warning("un-assigned variable '{name}' found in {path}", name=name, path=file_path)

    return findings


def scan_shell_script(content: str, file_path: str, rules: RuleSet = DEFAULT_RULES) -> list[Finding]:
    """Flag-policy scan of a shell script.

    Raises:
        ParseFailure: if the script does not parse
    """
    tree = parse_source(content, "bash", file_path)
    commands, _ = extract_shell_commands(tree)
    return _flag_policy(commands, file_path, rules)


def analyze_shell_script(content: str, file_path: str, rules: RuleSet = DEFAULT_RULES) -> list[Finding]:
    """Path-policy scan of a shell script using its variable bindings.

    Raises:
        ParseFailure: if the script does not parse
    """
    tree = parse_source(content, "bash", file_path)
    commands, bindings = extract_shell_commands(tree)
    return _path_policy(commands, bindings, file_path, rules)


def analyze_go_source(content: str, file_path: str, rules: RuleSet = DEFAULT_RULES) -> list[Finding]:
    """Path-policy scan of a Go source file.

    Raises:
        ParseFailure: if the source does not parse
    """
    tree = parse_source(content, "go", file_path)
    commands, bindings = extract_go_commands(tree)
    return _path_policy(commands, bindings, file_path, rules)


def scan_makefile(content: str, file_path: str, rules: RuleSet = DEFAULT_RULES) -> list[Finding]:
    """Flag-policy, line-based scan of a Makefile."""
    findings = []
    for index, line in enumerate(content.split("\n")):
        hit = check_hazardous_line(line, rules.command)
        if hit is None:
            continue
        flag, col = hit
        findings.append(
            Finding(
                filepath=file_path,
                line=index + 1,
                col=col,
                command=f"{rules.command.name} {flag}",
            )
        )
    return findings


def scan_content(
    content: str,
    file_path: str,
    rules: RuleSet = DEFAULT_RULES,
    resolve_paths: bool = False,
) -> list[Finding]:
    """Dispatch already-read content to the right adapter and policy.

    Raises:
        ParseFailure: if a shell or Go file does not parse
    """
    kind = detect_file_kind(file_path)
    if kind == "makefile":
        return scan_makefile(content, file_path, rules)
    if kind == "go":
        return analyze_go_source(content, file_path, rules)
    if resolve_paths:
        return analyze_shell_script(content, file_path, rules)
    return scan_shell_script(content, file_path, rules)


def scan_file(
    path: Path,
    rules: RuleSet = DEFAULT_RULES,
    resolve_paths: bool = False,
    max_file_size: int | None = None,
) -> list[Finding]:
    """Read and scan one file. Never raises for unreadable or malformed files."""
    file_path = path.as_posix()
    logger.debug("handling {kind} file: {path}", kind=detect_file_kind(file_path), path=file_path)

    try:
        if max_file_size is not None and path.stat().st_size >= max_file_size:
            logger.info("Skipping {path}: larger than {limit} bytes", path=file_path, limit=max_file_size)
            return []
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file {path}: {err}", path=file_path, err=e)
        return []

    try:
        return scan_content(content, file_path, rules, resolve_paths)
    except ParseFailure as e:
        logger.error("Error parsing file {path}: {err}", path=file_path, err=e)
        return []
