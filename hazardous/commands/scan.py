"""Scan files for hazardous rm -rf invocations."""

import json
from pathlib import Path

import click

from hazardous.config import load_runtime_config, split_csv
from hazardous.definitions import build_rules
from hazardous.findings import report_findings
from hazardous.scanner import scan_file
from hazardous.ui import console, print_error, print_findings
from hazardous.utils.error_handler import handle_exceptions
from hazardous.utils.exit_codes import ExitCodes
from hazardous.utils.logging import logger
from hazardous.walker import FileWalker


@click.command("scan")
@handle_exceptions
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--allow-extensions",
    default=None,
    help="Comma-separated list of allowed file suffixes (default: .sh,Makefile)",
)
@click.option(
    "--exclude-dirs",
    default=None,
    help="Comma-separated list of directory names to skip (default: node_modules,linters)",
)
@click.option(
    "--resolve-paths/--no-resolve-paths",
    default=None,
    help="Report shell rm -rf only when the target resolves to an unsafe path",
)
@click.option("--output", type=click.Path(dir_okay=False), help="Write findings to a JSON file")
@click.option("--root", default=".", show_default=True, help="Directory holding .hazardous.json")
def scan(targets, allow_extensions, exclude_dirs, resolve_paths, output, root):
    """Scan shell scripts, Makefiles and Go sources for hazardous rm -rf usage.

    TARGETS may be files, directories, recursive patterns (./... or dir/...)
    or quoted glob patterns.

    \b
    POLICIES:
      Makefiles      rm with recursive+force flags is always reported
      Shell scripts  same, unless --resolve-paths asks for the target path
                     to resolve to / or /* through variable bindings
      Go sources     exec.Command("rm", "-rf", path) reported only when the
                     path resolves to / or /*

    \b
    EXAMPLES:
      hazardous scan ./...
      hazardous scan scripts/deploy.sh Makefile
      hazardous scan --allow-extensions .sh,Makefile,.go --resolve-paths ./...
      hazardous scan --output findings.json 'ci/*'

    \b
    EXIT CODES:
      0 = No hazardous commands found
      1 = Hazardous commands found
      3 = Nothing to scan (no matching files)
    """
    cfg = load_runtime_config(root)
    scan_cfg = cfg["scan"]

    allowed_exts = split_csv(allow_extensions) or scan_cfg["allow_extensions"]
    excluded_dirs = split_csv(exclude_dirs)
    if excluded_dirs is None:
        excluded_dirs = scan_cfg["exclude_dirs"]
    if resolve_paths is None:
        resolve_paths = scan_cfg["resolve_paths"]

    rules = build_rules(cfg["rules"])

    walker = FileWalker(allowed_exts, excluded_dirs)
    files = walker.walk(targets)
    logger.debug("Selected {count} files: {stats}", count=len(files), stats=walker.stats)

    if not files:
        print_error("No files matched the given targets")
        raise SystemExit(ExitCodes.TASK_INCOMPLETE)

    findings = []
    for path in files:
        findings.extend(
            scan_file(
                path,
                rules=rules,
                resolve_paths=resolve_paths,
                max_file_size=scan_cfg["max_file_size"],
            )
        )

    report_findings(findings)

    if findings:
        console.print(f"\nFound {len(findings)} hazardous command(s) in {len(files)} file(s):", highlight=False)
        print_findings(findings)
    else:
        console.print(f"[success]No hazardous commands found[/success] ({len(files)} file(s) scanned)")

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                {"findings": [finding.to_dict() for finding in findings], "total": len(findings)},
                f,
                indent=2,
            )
        console.print(f"Results saved to: {output}", highlight=False)

    exit_code = ExitCodes.HAZARDS_FOUND if findings else ExitCodes.SUCCESS
    logger.debug(ExitCodes.get_description(exit_code))
    raise SystemExit(exit_code)
