"""End-to-end scanner tests: content in, findings out."""

import pytest

from hazardous.definitions import RM_RF, RuleSet
from hazardous.exceptions import ParseFailure
from hazardous.findings import Finding
from hazardous.scanner import (
    analyze_go_source,
    analyze_shell_script,
    detect_file_kind,
    scan_content,
    scan_file,
    scan_shell_script,
)

UNSAFE_VALUE = "unsafe value for variable, consider using ./ instead"
UNSAFE_PATH = "located unsafe path used, consider using ./ instead"


class TestDetectFileKind:
    @pytest.mark.parametrize(
        "path,kind",
        [
            ("scripts/deploy.sh", "shell"),
            ("Makefile", "makefile"),
            ("sub/GNUmakefile", "makefile"),
            ("rules.mk", "makefile"),
            ("cmd/main.go", "go"),
        ],
    )
    def test_kinds(self, path, kind):
        assert detect_file_kind(path) == kind


class TestShellFlagPolicy:
    def test_rm_rf_reported(self):
        findings = scan_content("#!/bin/bash\nrm -rf /path/to/dir\n", "test.sh")
        assert findings == [Finding(filepath="test.sh", line=2, col=1, command="rm -rf")]

    def test_separate_flags_not_reported(self):
        assert scan_content("#!/bin/bash\nrm -r -f /path\n", "test.sh") == []

    def test_flag_with_value_not_reported(self):
        assert scan_content("rm --force=true file.txt\n", "test.sh") == []

    def test_multiple_commands(self):
        content = "rm -rf a\necho hi\nrm -fr b\nrm --recursive --force c\n"
        findings = scan_shell_script(content, "multi.sh")
        assert [(f.line, f.col) for f in findings] == [(1, 1), (3, 1), (4, 1)]

    def test_indented_after_comment(self):
        findings = scan_content("# comment\n   rm -rf /\n", "test.sh")
        assert [(f.line, f.col) for f in findings] == [(2, 4)]

    def test_inside_function(self):
        findings = scan_content("cleanup() {\n    rm -rf ./build\n}\n", "test.sh")
        assert [(f.line, f.col) for f in findings] == [(2, 5)]

    def test_wrapped_and_absolute(self):
        findings = scan_content("sudo rm -rf /opt\n/bin/rm -rf /srv\n", "test.sh")
        assert len(findings) == 2

    def test_xargs_invocation(self):
        findings = scan_content("find . -name '*.tmp' | xargs -I {} rm -rf {}\n", "test.sh")
        assert [(f.line, f.col) for f in findings] == [(1, 24)]

    def test_safe_path_still_reported(self):
        # Flag policy: the path is not consulted
        assert len(scan_content("rm -rf ./build\n", "test.sh")) == 1

    def test_idempotent(self):
        content = "rm -rf a\nrm -rf b\n"
        assert scan_content(content, "test.sh") == scan_content(content, "test.sh")

    def test_parse_failure_raised(self):
        with pytest.raises(ParseFailure):
            scan_content("if true; then\n  rm -rf /\n", "broken.sh")


class TestShellPathPolicy:
    def test_variable_bound_to_root(self):
        content = "DIR=/\nrm -rf $DIR\nrm -rf ./build\n"
        findings = analyze_shell_script(content, "test.sh")

        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].message == UNSAFE_VALUE

    def test_resolve_paths_dispatch(self):
        content = "DIR=/\nrm -rf $DIR\nrm -rf ./build\n"
        assert len(scan_content(content, "test.sh")) == 2
        assert len(scan_content(content, "test.sh", resolve_paths=True)) == 1

    def test_literal_root(self):
        findings = analyze_shell_script("rm -rf /*\n", "test.sh")
        assert findings[0].message == UNSAFE_PATH

    def test_safe_variable(self):
        assert analyze_shell_script('OUT="./dist"\nrm -rf "$OUT"\n', "test.sh") == []

    def test_unassigned_variable_warned(self, log_messages):
        content = 'export TARGET\nrm -rf "${TARGET}/"\n'
        findings = analyze_shell_script(content, "deploy.sh")

        assert len(findings) == 1
        assert "un-assigned variable 'TARGET' found in deploy.sh" in log_messages

    def test_no_warning_without_findings(self, log_messages):
        analyze_shell_script("export TARGET\necho $TARGET\n", "deploy.sh")
        assert not any("un-assigned" in m for m in log_messages)


class TestGoPathPolicy:
    SOURCE = """package main

import "os/exec"

func main() {
	dir := "/"
	exec.Command("rm", "-rf", dir).Run()
	exec.Command("rm", "-rf", "./build").Run()
	exec.Command("rm", "-rf", "/tmp/foo").Run()
}
"""

    def test_only_unsafe_path_reported(self):
        findings = analyze_go_source(self.SOURCE, "main.go")

        assert len(findings) == 1
        assert (findings[0].line, findings[0].col) == (7, 2)
        assert findings[0].command == "rm -rf"
        assert findings[0].message == UNSAFE_VALUE

    def test_dispatch_by_extension(self):
        assert scan_content(self.SOURCE, "main.go") == analyze_go_source(self.SOURCE, "main.go")

    def test_parse_failure_raised(self):
        with pytest.raises(ParseFailure):
            analyze_go_source("package main\n\nfunc main( {\n", "bad.go")


class TestCustomRules:
    def test_custom_unsafe_paths(self):
        rules = RuleSet(command=RM_RF, unsafe_paths=frozenset(["/home"]))
        findings = analyze_shell_script("rm -rf /home\nrm -rf /\n", "test.sh", rules)
        assert [f.line for f in findings] == [1]


class TestScanFile:
    def test_reads_and_scans(self, tmp_path):
        script = tmp_path / "clean.sh"
        script.write_text("#!/bin/sh\nrm -rf /tmp/cache\n", encoding="utf-8")

        findings = scan_file(script)

        assert len(findings) == 1
        assert findings[0].filepath == script.as_posix()

    def test_makefile(self, tmp_path):
        makefile = tmp_path / "Makefile"
        makefile.write_text("clean:\n\trm -rf build/\n", encoding="utf-8")

        findings = scan_file(makefile)

        assert [(f.line, f.col, f.command) for f in findings] == [(2, 2, "rm -rf")]

    def test_unparseable_file_skipped(self, tmp_path, log_messages):
        script = tmp_path / "broken.sh"
        script.write_text("if true; then\n  rm -rf /\n", encoding="utf-8")

        assert scan_file(script) == []
        assert any(m.startswith("Error parsing file") for m in log_messages)

    def test_missing_file_skipped(self, tmp_path, log_messages):
        assert scan_file(tmp_path / "missing.sh") == []
        assert any(m.startswith("Error reading file") for m in log_messages)

    def test_long_command_chain(self, tmp_path):
        script = tmp_path / "chain.sh"
        script.write_text(" && ".join(["true"] * 3000) + "\nrm -rf /\n", encoding="utf-8")

        findings = scan_file(script)

        assert [(f.line, f.col) for f in findings] == [(2, 1)]

    def test_oversized_file_skipped(self, tmp_path):
        script = tmp_path / "big.sh"
        script.write_text("rm -rf /\n", encoding="utf-8")
        assert scan_file(script, max_file_size=4) == []
