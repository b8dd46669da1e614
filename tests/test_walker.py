"""File selection tests for hazardous.walker."""

from hazardous.walker import FileWalker, is_allowed_extension, is_excluded_dir

ALLOWED = [".sh", "Makefile"]
EXCLUDED = ["node_modules", "linters"]


def make_tree(root):
    files = [
        "a.sh",
        "b.py",
        "Makefile",
        "sub/d.sh",
        "sub/deeper/e.sh",
        "node_modules/pkg/c.sh",
        "linters/lint.sh",
    ]
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("echo hi\n", encoding="utf-8")


def names(paths, root):
    return [p.relative_to(root).as_posix() for p in paths]


class TestFilters:
    def test_allowed_extension(self):
        assert is_allowed_extension("scripts/x.sh", ALLOWED)
        assert is_allowed_extension("sub/Makefile", ALLOWED)
        assert not is_allowed_extension("main.go", ALLOWED)

    def test_excluded_by_component(self):
        assert is_excluded_dir("node_modules/pkg/x.sh", EXCLUDED)
        assert is_excluded_dir("a/linters/x.sh", EXCLUDED)
        assert not is_excluded_dir("node_modules_backup/x.sh", EXCLUDED)
        assert not is_excluded_dir("linters.sh", EXCLUDED)


class TestFileWalker:
    def test_recursive_pattern(self, tmp_path):
        make_tree(tmp_path)
        walker = FileWalker(ALLOWED, EXCLUDED)

        files = walker.walk([f"{tmp_path.as_posix()}/..."])

        assert names(files, tmp_path) == ["Makefile", "a.sh", "sub/d.sh", "sub/deeper/e.sh"]
        assert walker.stats["skipped_dirs"] == 2
        assert walker.stats["selected_files"] == 4

    def test_directory_target(self, tmp_path):
        make_tree(tmp_path)
        files = FileWalker(ALLOWED, EXCLUDED).walk([str(tmp_path / "sub")])
        assert names(files, tmp_path) == ["sub/d.sh", "sub/deeper/e.sh"]

    def test_glob_target(self, tmp_path):
        make_tree(tmp_path)
        files = FileWalker(ALLOWED, EXCLUDED).walk([str(tmp_path / "*.sh")])
        assert names(files, tmp_path) == ["a.sh"]

    def test_file_target_filtered(self, tmp_path):
        make_tree(tmp_path)
        walker = FileWalker(ALLOWED, EXCLUDED)
        assert walker.walk([str(tmp_path / "b.py")]) == []
        assert names(walker.walk([str(tmp_path / "a.sh")]), tmp_path) == ["a.sh"]

    def test_excluded_file_target(self, tmp_path):
        make_tree(tmp_path)
        files = FileWalker(ALLOWED, EXCLUDED).walk([str(tmp_path / "linters" / "lint.sh")])
        assert files == []

    def test_duplicates_removed(self, tmp_path):
        make_tree(tmp_path)
        target = str(tmp_path / "a.sh")
        files = FileWalker(ALLOWED, EXCLUDED).walk([target, target, str(tmp_path / "*.sh")])
        assert len(files) == 1

    def test_missing_target(self, tmp_path, log_messages):
        walker = FileWalker(ALLOWED, EXCLUDED)

        assert walker.walk([str(tmp_path / "nope")]) == []
        assert walker.stats["missing_targets"] == 1
        assert any("Target not found" in m for m in log_messages)

    def test_extension_list_widened(self, tmp_path):
        (tmp_path / "main.go").write_text("package main\n", encoding="utf-8")
        files = FileWalker([".go"], EXCLUDED).walk([str(tmp_path)])
        assert names(files, tmp_path) == ["main.go"]
