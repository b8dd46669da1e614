"""File selection: expand scan targets into a filtered, sorted list of files."""

import glob
import os
from collections.abc import Iterable
from pathlib import Path

from hazardous.utils.logging import logger

RECURSIVE_SUFFIX = "..."


def is_allowed_extension(file_path: str, allowed_exts: Iterable[str]) -> bool:
    """True when the path ends with any allowed suffix (".sh", "Makefile", ...)."""
    return any(file_path.endswith(ext) for ext in allowed_exts if ext)


def is_excluded_dir(file_path: str, excluded_dirs: Iterable[str]) -> bool:
    """True when any directory component of the path is excluded."""
    excluded = {d.strip("/") for d in excluded_dirs if d}
    parts = Path(file_path).parts[:-1]
    return any(part in excluded for part in parts)


class FileWalker:
    """Resolves targets (files, directories, ``dir/...`` patterns, globs) to files."""

    def __init__(self, allowed_exts: Iterable[str], excluded_dirs: Iterable[str], follow_symlinks: bool = False):
        self.allowed_exts = list(allowed_exts)
        self.excluded_dirs = {d.strip("/") for d in excluded_dirs if d}
        self.follow_symlinks = follow_symlinks

        self.stats = {
            "total_files": 0,
            "selected_files": 0,
            "skipped_dirs": 0,
            "missing_targets": 0,
        }

    def should_scan(self, file_path: str) -> bool:
        return is_allowed_extension(file_path, self.allowed_exts) and not is_excluded_dir(
            file_path, self.excluded_dirs
        )

    def _walk_dir(self, base: Path) -> list[Path]:
        files = []
        for dirpath, dirnames, filenames in os.walk(base, followlinks=self.follow_symlinks):
            skipped = [d for d in dirnames if d in self.excluded_dirs]
            self.stats["skipped_dirs"] += len(skipped)
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)

            for filename in filenames:
                self.stats["total_files"] += 1
                file = Path(dirpath) / filename
                if not self.follow_symlinks and file.is_symlink():
                    continue
                if is_allowed_extension(file.as_posix(), self.allowed_exts):
                    files.append(file)
        return files

    def _expand(self, target: str) -> list[Path]:
        # Go-style recursive pattern: ./... or dir/...
        if target.endswith(RECURSIVE_SUFFIX):
            base = target[: -len(RECURSIVE_SUFFIX)] or "."
            return self._walk_dir(Path(base))

        if glob.has_magic(target):
            files = []
            for match in sorted(glob.glob(target)):
                path = Path(match)
                if path.is_dir():
                    files.extend(self._walk_dir(path))
                else:
                    self.stats["total_files"] += 1
                    if self.should_scan(path.as_posix()):
                        files.append(path)
            return files

        path = Path(target)
        if path.is_dir():
            return self._walk_dir(path)
        if path.is_file():
            self.stats["total_files"] += 1
            return [path] if self.should_scan(path.as_posix()) else []

        self.stats["missing_targets"] += 1
        logger.error("Target not found: {target}", target=target)
        return []

    def walk(self, targets: Iterable[str]) -> list[Path]:
        """Return the de-duplicated, sorted files selected by ``targets``."""
        selected: dict[str, Path] = {}
        for target in targets:
            for path in self._expand(target):
                selected.setdefault(path.as_posix(), path)

        self.stats["selected_files"] = len(selected)
        return [selected[key] for key in sorted(selected)]
