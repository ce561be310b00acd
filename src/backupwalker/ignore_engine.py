from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pathspec


def _read_ignore_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return []


class IgnoreEngine:
    def __init__(self, patterns: Iterable[str]) -> None:
        self._spec = pathspec.PathSpec.from_lines("gitignore", patterns)

    def is_ignored(self, relative_path: Path) -> bool:
        return self._spec.match_file(relative_path.as_posix())


def build_ignore_engine(excludes: Iterable[str], source_root: Path | None = None) -> IgnoreEngine:
    """Combine configured exclude patterns with a ``.backupignore`` at the source root."""
    patterns: list[str] = list(excludes)
    if source_root is not None:
        patterns.extend(_read_ignore_lines(source_root / ".backupignore"))
    return IgnoreEngine(patterns)
