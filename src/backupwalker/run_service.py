from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import logging

from backupwalker.backup_engine import compute_missing_files, perform_backup
from backupwalker.config import BackupConfig
from backupwalker.ignore_engine import build_ignore_engine
from backupwalker.models import BackupAbortedError, BackupSummary, FileEntry


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_CONFIG = 3


@dataclass(slots=True)
class RunResult:
    exit_code: int
    summary: BackupSummary = field(default_factory=BackupSummary)
    error: str | None = None


def validate_roots(source_root: Path | None, dest_root: Path | None) -> tuple[Path, Path]:
    if source_root is None or dest_root is None:
        raise ValueError("Both a source and a destination directory are required")

    for label, root in (("Source", source_root), ("Destination", dest_root)):
        if not root.exists() or not root.is_dir():
            raise ValueError(f"{label} directory does not exist or is not a directory: {root}")

    return source_root, dest_root


def list_missing(config: BackupConfig) -> list[FileEntry]:
    source_root, dest_root = validate_roots(config.source_root, config.dest_root)
    ignore = build_ignore_engine(config.excludes, source_root)
    return compute_missing_files(source_root, dest_root, ignore=ignore)


def run_backup(config: BackupConfig, logger: logging.Logger | None = None) -> RunResult:
    log = logger or logging.getLogger("backupwalker.backup")

    try:
        source_root, dest_root = validate_roots(config.source_root, config.dest_root)
    except ValueError as exc:
        log.error("Config/runtime error: %s", exc)
        return RunResult(EXIT_INVALID_CONFIG, error=str(exc))

    ignore = build_ignore_engine(config.excludes, source_root)
    try:
        summary = perform_backup(source_root, dest_root, logger=log, ignore=ignore)
    except BackupAbortedError as exc:
        return RunResult(EXIT_RUNTIME_ERROR, summary=exc.summary, error=str(exc))

    return RunResult(EXIT_SUCCESS, summary=summary)
