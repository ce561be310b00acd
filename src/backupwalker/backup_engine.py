from __future__ import annotations

from collections.abc import Iterator
import logging
import os
from pathlib import Path
import shutil
from typing import NoReturn

from backupwalker.ignore_engine import IgnoreEngine
from backupwalker.models import BackupAbortedError, BackupSummary, CopyOutcome, CopyStatus, FileEntry


def iter_files(root: Path) -> Iterator[FileEntry]:
    """Yield every regular file beneath ``root``, children before their parents."""
    root = root.absolute()
    for root_str, _, files in os.walk(root, topdown=False):
        current = Path(root_str)
        for file_name in files:
            path = current / file_name
            if not path.is_file():
                continue
            yield FileEntry(path=path, relative_path=path.relative_to(root))


def compute_missing_files(
    source_root: Path,
    destination_root: Path,
    ignore: IgnoreEngine | None = None,
) -> list[FileEntry]:
    """Return the source files whose base name occurs nowhere in the destination tree.

    Matching is by base name only, so ``a.txt`` in any destination folder
    blocks every ``a.txt`` in the source tree. The destination names are
    collected once before any copy, so several source files sharing a name
    that is new to the destination are all returned.
    """
    destination_names = {entry.name for entry in iter_files(destination_root)}

    missing: list[FileEntry] = []
    for entry in iter_files(source_root):
        if ignore is not None and ignore.is_ignored(entry.relative_path):
            continue
        if entry.name in destination_names:
            continue
        missing.append(entry)
    return missing


def _write_copy(source_file: Path, destination_file: Path) -> None:
    # "xb" makes the existence check and the create a single step.
    with source_file.open("rb") as src:
        destination_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with destination_file.open("xb") as dst:
                shutil.copyfileobj(src, dst)
        except FileExistsError:
            raise
        except OSError:
            destination_file.unlink(missing_ok=True)
            raise
    shutil.copystat(source_file, destination_file)


def _abort(source_file: Path, destination_file: Path, exc: OSError, logger: logging.Logger) -> NoReturn:
    logger.error('Something went wrong copying "%s" to "%s": %s', source_file, destination_file, exc)
    raise BackupAbortedError(source_file, destination_file, str(exc)) from exc


def copy_file(source_file: Path, destination_file: Path, logger: logging.Logger) -> CopyOutcome:
    """Copy one file without ever overwriting the destination.

    A vanished source or an occupied destination is reported as an outcome.
    Every other ``OSError`` raises :class:`BackupAbortedError`.
    """
    try:
        _write_copy(source_file, destination_file)
    except FileNotFoundError as exc:
        if source_file.exists():
            _abort(source_file, destination_file, exc, logger)
        logger.error('The source file "%s" does not exist. %s', source_file, exc)
        return CopyOutcome(CopyStatus.SOURCE_MISSING, source_file, destination_file, reason=str(exc))
    except FileExistsError as exc:
        if not destination_file.exists():
            _abort(source_file, destination_file, exc, logger)
        logger.error('The destination file "%s" already exists. %s', destination_file, exc)
        return CopyOutcome(CopyStatus.DESTINATION_EXISTS, source_file, destination_file, reason=str(exc))
    except OSError as exc:
        _abort(source_file, destination_file, exc, logger)

    logger.info('Successfully copied "%s" to "%s".', source_file, destination_file)
    return CopyOutcome(CopyStatus.COPIED, source_file, destination_file)


def perform_backup(
    source_root: Path,
    destination_root: Path,
    logger: logging.Logger | None = None,
    ignore: IgnoreEngine | None = None,
) -> BackupSummary:
    log = logger or logging.getLogger("backupwalker.backup")
    source_root = source_root.absolute()
    destination_root = destination_root.absolute()

    log.info('Perform a backup from "%s" to "%s".', source_root, destination_root)

    summary = BackupSummary()
    for entry in compute_missing_files(source_root, destination_root, ignore=ignore):
        destination_file = destination_root / entry.relative_path
        try:
            outcome = copy_file(entry.path, destination_file, log)
        except BackupAbortedError as exc:
            exc.summary = summary
            log.error(
                'Backup from "%s" to "%s" aborted after %s copies.',
                source_root,
                destination_root,
                summary.copied,
            )
            raise
        summary.absorb(outcome)

    log.info(
        'Successfully performed a backup from "%s" to "%s" with %s copies.',
        source_root,
        destination_root,
        summary.copied,
    )
    return summary
