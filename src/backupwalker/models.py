from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileEntry:
    path: Path
    relative_path: Path

    @property
    def name(self) -> str:
        return self.path.name


class CopyStatus(str, Enum):
    COPIED = "copied"
    SOURCE_MISSING = "source-missing"
    DESTINATION_EXISTS = "destination-exists"


@dataclass(slots=True)
class CopyOutcome:
    status: CopyStatus
    source: Path
    destination: Path
    reason: str | None = None

    @property
    def copied(self) -> bool:
        return self.status is CopyStatus.COPIED


@dataclass(slots=True)
class BackupSummary:
    copied: int = 0
    source_missing: int = 0
    destination_exists: int = 0

    @property
    def failed(self) -> int:
        return self.source_missing + self.destination_exists

    def absorb(self, outcome: CopyOutcome) -> None:
        if outcome.status is CopyStatus.COPIED:
            self.copied += 1
        elif outcome.status is CopyStatus.SOURCE_MISSING:
            self.source_missing += 1
        elif outcome.status is CopyStatus.DESTINATION_EXISTS:
            self.destination_exists += 1


class BackupAbortedError(RuntimeError):
    """An unexpected I/O error stopped the backup session.

    The failing copy is named by ``source`` and ``destination``; ``summary``
    holds the counters accumulated before the abort. The original ``OSError``
    is available as ``__cause__``.
    """

    def __init__(
        self,
        source: Path,
        destination: Path,
        reason: str,
        summary: BackupSummary | None = None,
    ) -> None:
        super().__init__(f"Copying {source} to {destination} failed: {reason}")
        self.source = source
        self.destination = destination
        self.reason = reason
        self.summary = summary if summary is not None else BackupSummary()
