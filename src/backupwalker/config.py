from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import json
import yaml


@dataclass(slots=True)
class BackupConfig:
    source_root: Path | None = None
    dest_root: Path | None = None
    log_path: Path | None = None
    auto_confirm: bool = False
    excludes: list[str] = field(default_factory=list)

    def merged(
        self,
        source_root: Path | None = None,
        dest_root: Path | None = None,
        log_path: Path | None = None,
        auto_confirm: bool = False,
    ) -> "BackupConfig":
        """Return a copy with command line values taking precedence."""
        return replace(
            self,
            source_root=source_root.expanduser() if source_root else self.source_root,
            dest_root=dest_root.expanduser() if dest_root else self.dest_root,
            log_path=log_path.expanduser() if log_path else self.log_path,
            auto_confirm=auto_confirm or self.auto_confirm,
            excludes=list(self.excludes),
        )


def default_state_dir() -> Path:
    return Path.home() / ".backupwalker"


def default_log_file() -> Path:
    return default_state_dir() / "backup.log"


def _as_optional_path(value: Any, field_name: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string path")
    return Path(value).expanduser()


def _as_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ValueError(f"{field_name} must be a boolean")


def _as_list_of_strings(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return [item for item in value if item.strip()]


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ValueError(f"Config file does not exist: {config_path}")

    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in {".yml", ".yaml"}:
        loaded = yaml.safe_load(text)
    elif suffix == ".json":
        loaded = json.loads(text)
    else:
        raise ValueError("Config file must be .yaml/.yml or .json")

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError("Config root must be an object")
    return loaded


def load_config(config_path: Path) -> BackupConfig:
    raw = _load_raw_config(config_path)
    return BackupConfig(
        source_root=_as_optional_path(raw.get("sourceRoot"), "sourceRoot"),
        dest_root=_as_optional_path(raw.get("destRoot"), "destRoot"),
        log_path=_as_optional_path(raw.get("logPath"), "logPath"),
        auto_confirm=_as_bool(raw.get("autoConfirm"), "autoConfirm", default=False),
        excludes=_as_list_of_strings(raw.get("excludes"), "excludes"),
    )
