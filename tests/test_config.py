from pathlib import Path

import pytest

from backupwalker.config import BackupConfig, load_config


def test_load_config_reads_yaml_settings(tmp_path: Path) -> None:
    config_file = tmp_path / "backup.yaml"
    config_file.write_text(
        """
sourceRoot: D:/Projects/Data
destRoot: E:/Backups/Data
logPath: D:/Projects/Data/BackupFilesLogger.log
autoConfirm: true
excludes:
  - "*.tmp"
  - ""
  - cache/
""".strip(),
        encoding="utf-8",
    )

    loaded = load_config(config_file)

    assert loaded.source_root == Path("D:/Projects/Data")
    assert loaded.dest_root == Path("E:/Backups/Data")
    assert loaded.log_path == Path("D:/Projects/Data/BackupFilesLogger.log")
    assert loaded.auto_confirm is True
    assert loaded.excludes == ["*.tmp", "cache/"]


def test_load_config_reads_json_with_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "backup.json"
    config_file.write_text('{"sourceRoot": "/data/src"}', encoding="utf-8")

    loaded = load_config(config_file)

    assert loaded.source_root == Path("/data/src")
    assert loaded.dest_root is None
    assert loaded.log_path is None
    assert loaded.auto_confirm is False
    assert loaded.excludes == []


def test_load_config_rejects_non_boolean_auto_confirm(tmp_path: Path) -> None:
    config_file = tmp_path / "backup.yaml"
    config_file.write_text("autoConfirm: CONTINUE\n", encoding="utf-8")

    with pytest.raises(ValueError, match="autoConfirm"):
        load_config(config_file)


def test_load_config_rejects_unknown_suffix(tmp_path: Path) -> None:
    config_file = tmp_path / "backup.ini"
    config_file.write_text("[backup]\n", encoding="utf-8")

    with pytest.raises(ValueError, match="yaml"):
        load_config(config_file)


def test_merged_prefers_command_line_values() -> None:
    base = BackupConfig(source_root=Path("/from/file"), dest_root=Path("/dest/file"), excludes=["*.tmp"])

    merged = base.merged(source_root=Path("/from/flag"), auto_confirm=True)

    assert merged.source_root == Path("/from/flag")
    assert merged.dest_root == Path("/dest/file")
    assert merged.auto_confirm is True
    assert merged.excludes == ["*.tmp"]
    assert base.source_root == Path("/from/file")
