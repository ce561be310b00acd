from __future__ import annotations

import argparse
from pathlib import Path
import sys

from backupwalker.config import BackupConfig, default_log_file, load_config
from backupwalker.log_setup import close_backup_logger, configure_backup_logger
from backupwalker.models import BackupSummary
from backupwalker.prompts import confirm_backup, prompt_for_directory
from backupwalker.run_service import (
    EXIT_INVALID_CONFIG,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    list_missing,
    run_backup,
    validate_roots,
)


def _add_root_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="YAML or JSON file with backup settings")
    parser.add_argument("--source", type=Path, help="Directory to back up")
    parser.add_argument("--dest", type=Path, help="Directory receiving the backup")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backup-walker",
        description="Copy files whose name is missing from the destination tree",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a backup session")
    _add_root_arguments(run_parser)
    run_parser.add_argument("--log-file", type=Path, help=f"Log file (default: {default_log_file()})")
    run_parser.add_argument("--yes", action="store_true", help="Skip the CONTINUE confirmation")
    run_parser.add_argument("--verbose", action="store_true", help="Also write log records to stderr")

    list_parser = subparsers.add_parser("list", help="List source files a run would copy")
    _add_root_arguments(list_parser)

    validate_parser = subparsers.add_parser("validate-config", help="Validate config")
    validate_parser.add_argument("--config", required=True, type=Path)

    return parser


def _load_settings(args: argparse.Namespace) -> BackupConfig:
    config = load_config(args.config) if args.config else BackupConfig()
    return config.merged(
        source_root=args.source,
        dest_root=args.dest,
        log_path=getattr(args, "log_file", None),
        auto_confirm=getattr(args, "yes", False),
    )


def _print_summary(source: Path, target: Path, summary: BackupSummary) -> None:
    print(
        f"{source} -> {target} | copied={summary.copied} "
        f"sourceMissing={summary.source_missing} destinationExists={summary.destination_exists}"
    )


def cmd_validate(config_path: Path) -> int:
    try:
        config = load_config(config_path)
    except Exception as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    print(f"Valid config: {config_path}")
    print(f"  sourceRoot={config.source_root or '(prompt)'}")
    print(f"  destRoot={config.dest_root or '(prompt)'}")
    print(f"  logPath={config.log_path or default_log_file()}")
    print(f"  autoConfirm={str(config.auto_confirm).lower()}")
    print(f"  excludes={len(config.excludes)}")
    return EXIT_SUCCESS


def cmd_list(args: argparse.Namespace) -> int:
    try:
        config = _load_settings(args)
        missing = list_missing(config)
    except Exception as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    for entry in missing:
        print(entry.relative_path.as_posix())
    print(f"{len(missing)} file(s) missing from {config.dest_root}")
    return EXIT_SUCCESS


def cmd_run(args: argparse.Namespace) -> int:
    try:
        config = _load_settings(args)
    except Exception as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    try:
        if config.source_root is None:
            config.source_root = prompt_for_directory("source")
        if config.dest_root is None:
            config.dest_root = prompt_for_directory("destination")
    except EOFError:
        print("No directory entered. Exiting program without performing a backup.", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    try:
        validate_roots(config.source_root, config.dest_root)
    except ValueError as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    if not config.auto_confirm and not confirm_backup(config.source_root, config.dest_root):
        print("Exiting program without performing a backup.")
        return EXIT_SUCCESS

    try:
        logger = configure_backup_logger(config.log_path or default_log_file(), verbose=args.verbose)
    except OSError as exc:
        print(f"Invalid config: cannot open log file: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    try:
        result = run_backup(config, logger=logger)
    finally:
        close_backup_logger(logger)

    _print_summary(config.source_root, config.dest_root, result.summary)
    if result.exit_code == EXIT_RUNTIME_ERROR:
        print(f"Backup aborted: {result.error}", file=sys.stderr)
    return result.exit_code


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate-config":
        return cmd_validate(args.config)
    if args.command == "list":
        return cmd_list(args)
    if args.command == "run":
        return cmd_run(args)

    parser.print_help()
    return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
