from __future__ import annotations

from pathlib import Path


CONFIRMATION_TOKEN = "CONTINUE"


def is_valid_directory_path(path: str) -> bool:
    """Return True iff ``path`` names an existing directory with a canonical form."""
    if not path or not path.strip():
        return False
    try:
        resolved = Path(path).expanduser().resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    return resolved.is_dir()


def prompt_for_directory(label: str) -> Path:
    print(f"Enter a valid and existing {label} directory for the backup without quotation marks.")
    while True:
        entered = input()
        if is_valid_directory_path(entered):
            return Path(entered).expanduser()
        print(f"The given {label} directory is not a valid path. Enter again.")


def confirm_backup(source_root: Path, dest_root: Path) -> bool:
    print(
        f'Are you absolutely sure, you want to backup your files from\n"{source_root}" to "{dest_root}"? '
        "This execution will be irreversible.\n"
        f'If you still want to continue, enter "{CONFIRMATION_TOKEN}" without the quotation marks.'
    )
    try:
        answer = input()
    except EOFError:
        return False
    return answer == CONFIRMATION_TOKEN
