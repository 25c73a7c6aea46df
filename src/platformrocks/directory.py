"""Target directory checks."""

import os
from pathlib import Path

from platformrocks.errors import DirectoryNotEmptyError, ValidationError

# Dot-entries that still count as real content.
SIGNIFICANT_DOTFILES = frozenset({".git", "package.json"})


def _is_relevant(entry: str) -> bool:
    return not entry.startswith(".") or entry in SIGNIFICANT_DOTFILES


def validate_directory(path: str | Path, force: bool = False) -> None:
    """Check that ``path`` can receive a new project.

    A missing path is fine. An existing directory must be empty apart from
    dotfiles (``.git`` does count) unless ``force`` is set.
    """
    target = Path(path).resolve()
    if not target.exists():
        return

    if not target.is_dir():
        if not force:
            raise ValidationError(
                f'Invalid target "{path}": it exists and is not a directory.'
            )
        return

    try:
        entries = os.listdir(target)
    except FileNotFoundError:
        return

    relevant = [entry for entry in entries if _is_relevant(entry)]
    if relevant and not force:
        raise DirectoryNotEmptyError(
            f'Directory "{path}" is not empty. Use --force to overwrite.'
        )


def ensure_directory(path: str | Path) -> Path:
    """Create ``path`` and any missing parents."""
    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target
