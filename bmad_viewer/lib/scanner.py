"""
Directory traversal helpers.

Missing or unreadable directories are normal in a project that is still
growing, so every helper returns an empty list instead of raising.
Results are sorted by full path so repeated builds see the same order.
"""

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def _iter_entries(directory: Path) -> list[Path]:
    try:
        return list(directory.iterdir())
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return []


def _matches(path: Path, extensions: Iterable[str] | None) -> bool:
    if extensions is None:
        return True
    return any(path.name.endswith(ext) for ext in extensions)


def _sorted(paths: list[Path]) -> list[Path]:
    return sorted(paths, key=str)


def list_direct_files(directory, extensions: Iterable[str] | None = (".md",)) -> list[Path]:
    """List files directly inside directory (non-recursive)."""
    extensions = tuple(extensions) if extensions is not None else None
    files = [
        p for p in _iter_entries(Path(directory))
        if p.is_file() and _matches(p, extensions)
    ]
    return _sorted(files)


def list_files_recursive(directory, extensions: Iterable[str] | None = (".md",)) -> list[Path]:
    """List files in the whole tree under directory, depth first."""
    extensions = tuple(extensions) if extensions is not None else None
    files = []
    pending = [Path(directory)]

    while pending:
        current = pending.pop()
        for entry in _sorted(_iter_entries(current)):
            if entry.is_dir():
                # Symlinked directories can loop back into the tree
                if not entry.is_symlink():
                    pending.append(entry)
            elif entry.is_file() and _matches(entry, extensions):
                files.append(entry)

    return _sorted(files)


def list_subdirectories(directory) -> list[Path]:
    """List immediate subdirectories."""
    return _sorted([p for p in _iter_entries(Path(directory)) if p.is_dir()])


def is_directory(path) -> bool:
    try:
        return Path(path).is_dir()
    except OSError:
        return False
