"""
Change detection for live rebuilds.

The watch loop polls a cheap fingerprint (mtime + size per file) of both
trees, waits until changes have settled for a quiet period, then rebuilds
the snapshot once. The held snapshot is swapped by a single assignment,
so readers always see either the old or the new snapshot in full.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from bmad_viewer.lib.constants import BMAD_DIR_NAME, OUTPUT_DIR_NAME
from bmad_viewer.lib.scanner import list_files_recursive

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD_SECONDS = 0.3

Fingerprint = dict[str, tuple[int, int]]


def tree_fingerprint(project_root) -> Fingerprint:
    """Map every file under _bmad/ and _bmad-output/ to (mtime_ns, size)."""
    root = Path(project_root)
    fingerprint = {}
    for tree in (root / BMAD_DIR_NAME, root / OUTPUT_DIR_NAME):
        for path in list_files_recursive(tree, None):
            try:
                stat = path.stat()
            except OSError:
                continue  # Deleted between listing and stat
            fingerprint[str(path)] = (stat.st_mtime_ns, stat.st_size)
    return fingerprint


class ChangeDebouncer:
    """Coalesce a burst of fingerprint changes into one rebuild signal."""

    def __init__(self, initial: Optional[Fingerprint] = None,
                 quiet_period: float = DEFAULT_QUIET_PERIOD_SECONDS):
        self.quiet_period = quiet_period
        self._last = initial
        self._changed_at: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._changed_at is not None

    def observe(self, fingerprint: Fingerprint, now: Optional[float] = None) -> bool:
        """Record a poll. Returns True when a settled change should trigger a rebuild."""
        now = time.monotonic() if now is None else now

        if self._last is None:
            self._last = fingerprint
            return False

        if fingerprint != self._last:
            self._last = fingerprint
            self._changed_at = now
            return False

        if self._changed_at is not None and now - self._changed_at >= self.quiet_period:
            self._changed_at = None
            return True

        return False


class SnapshotHolder:
    """Owns the current snapshot and rebuilds it on demand."""

    def __init__(self, project_root, build: Callable):
        self.project_root = Path(project_root)
        self._build = build
        self.snapshot = None
        self.builds = 0

    def rebuild(self):
        snapshot = self._build(self.project_root)
        self.snapshot = snapshot
        self.builds += 1
        logger.info(f"Rebuilt snapshot #{self.builds} for {self.project_root}")
        return snapshot
