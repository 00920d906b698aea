"""
Locate a BMAD project and detect its version.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bmad_viewer.lib.constants import BMAD_DIR_NAME

MAX_PARENT_LEVELS = 3
MIN_SUPPORTED_MAJOR = 6

VERSION_RE = re.compile(r'''version:\s*['"]?(\d+\.\d+\.\d+[^'"\s]*)''', re.IGNORECASE)


@dataclass
class BmadVersion:
    version: Optional[str] = None
    compatible: bool = True
    warning: Optional[str] = None


def detect_bmad_root(start_dir, max_parent_levels: int = MAX_PARENT_LEVELS) -> Optional[Path]:
    """Return the nearest directory (start_dir or up to N parents) containing _bmad/."""
    current = Path(start_dir).resolve()

    for _ in range(max_parent_levels + 1):
        if (current / BMAD_DIR_NAME).is_dir():
            return current
        if current.parent == current:
            break
        current = current.parent

    return None


def _version_info(version: str) -> BmadVersion:
    try:
        major = int(version.split(".")[0])
    except ValueError:
        return BmadVersion(version=version)

    if major < MIN_SUPPORTED_MAJOR:
        return BmadVersion(
            version=version,
            compatible=False,
            warning=(f"Detected BMAD v{major}. Viewer optimized for v{MIN_SUPPORTED_MAJOR}+. "
                     "Some features may not be available."),
        )
    return BmadVersion(version=version)


def detect_bmad_version(project_root) -> BmadVersion:
    """Read the version from _bmad/bmm/config.yaml, else _bmad/VERSION."""
    bmad_path = Path(project_root) / BMAD_DIR_NAME

    config_path = bmad_path / "bmm" / "config.yaml"
    try:
        match = VERSION_RE.search(config_path.read_text(encoding="utf-8", errors="replace"))
    except OSError:
        match = None
    if match:
        return _version_info(match.group(1))

    try:
        version = (bmad_path / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        version = ""
    if version:
        return _version_info(version)

    return BmadVersion()
