"""
Fail-soft markdown file loading shared by the builders.

A file that exists always becomes a catalog entry: read failures give
empty content, parse failures give empty content plus an aggregated error.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.mdparse import parse_markdown_content

logger = logging.getLogger(__name__)


def read_text_safe(path: Path) -> Optional[str]:
    """Read a file as UTF-8, or None if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return None


def read_markdown_safe(
    path: Path,
    aggregator: ErrorAggregator,
) -> tuple[str, Optional[dict[str, Any]], str]:
    """Return (html, frontmatter, raw) for a markdown file."""
    raw = read_text_safe(path)
    if raw is None:
        return "", None, ""

    result = parse_markdown_content(raw, str(path))
    if not result.ok:
        aggregator.add_result(str(path), result)
    if result.data is None:
        return "", None, raw

    return result.data.html, result.data.frontmatter, raw
