"""
Markdown extractor.

Splits an optional YAML frontmatter block off a markdown document and
renders the body to HTML with markdown-it-py (GFM-like: tables, fenced
code, strikethrough, autolinks). Raw HTML in the source is escaped and
single newlines are not turned into <br>.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt

from bmad_viewer.lib.result import Result, create_result, error_result

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*\r?\n(.*)\Z', re.DOTALL)

_renderer: Optional[MarkdownIt] = None


@dataclass
class MarkdownDocument:
    html: str
    frontmatter: Optional[dict[str, Any]]
    raw: str


def _get_renderer() -> MarkdownIt:
    global _renderer
    if _renderer is None:
        _renderer = MarkdownIt("gfm-like", {"html": False, "breaks": False})
    return _renderer


def render_markdown(text: str) -> str:
    """Render a markdown body to HTML."""
    return _get_renderer().render(text)


def split_frontmatter(content: str) -> tuple[Optional[dict[str, Any]], str]:
    """Return (frontmatter, body).

    Frontmatter that fails to parse, or is not a mapping, is dropped
    silently; the body still excludes the delimited block.
    """
    match = FRONTMATTER_RE.match(content)
    if not match:
        return None, content

    frontmatter = None
    try:
        parsed = yaml.safe_load(match.group(1))
        if isinstance(parsed, dict):
            frontmatter = parsed
    except yaml.YAMLError:
        pass

    return frontmatter, match.group(2)


def parse_markdown_content(content: str, source: str = "unknown") -> Result:
    """Parse a markdown string into a MarkdownDocument."""
    try:
        frontmatter, body = split_frontmatter(content)
        html = render_markdown(body)
    except Exception as e:
        return error_result(e, [f"Failed to parse Markdown from {source}"])

    return create_result(MarkdownDocument(html=html, frontmatter=frontmatter, raw=content))


def parse_markdown(filepath) -> Result:
    """Read and parse a markdown file."""
    path = Path(filepath)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return error_result(e, [f"Failed to read {path}"])
    return parse_markdown_content(content, str(path))
