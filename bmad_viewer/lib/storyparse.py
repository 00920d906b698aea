"""
Sprint document text extraction.

- Epic names from sprint-status.yaml comments ("# Epic 1: Foundation")
- Story sections from epics.md ("### Story 1.2: Title")
"""

import re
from dataclasses import dataclass

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.mdparse import parse_markdown_content

EPIC_COMMENT_RE = re.compile(r'#[ \t]*Epic[ \t]+(\d+):[ \t]*(.*)')
STORY_HEADING_RE = re.compile(r'^### Story (\d+)\.(\d+):[ \t]*(.+?)\r?$', re.MULTILINE)
SECTION_BREAK_RE = re.compile(r'^---\r?$', re.MULTILINE)


@dataclass
class StoryContent:
    """Rendered section of epics.md for one story."""
    title: str
    html: str


def parse_epic_names(raw_yaml: str) -> dict[int, str]:
    """Map epic number to name from status file comments. Last match wins.

    A comment with no name maps to "" so callers fall back to "Epic N".
    """
    names = {}
    for match in EPIC_COMMENT_RE.finditer(raw_yaml):
        names[int(match.group(1))] = match.group(2).strip()
    return names


def split_story_sections(
    raw: str,
    source: str = "epics.md",
    aggregator: ErrorAggregator | None = None,
) -> dict[str, StoryContent]:
    """Split a planning document into per-story HTML fragments.

    A section starts at its heading and ends at the next story heading or
    the first line that is exactly '---', whichever comes first.

    Returns:
        Dict keyed by "{epic}-{story}".
    """
    headings = list(STORY_HEADING_RE.finditer(raw))
    sections = {}

    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(raw)

        section_break = SECTION_BREAK_RE.search(raw, heading.end(), end)
        if section_break:
            end = section_break.start()

        key = f"{heading.group(1)}-{heading.group(2)}"
        markdown = raw[heading.start():end].strip()
        result = parse_markdown_content(markdown, f"{source}#story-{key}")
        if aggregator is not None and not result.ok:
            aggregator.add_result(f"{source}#story-{key}", result)

        sections[key] = StoryContent(
            title=heading.group(3).strip(),
            html=result.data.html if result.data else "",
        )

    return sections
