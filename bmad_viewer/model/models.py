"""
Data models for the dashboard snapshot.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.config import ProjectConfig
from bmad_viewer.lib.constants import ArtifactCategory
from bmad_viewer.lib.storyparse import StoryContent

_WORD_START_RE = re.compile(r'\b\w')


def title_case(text: str) -> str:
    """Uppercase the first character of every word ("user_login flow" -> "User_login Flow")."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), text)


def format_name(name: str) -> str:
    """Turn a kebab/snake file name into a title ("create-prd" -> "Create Prd")."""
    return title_case(name.replace("-", " ").replace("_", " "))


@dataclass
class Item:
    """One wiki catalog entry (agent, workflow, task, ...)."""
    id: str                                    # bmm/agents/pm
    display_name: str
    kind: str                                  # agent, workflow, task, resource, data, team, testarch
    path: Path
    html: str = ""
    frontmatter: Optional[dict[str, Any]] = None
    raw: str = ""


@dataclass
class Group:
    name: str                                  # "Agents", "Workflows", "Tasks"
    kind: str                                  # agents, workflows, or the resource dir name
    items: list[Item] = field(default_factory=list)


@dataclass
class WikiModule:
    id: str                                    # core, bmm, bmb, cis
    display_name: str
    groups: list[Group] = field(default_factory=list)


@dataclass
class WikiData:
    modules: list[WikiModule] = field(default_factory=list)
    all_items: list[Item] = field(default_factory=list)
    manifests: dict[str, list[dict[str, str]]] = field(default_factory=dict)

    @property
    def items_by_id(self) -> dict[str, Item]:
        """Lookup by id. On collision the last scanned item wins."""
        return {item.id: item for item in self.all_items}


@dataclass
class Story:
    """A story entry from the sprint status map."""
    id: str                                    # 1-2-user-login
    title: str
    status: str
    epic: Optional[int]                        # Epic number, not ownership
    html: str = ""


@dataclass
class Epic:
    num: int
    id: str                                    # epic-1
    name: str
    status: str
    stories: list[Story] = field(default_factory=list)


@dataclass
class StoryCounts:
    """Story rollup. Statuses outside the known vocabulary land in other."""
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    done: int = 0
    other: int = 0


@dataclass
class Artifact:
    """A document from the output tree."""
    id: str                                    # artifact/prd, story/1-1-setup
    display_name: str
    path: Path
    category: ArtifactCategory
    html: str = ""
    raw: str = ""
    frontmatter: Optional[dict[str, Any]] = None


@dataclass
class ProjectData:
    sprint_status: Optional[dict[str, Any]] = None
    stories: StoryCounts = field(default_factory=StoryCounts)
    story_list: list[Story] = field(default_factory=list)
    epics: list[Epic] = field(default_factory=list)
    artifacts: list[Artifact] = field(default_factory=list)
    artifact_groups: dict[ArtifactCategory, list[Artifact]] = field(default_factory=dict)
    story_contents: dict[str, StoryContent] = field(default_factory=dict)

    @property
    def artifacts_by_id(self) -> dict[str, Artifact]:
        return {artifact.id: artifact for artifact in self.artifacts}


@dataclass(frozen=True)
class Snapshot:
    """Complete result of one build. Replaced wholesale, never updated."""
    wiki: WikiData
    project: ProjectData
    config: ProjectConfig
    aggregator: ErrorAggregator
