"""
Data model for the BMAD dashboard.

Builds an immutable Snapshot (wiki catalog, project progress, config and
collected diagnostics) from a BMAD project directory.
"""

from bmad_viewer.model.models import (
    Artifact,
    Epic,
    Group,
    Item,
    ProjectConfig,
    ProjectData,
    Snapshot,
    Story,
    StoryCounts,
    WikiData,
    WikiModule,
)
from bmad_viewer.model.builder import build_snapshot
from bmad_viewer.model.project import build_project_data
from bmad_viewer.model.wiki import build_wiki_data

__all__ = [
    "Artifact",
    "Epic",
    "Group",
    "Item",
    "ProjectConfig",
    "ProjectData",
    "Snapshot",
    "Story",
    "StoryCounts",
    "WikiData",
    "WikiModule",
    "build_snapshot",
    "build_project_data",
    "build_wiki_data",
]
