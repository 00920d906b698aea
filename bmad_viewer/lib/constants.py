"""Shared constants for the BMAD project layout."""

import re
from enum import Enum

BMAD_DIR_NAME = "_bmad"
OUTPUT_DIR_NAME = "_bmad-output"


class WikiModuleName(str, Enum):
    """Definition modules, in display order."""
    CORE = "core"
    BMM = "bmm"
    BMB = "bmb"
    CIS = "cis"


# Resource directory -> item kind, in display order
RESOURCE_DIRS = {
    "tasks": "task",
    "resources": "resource",
    "data": "data",
    "teams": "team",
    "testarch": "testarch",
}

WORKFLOW_ENTRY_FILE = "workflow.md"
README_FILE = "README.md"


class ArtifactCategory(str, Enum):
    """Sidebar categories for output documents, in display order."""
    PLANNING = "planning"
    RESEARCH = "research"
    ANALYSIS = "analysis"
    STORY = "story"
    DIAGRAM = "diagram"
    BMB_CREATION = "bmb-creation"
    TEST_ARCH = "test-arch"
    CIS = "cis"
    OTHER = "other"


# Output subdirectories
PLANNING_DIR = "planning-artifacts"
RESEARCH_DIR = "research"
IMPLEMENTATION_DIR = "implementation-artifacts"
STORIES_DIR = "stories"
ANALYSIS_DIR = "analysis"
DIAGRAMS_DIR = "excalidraw-diagrams"
CREATIONS_DIR = "bmb-creations"

DIAGRAM_EXTENSION = ".excalidraw"
EPICS_DOCUMENT = "epics"

# Sprint status
SPRINT_STATUS_FILE = "sprint-status.yaml"
EPIC_KEY_PATTERN = re.compile(r'^epic-(\d+)$')
RETROSPECTIVE_SUFFIX = "-retrospective"
INFERRED_EPIC_STATUS = "in-progress"

PENDING_STATUSES = ("backlog", "ready-for-dev")
IN_PROGRESS_STATUSES = ("in-progress",)
DONE_STATUSES = ("done", "review")
