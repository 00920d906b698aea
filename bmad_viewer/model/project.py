"""
Project (output tree) builder.

Reads _bmad-output/ into epics, stories and artifacts:

  sprint-status.yaml           -> epics, stories, rollup counts
  planning-artifacts/**        -> planning / research artifacts (+ epics.md story sections)
  implementation-artifacts/    -> story files (also stories/ subdir)
  analysis/                    -> analysis artifacts
  excalidraw-diagrams/         -> diagram viewers
  bmb-creations/**             -> builder creations (.md and .yaml)
  *.md at the root             -> classified by filename prefix

Every step is optional; a missing directory just contributes nothing.
"""

import html
import logging
from pathlib import Path
from typing import Any, Optional

from bmad_viewer.lib import validate
from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.constants import (
    ANALYSIS_DIR,
    CREATIONS_DIR,
    DIAGRAM_EXTENSION,
    DIAGRAMS_DIR,
    DONE_STATUSES,
    EPIC_KEY_PATTERN,
    EPICS_DOCUMENT,
    IMPLEMENTATION_DIR,
    IN_PROGRESS_STATUSES,
    INFERRED_EPIC_STATUS,
    PENDING_STATUSES,
    PLANNING_DIR,
    RETROSPECTIVE_SUFFIX,
    SPRINT_STATUS_FILE,
    STORIES_DIR,
    ArtifactCategory,
)
from bmad_viewer.lib.docread import read_markdown_safe, read_text_safe
from bmad_viewer.lib.scanner import is_directory, list_direct_files, list_files_recursive
from bmad_viewer.lib.storyparse import parse_epic_names, split_story_sections
from bmad_viewer.lib.yamlparse import parse_yaml_content
from bmad_viewer.model.classify import classify_artifact
from bmad_viewer.model.models import (
    Artifact,
    Epic,
    ProjectData,
    Story,
    StoryCounts,
    format_name,
    title_case,
)
from bmad_viewer.model.render import embed_html_document, render_diagram, yaml_code_block

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Sprint status
# ─────────────────────────────────────────────────────────────────────────────

def sprint_status_candidates(output_path: Path) -> list[Path]:
    """Candidate status files, preferred first."""
    return [
        output_path / IMPLEMENTATION_DIR / SPRINT_STATUS_FILE,
        output_path / SPRINT_STATUS_FILE,
    ]


def find_sprint_status(output_path: Path) -> Optional[Path]:
    for candidate in sprint_status_candidates(output_path):
        if candidate.is_file():
            return candidate
    return None


def count_story(counts: StoryCounts, status: str) -> None:
    """Add one story to the rollup."""
    counts.total += 1
    if status in PENDING_STATUSES:
        counts.pending += 1
    elif status in IN_PROGRESS_STATUSES:
        counts.in_progress += 1
    elif status in DONE_STATUSES:
        counts.done += 1
    else:
        counts.other += 1


def story_title_from_key(key: str) -> str:
    """'1-2-user-login' -> 'User Login'. Falls back to the key itself."""
    title = title_case(" ".join(key.split("-")[2:]))
    return title or key


def _status_text(value: Any) -> str:
    return "" if value is None else str(value)


def _epic_number(key: str) -> Optional[int]:
    first = key.split("-", 1)[0]
    return int(first) if first.isdecimal() else None


def _epic_name(epic_names: dict[int, str], num: int) -> str:
    return epic_names.get(num) or f"Epic {num}"


def apply_development_status(
    development_status: dict,
    epic_names: dict[int, str],
    project: ProjectData,
    source: str,
    aggregator: ErrorAggregator,
) -> None:
    """Turn the development_status map into epics, stories and counts."""
    epics: dict[int, Epic] = {}

    for raw_key, raw_value in development_status.items():
        key = str(raw_key)
        status = _status_text(raw_value)
        if key.endswith(RETROSPECTIVE_SUFFIX):
            continue

        epic_match = EPIC_KEY_PATTERN.match(key)
        if epic_match:
            num = int(epic_match.group(1))
            epic = epics.get(num)
            if epic is None:
                epics[num] = Epic(num=num, id=key, name=_epic_name(epic_names, num),
                                  status=status)
            else:
                epic.status = status
                epic.name = epic_names.get(num) or epic.name
            continue

        num = _epic_number(key)
        story = Story(id=key, title=story_title_from_key(key), status=status, epic=num)
        count_story(project.stories, status)
        project.story_list.append(story)

        if num is None:
            aggregator.add_warning(source, f"Story key '{key}' has no epic number")
            continue

        if num not in epics:
            epics[num] = Epic(num=num, id=f"epic-{num}", name=_epic_name(epic_names, num),
                              status=INFERRED_EPIC_STATUS)
        epics[num].stories.append(story)

    project.epics = sorted(epics.values(), key=lambda e: e.num)


def load_sprint_status(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    """Parse the first sprint status file found into the project data."""
    status_path = find_sprint_status(output_path)
    if status_path is None:
        return

    raw = read_text_safe(status_path)
    if raw is None:
        return

    source = str(status_path)
    result = parse_yaml_content(raw, source)
    aggregator.add_result(source, result)

    data = result.data
    if not isinstance(data, dict) or data.get("development_status") is None:
        return

    problem = validate.check(data, "sprint-status")
    if problem:
        aggregator.add_warning(source, problem)
        return

    project.sprint_status = data
    apply_development_status(
        data["development_status"],
        parse_epic_names(raw),
        project,
        source,
        aggregator,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Artifacts
# ─────────────────────────────────────────────────────────────────────────────

def _relative(path: Path, output_path: Path) -> Path:
    try:
        return path.relative_to(output_path)
    except ValueError:
        return Path(path.name)


def _markdown_artifact(path: Path, category: ArtifactCategory, aggregator: ErrorAggregator,
                       prefix: str = "artifact") -> Artifact:
    html_body, frontmatter, raw = read_markdown_safe(path, aggregator)
    return Artifact(
        id=f"{prefix}/{path.stem}",
        display_name=format_name(path.stem),
        path=path,
        category=category,
        html=html_body,
        raw=raw,
        frontmatter=frontmatter,
    )


def _html_artifact(path: Path, category: ArtifactCategory) -> Artifact:
    raw = read_text_safe(path) or ""
    return Artifact(
        id=f"artifact/{path.stem}",
        display_name=format_name(path.stem),
        path=path,
        category=category,
        html=embed_html_document(raw, format_name(path.stem)) if raw else "",
        raw=raw,
    )


def scan_planning(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    planning_dir = output_path / PLANNING_DIR
    for path in list_files_recursive(planning_dir, (".md", ".html")):
        category = classify_artifact(_relative(path, output_path))
        if path.suffix == ".html":
            project.artifacts.append(_html_artifact(path, category))
            continue

        artifact = _markdown_artifact(path, category, aggregator)
        project.artifacts.append(artifact)
        if path.stem == EPICS_DOCUMENT and artifact.raw:
            project.story_contents = split_story_sections(artifact.raw, str(path), aggregator)


def scan_implementation(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    impl_dir = output_path / IMPLEMENTATION_DIR
    if not is_directory(impl_dir):
        return

    files = list_direct_files(impl_dir, (".md",)) + list_direct_files(impl_dir / STORIES_DIR, (".md",))
    for path in files:
        project.artifacts.append(
            _markdown_artifact(path, ArtifactCategory.STORY, aggregator, prefix="story")
        )


def scan_analysis(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    for path in list_direct_files(output_path / ANALYSIS_DIR, (".md",)):
        project.artifacts.append(_markdown_artifact(path, ArtifactCategory.ANALYSIS, aggregator))


def scan_diagrams(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    for path in list_direct_files(output_path / DIAGRAMS_DIR, (DIAGRAM_EXTENSION,)):
        raw = read_text_safe(path)
        fragment = ""
        if raw is not None:
            result = render_diagram(raw, str(path))
            if not result.ok:
                aggregator.add_result(str(path), result)
            fragment = result.data or ""

        name = path.name[:-len(DIAGRAM_EXTENSION)]
        project.artifacts.append(Artifact(
            id=f"artifact/{name}",
            display_name=format_name(name),
            path=path,
            category=ArtifactCategory.DIAGRAM,
            html=fragment,
            raw=raw or "",
        ))


def scan_creations(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    for path in list_files_recursive(output_path / CREATIONS_DIR, (".md", ".yaml")):
        if path.suffix == ".md":
            project.artifacts.append(
                _markdown_artifact(path, ArtifactCategory.BMB_CREATION, aggregator)
            )
            continue

        # YAML is displayed, not interpreted
        raw = read_text_safe(path) or ""
        project.artifacts.append(Artifact(
            id=f"artifact/{path.stem}",
            display_name=format_name(path.stem),
            path=path,
            category=ArtifactCategory.BMB_CREATION,
            html=yaml_code_block(raw),
            raw=raw,
        ))


def scan_root_files(output_path: Path, project: ProjectData, aggregator: ErrorAggregator) -> None:
    for path in list_direct_files(output_path, (".md",)):
        category = classify_artifact(_relative(path, output_path))
        project.artifacts.append(_markdown_artifact(path, category, aggregator))


def group_artifacts(artifacts: list[Artifact]) -> dict[ArtifactCategory, list[Artifact]]:
    """Group non-story artifacts by category, in category order."""
    groups: dict[ArtifactCategory, list[Artifact]] = {}
    for category in ArtifactCategory:
        if category is ArtifactCategory.STORY:
            continue
        members = [a for a in artifacts if a.category is category]
        if members:
            groups[category] = members
    return groups


def _warn_duplicates(artifacts: list[Artifact], aggregator: ErrorAggregator) -> None:
    seen: dict[str, Artifact] = {}
    for artifact in artifacts:
        previous = seen.get(artifact.id)
        if previous is not None:
            aggregator.add_warning(
                str(artifact.path),
                f"Duplicate id {artifact.id}: {artifact.path} replaces {previous.path}",
            )
        seen[artifact.id] = artifact


# ─────────────────────────────────────────────────────────────────────────────
# Story display
# ─────────────────────────────────────────────────────────────────────────────

def _status_line(story: Story, epic: Optional[Epic]) -> str:
    label = format_name(story.status or "backlog")
    status_class = html.escape(story.status or "backlog", quote=True)
    epic_part = ""
    if epic is not None:
        epic_part = f"<strong>Epic {epic.num}:</strong> {html.escape(epic.name)} &nbsp; "
    return f'<p>{epic_part}<span class="badge badge--{status_class}">{html.escape(label)}</span></p>'


def story_content_key(story: Story) -> Optional[str]:
    """'1-2-user-login' -> '1-2'."""
    parts = story.id.split("-")
    if len(parts) < 2:
        return None
    return f"{parts[0]}-{parts[1]}"


def enrich_story_html(project: ProjectData) -> None:
    """Fill Story.html from a story file, then epics.md, then a placeholder."""
    artifacts = project.artifacts_by_id
    epics = {epic.num: epic for epic in project.epics}

    for story in project.story_list:
        story_file = artifacts.get(f"story/{story.id}")
        if story_file is not None and story_file.html:
            story.html = story_file.html
            continue

        status_line = _status_line(story, epics.get(story.epic))
        content = project.story_contents.get(story_content_key(story) or "")
        if content is not None:
            story.html = status_line + content.html
        else:
            story.html = (
                f"<h1>{html.escape(story.title)}</h1>{status_line}"
                '<p class="placeholder">No detailed content found for this story.</p>'
            )


def build_project_data(output_path: Path, aggregator: ErrorAggregator) -> ProjectData:
    """Build epics, stories and artifacts from the _bmad-output tree."""
    project = ProjectData()
    if not is_directory(output_path):
        logger.debug(f"Output directory {output_path} not present")
        return project

    load_sprint_status(output_path, project, aggregator)
    scan_planning(output_path, project, aggregator)
    scan_implementation(output_path, project, aggregator)
    scan_analysis(output_path, project, aggregator)
    scan_diagrams(output_path, project, aggregator)
    scan_creations(output_path, project, aggregator)
    scan_root_files(output_path, project, aggregator)

    _warn_duplicates(project.artifacts, aggregator)
    project.artifact_groups = group_artifacts(project.artifacts)
    enrich_story_html(project)
    return project
