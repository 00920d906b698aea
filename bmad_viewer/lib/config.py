"""
Configuration loaders for the viewer.

Loads the BMAD module config (project_name and friends) and locates the
project context / product brief shown on the welcome page.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from bmad_viewer.lib import validate
from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.constants import BMAD_DIR_NAME, OUTPUT_DIR_NAME, PLANNING_DIR
from bmad_viewer.lib.docread import read_markdown_safe
from bmad_viewer.lib.scanner import list_direct_files
from bmad_viewer.lib.yamlparse import parse_yaml

logger = logging.getLogger(__name__)

PRODUCT_BRIEF_MARKER = "product-brief"


@dataclass
class ProjectConfig:
    """Project configuration from config.yaml plus the welcome page document."""
    project_name: Optional[str] = None
    values: dict[str, Any] = field(default_factory=dict)  # All keys, passed through as-is
    source: Optional[Path] = None
    context_html: Optional[str] = None
    context_source: Optional[Path] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


def config_candidates(bmad_path: Path) -> list[Path]:
    """Config files in priority order."""
    return [
        bmad_path / "bmm" / "config.yaml",
        bmad_path / "config.yaml",
    ]


def context_candidates(project_root: Path) -> list[Path]:
    """Fixed project context locations in priority order."""
    output = project_root / OUTPUT_DIR_NAME
    return [
        output / "project-context.md",
        output / PLANNING_DIR / "project-context.md",
        project_root / "docs" / "project-context.md",
        project_root / "project-context.md",
        output / PLANNING_DIR / "product-brief.md",
        output / "product-brief.md",
    ]


def load_config_values(bmad_path: Path, aggregator: ErrorAggregator) -> tuple[dict, Optional[Path]]:
    """Load the first existing config file. Returns (values, source)."""
    for config_path in config_candidates(bmad_path):
        if not config_path.is_file():
            continue

        result = parse_yaml(config_path)
        aggregator.add_result(str(config_path), result)
        data = result.data
        if data is None:
            return {}, config_path

        problem = validate.check(data, "config")
        if problem:
            aggregator.add_warning(str(config_path), problem)
            if not isinstance(data, dict):
                return {}, config_path
            data = {k: v for k, v in data.items() if k != "project_name"}

        return data, config_path

    return {}, None


def find_project_context(project_root: Path) -> Optional[Path]:
    """Find the intro document: fixed candidates, then any *product-brief*.md."""
    for candidate in context_candidates(project_root):
        if candidate.is_file():
            return candidate

    output = project_root / OUTPUT_DIR_NAME
    for directory in (output / PLANNING_DIR, output):
        for path in list_direct_files(directory, (".md",)):
            if PRODUCT_BRIEF_MARKER in path.name:
                return path

    return None


def load_project_config(project_root: Path, aggregator: ErrorAggregator) -> ProjectConfig:
    """Load config.yaml values and the project context HTML."""
    values, source = load_config_values(project_root / BMAD_DIR_NAME, aggregator)
    project_name = values.get("project_name")

    config = ProjectConfig(
        project_name=project_name if isinstance(project_name, str) else None,
        values=values,
        source=source,
    )

    context_path = find_project_context(project_root)
    if context_path is not None:
        html, _, _ = read_markdown_safe(context_path, aggregator)
        if html:
            config.context_html = html
            config.context_source = context_path
        else:
            logger.debug(f"Project context {context_path} is empty")

    return config
