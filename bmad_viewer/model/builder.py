"""
Snapshot assembler.

Builds the whole data model for one project root. Each call starts a
fresh ErrorAggregator and returns a complete Snapshot; nothing is shared
with earlier builds.
"""

import logging
import time
from pathlib import Path

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.config import load_project_config
from bmad_viewer.lib.constants import BMAD_DIR_NAME, OUTPUT_DIR_NAME
from bmad_viewer.model.models import Snapshot
from bmad_viewer.model.project import build_project_data
from bmad_viewer.model.wiki import build_wiki_data

logger = logging.getLogger(__name__)


def build_snapshot(project_root) -> Snapshot:
    """Build the data model for the project containing _bmad/ and _bmad-output/."""
    root = Path(project_root)
    started = time.monotonic()
    aggregator = ErrorAggregator()

    wiki = build_wiki_data(root / BMAD_DIR_NAME, aggregator)
    project = build_project_data(root / OUTPUT_DIR_NAME, aggregator)
    config = load_project_config(root, aggregator)

    logger.debug(
        f"Built snapshot for {root} in {time.monotonic() - started:.3f}s: "
        f"{len(wiki.all_items)} items, {len(project.artifacts)} artifacts, "
        f"{len(aggregator.errors)} errors, {len(aggregator.warnings)} warnings"
    )
    return Snapshot(wiki=wiki, project=project, config=config, aggregator=aggregator)
