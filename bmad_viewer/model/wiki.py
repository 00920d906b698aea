"""
Wiki catalog builder.

Walks _bmad/<module>/ for each known module and builds the
module -> group -> item hierarchy shown in the sidebar:

  agents/*.md                          -> Agents group
  workflows/<name>.md                  -> workflow <module>/workflows/<name>
  workflows/<name>/workflow.md         -> workflow <module>/workflows/<name>
  workflows/<cat>/<name>/workflow.md   -> workflow <module>/workflows/<cat>/<name>
  workflows/<cat>/<name>.md            -> workflow <module>/workflows/<cat>/<name>
  tasks|resources|data|teams|testarch/*.md -> one group per directory

Manifests in _bmad/_config/*-manifest.csv are loaded alongside.
"""

import logging
from pathlib import Path

from bmad_viewer.lib.aggregator import ErrorAggregator
from bmad_viewer.lib.constants import (
    README_FILE,
    RESOURCE_DIRS,
    WORKFLOW_ENTRY_FILE,
    WikiModuleName,
)
from bmad_viewer.lib.csvparse import parse_csv
from bmad_viewer.lib.docread import read_markdown_safe
from bmad_viewer.lib.scanner import (
    is_directory,
    list_direct_files,
    list_subdirectories,
)
from bmad_viewer.model.models import Group, Item, WikiData, WikiModule, format_name

logger = logging.getLogger(__name__)

MANIFEST_DIR = "_config"
MANIFEST_SUFFIX = "-manifest.csv"


def _make_item(item_id: str, name: str, kind: str, path: Path, aggregator: ErrorAggregator) -> Item:
    html, frontmatter, raw = read_markdown_safe(path, aggregator)
    return Item(
        id=item_id,
        display_name=format_name(name),
        kind=kind,
        path=path,
        html=html,
        frontmatter=frontmatter,
        raw=raw,
    )


def _scan_flat_group(directory: Path, module: str, dir_name: str, kind: str,
                     aggregator: ErrorAggregator) -> list[Item]:
    return [
        _make_item(f"{module}/{dir_name}/{path.stem}", path.stem, kind, path, aggregator)
        for path in list_direct_files(directory, (".md",))
    ]


def _scan_workflow_category(category_dir: Path, module: str,
                            aggregator: ErrorAggregator) -> list[Item]:
    """Resolve workflows one level below a category directory."""
    category = category_dir.name
    # (sort key, name, file); directory workflows sort by the directory path
    found: list[tuple[str, str, Path]] = []

    for sub_dir in list_subdirectories(category_dir):
        entry = sub_dir / WORKFLOW_ENTRY_FILE
        if entry.is_file():
            found.append((str(sub_dir), sub_dir.name, entry))

    for path in list_direct_files(category_dir, (".md",)):
        if path.name != README_FILE:
            found.append((str(path), path.stem, path))

    found.sort()
    return [
        _make_item(f"{module}/workflows/{category}/{name}", name, "workflow", path, aggregator)
        for _, name, path in found
    ]


def scan_workflows(workflows_dir: Path, module: str, aggregator: ErrorAggregator) -> list[Item]:
    """Apply the workflow resolution rule to a module's workflows directory."""
    items = []
    files = [p for p in list_direct_files(workflows_dir, (".md",)) if p.name != README_FILE]
    entries = sorted(files + list_subdirectories(workflows_dir), key=str)

    for entry in entries:
        if entry.is_file():
            items.append(_make_item(f"{module}/workflows/{entry.stem}", entry.stem, "workflow",
                                    entry, aggregator))
            continue

        workflow_md = entry / WORKFLOW_ENTRY_FILE
        if workflow_md.is_file():
            items.append(_make_item(f"{module}/workflows/{entry.name}", entry.name,
                                    "workflow", workflow_md, aggregator))
        else:
            items.extend(_scan_workflow_category(entry, module, aggregator))

    return items


def build_module(module_dir: Path, module: str, aggregator: ErrorAggregator) -> WikiModule:
    """Build one module's groups. Groups with no items are left out."""
    wiki_module = WikiModule(id=module, display_name=module.upper())

    agents_dir = module_dir / "agents"
    if is_directory(agents_dir):
        items = _scan_flat_group(agents_dir, module, "agents", "agent", aggregator)
        if items:
            wiki_module.groups.append(Group(name="Agents", kind="agents", items=items))

    workflows_dir = module_dir / "workflows"
    if is_directory(workflows_dir):
        items = scan_workflows(workflows_dir, module, aggregator)
        if items:
            wiki_module.groups.append(Group(name="Workflows", kind="workflows", items=items))

    for dir_name, kind in RESOURCE_DIRS.items():
        resource_dir = module_dir / dir_name
        if not is_directory(resource_dir):
            continue
        items = _scan_flat_group(resource_dir, module, dir_name, kind, aggregator)
        if items:
            wiki_module.groups.append(Group(name=format_name(dir_name), kind=dir_name, items=items))

    return wiki_module


def load_manifests(bmad_path: Path, aggregator: ErrorAggregator) -> dict[str, list[dict[str, str]]]:
    """Load _config/*-manifest.csv keyed by manifest name ("agent", "workflow", ...)."""
    manifests = {}
    for path in list_direct_files(bmad_path / MANIFEST_DIR, (MANIFEST_SUFFIX,)):
        result = parse_csv(path)
        if result.errors or result.warnings:
            aggregator.add_result(str(path), result)
        manifests[path.name[:-len(MANIFEST_SUFFIX)]] = result.data or []
    return manifests


def _warn_duplicates(items: list[Item], aggregator: ErrorAggregator) -> None:
    seen: dict[str, Item] = {}
    for item in items:
        previous = seen.get(item.id)
        if previous is not None:
            aggregator.add_warning(
                str(item.path),
                f"Duplicate id {item.id}: {item.path} replaces {previous.path}",
            )
        seen[item.id] = item


def build_wiki_data(bmad_path: Path, aggregator: ErrorAggregator) -> WikiData:
    """Build the wiki catalog from the _bmad definitions tree."""
    wiki = WikiData()

    for module in WikiModuleName:
        module_dir = bmad_path / module.value
        if not is_directory(module_dir):
            logger.debug(f"Module {module.value} not present, skipping")
            continue

        wiki_module = build_module(module_dir, module.value, aggregator)
        if not wiki_module.groups:
            continue

        wiki.modules.append(wiki_module)
        for group in wiki_module.groups:
            wiki.all_items.extend(group.items)

    _warn_duplicates(wiki.all_items, aggregator)
    wiki.manifests = load_manifests(bmad_path, aggregator)
    return wiki
