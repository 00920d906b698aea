"""
bmad-viewer status - Show sprint progress and catalog size.
"""

from pathlib import Path

from bmad_viewer.lib.detect import detect_bmad_version
from bmad_viewer.model import build_snapshot
from bmad_viewer.model.models import Snapshot, StoryCounts


def format_progress(counts: StoryCounts) -> str:
    """One-line rollup, e.g. '3/10 done (30%) | 2 in progress | 5 pending'."""
    if counts.total == 0:
        return "No stories"

    percent = round(counts.done * 100 / counts.total)
    line = (f"{counts.done}/{counts.total} done ({percent}%) | "
            f"{counts.in_progress} in progress | {counts.pending} pending")
    if counts.other:
        line += f" | {counts.other} other"
    return line


def print_status(snapshot: Snapshot) -> None:
    project = snapshot.project
    title = snapshot.config.project_name or "BMAD"

    print(f"{title}")
    print("-" * 60)
    print(f"Stories: {format_progress(project.stories)}")
    print()

    if project.epics:
        print("Epics")
        print("-" * 60)
        for epic in project.epics:
            done = sum(1 for s in epic.stories if s.status in ("done", "review"))
            name = epic.name[:36] + "..." if len(epic.name) > 36 else epic.name
            print(f"  {epic.num:>3}  {name:<40} {epic.status:<14} {done}/{len(epic.stories)}")
        print()

    print(f"Wiki: {len(snapshot.wiki.modules)} module(s), {len(snapshot.wiki.all_items)} item(s)")
    groups = ", ".join(f"{c.value} {len(a)}" for c, a in project.artifact_groups.items())
    print(f"Artifacts: {len(project.artifacts)}" + (f" ({groups})" if groups else ""))

    summary = snapshot.aggregator.get_summary()
    if summary["errors"] or summary["warnings"]:
        print()
        print(f"[!] {len(summary['errors'])} error(s), {len(summary['warnings'])} warning(s)"
              " - run 'bmad-viewer issues' for details")


def cmd_status(args, project_root: Path) -> int:
    """Build the snapshot and print a progress overview."""
    version = detect_bmad_version(project_root)
    if version.warning:
        print(f"[WARN] {version.warning}")

    print_status(build_snapshot(project_root))
    return 0
