"""
bmad-viewer issues - List parse errors and warnings from a build.
"""

from pathlib import Path

from bmad_viewer.model import build_snapshot


def format_issues(summary: dict) -> list[str]:
    lines = []
    for label, key in (("ERROR", "errors"), ("WARN", "warnings")):
        for entry in summary[key]:
            lines.append(f"[{label}] {entry['source']}: {entry['message']}")
    return lines


def cmd_issues(args, project_root: Path) -> int:
    """Print every aggregated issue. Exit 1 when any error was found."""
    snapshot = build_snapshot(project_root)
    summary = snapshot.aggregator.get_summary()

    lines = format_issues(summary)
    if not lines:
        print("No issues found.")
        return 0

    for line in lines:
        print(line)
    print()
    print(f"{len(summary['errors'])} error(s), {len(summary['warnings'])} warning(s)")

    return 1 if summary["errors"] else 0
