"""
bmad-viewer watch - Live terminal dashboard.

Polls the project tree, rebuilds the snapshot after changes settle and
shows sprint progress, epics and the issue banner.
"""

from pathlib import Path
from typing import Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from bmad_viewer.commands.status import format_progress
from bmad_viewer.lib.watcher import ChangeDebouncer, SnapshotHolder, tree_fingerprint
from bmad_viewer.model import build_snapshot
from bmad_viewer.model.models import Epic, Snapshot

# Configuration
POLL_INTERVAL_SECONDS = 2.0
ISSUE_DISPLAY_COUNT = 8

STATUS_COLORS = {
    "done": "green",
    "review": "green",
    "in-progress": "yellow",
    "ready-for-dev": "cyan",
    "backlog": "dim",
}


def _format_story_status(status: str) -> str:
    color = STATUS_COLORS.get(status, "")
    if color:
        return f"[{color}]{status}[/{color}]"
    return escape(status)


def _format_epic(epic: Epic) -> list[str]:
    """Rich markup lines for one epic and its stories."""
    done = sum(1 for s in epic.stories if s.status in ("done", "review"))
    lines = [f"[bold]{epic.num}. {escape(epic.name)}[/bold] ({done}/{len(epic.stories)}) "
             f"{_format_story_status(epic.status)}"]
    for story in epic.stories:
        lines.append(f"    {escape(story.id):<32} {_format_story_status(story.status)}")
    return lines


def _format_issues(summary: dict, limit: int = ISSUE_DISPLAY_COUNT) -> str:
    errors = summary["errors"]
    warnings = summary["warnings"]
    if not errors and not warnings:
        return "[green]No issues[/green]"

    lines = [f"[bold]{len(errors)} error(s), {len(warnings)} warning(s)[/bold]"]
    entries = [("red", e) for e in errors] + [("yellow", w) for w in warnings]
    for color, entry in entries[:limit]:
        source = escape(Path(entry['source']).name)
        lines.append(f"  [{color}]{source}[/{color}]: {escape(entry['message'])}")
    if len(entries) > limit:
        lines.append(f"  [dim]... {len(entries) - limit} more[/dim]")
    return "\n".join(lines)


class ProgressWidget(Static):
    """Story rollup for the whole project."""

    snapshot: reactive[Optional[Snapshot]] = reactive(None, always_update=True)

    def render(self) -> str:
        if not self.snapshot:
            return "Loading..."

        project = self.snapshot.project
        lines = [
            f"[bold]Stories:[/bold] {format_progress(project.stories)}",
            f"Wiki: {len(self.snapshot.wiki.all_items)} item(s)  "
            f"Artifacts: {len(project.artifacts)}",
        ]
        return "\n".join(lines)


class EpicsWidget(Static):
    """Epics with their stories."""

    snapshot: reactive[Optional[Snapshot]] = reactive(None, always_update=True)

    def render(self) -> str:
        if not self.snapshot or not self.snapshot.project.epics:
            return "[dim]No sprint status found[/dim]"

        lines = []
        for epic in self.snapshot.project.epics:
            lines.extend(_format_epic(epic))
        return "\n".join(lines)


class IssuesWidget(Static):
    """Aggregated errors and warnings banner."""

    snapshot: reactive[Optional[Snapshot]] = reactive(None, always_update=True)

    def render(self) -> str:
        if not self.snapshot:
            return ""
        return _format_issues(self.snapshot.aggregator.get_summary())


class WatchApp(App):
    """Main watch TUI application."""

    CSS = """
    #main-container {
        layout: vertical;
        padding: 1;
    }

    #progress-box {
        border: solid green;
        padding: 1;
        height: auto;
    }

    #epics-box {
        border: solid blue;
        padding: 1;
        height: 1fr;
    }

    #issues-box {
        border: solid yellow;
        padding: 0 1;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("r", "rebuild", "Rebuild"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, project_root: Path) -> None:
        super().__init__()
        self.project_root = project_root
        self.holder = SnapshotHolder(project_root, build_snapshot)
        self.debouncer = ChangeDebouncer(tree_fingerprint(project_root))

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Container(ProgressWidget(id="progress"), id="progress-box"),
            VerticalScroll(EpicsWidget(id="epics"), id="epics-box"),
            Container(IssuesWidget(id="issues"), id="issues-box"),
            id="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.action_rebuild()
        self.set_interval(POLL_INTERVAL_SECONDS, self.poll_changes)

    def poll_changes(self) -> None:
        if self.debouncer.observe(tree_fingerprint(self.project_root)):
            self.action_rebuild()

    def action_rebuild(self) -> None:
        snapshot = self.holder.rebuild()

        self.query_one("#progress", ProgressWidget).snapshot = snapshot
        self.query_one("#epics", EpicsWidget).snapshot = snapshot
        self.query_one("#issues", IssuesWidget).snapshot = snapshot

        self.title = f"bmad-viewer: {snapshot.config.project_name or self.project_root.name}"
        self.sub_title = f"build #{self.holder.builds}"


def cmd_watch(args, project_root: Path) -> int:
    """Watch a project and refresh on change."""
    app = WatchApp(project_root)
    app.run()
    return 0
