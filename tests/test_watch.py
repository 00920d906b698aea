"""Tests for bmad-viewer watch helper functions."""

from rich.markup import render

from bmad_viewer.commands.watch import _format_epic, _format_issues, _format_story_status
from bmad_viewer.model.models import Epic, Story


class TestFormatStoryStatus:
    """Tests for _format_story_status."""

    def test_known_status_is_colored(self):
        assert _format_story_status("done") == "[green]done[/green]"

    def test_unknown_status_is_plain(self):
        assert _format_story_status("drafted") == "drafted"


class TestFormatEpic:
    """Tests for _format_epic."""

    def test_header_and_story_lines(self):
        stories = [
            Story(id="1-1-setup", title="Setup", status="done", epic=1),
            Story(id="1-2-build", title="Build", status="backlog", epic=1),
        ]
        epic = Epic(num=1, id="epic-1", name="Foundation", status="in-progress", stories=stories)

        lines = _format_epic(epic)
        assert lines[0] == "[bold]1. Foundation[/bold] (1/2) [yellow]in-progress[/yellow]"
        assert len(lines) == 3
        assert "1-1-setup" in lines[1]
        assert "[dim]backlog[/dim]" in lines[2]

    def test_epic_without_stories(self):
        epic = Epic(num=2, id="epic-2", name="Later", status="backlog")
        assert _format_epic(epic) == ["[bold]2. Later[/bold] (0/0) [dim]backlog[/dim]"]


class TestFormatIssues:
    """Tests for _format_issues."""

    def test_no_issues(self):
        assert _format_issues({"errors": [], "warnings": []}) == "[green]No issues[/green]"

    def test_lists_errors_before_warnings(self):
        summary = {
            "errors": [{"source": "/p/_bmad-output/sprint-status.yaml", "message": "bad"}],
            "warnings": [{"source": "/p/_bmad/_config/a.csv", "message": "short"}],
        }
        lines = _format_issues(summary).split("\n")
        assert lines[0] == "[bold]1 error(s), 1 warning(s)[/bold]"
        assert lines[1] == "  [red]sprint-status.yaml[/red]: bad"
        assert lines[2] == "  [yellow]a.csv[/yellow]: short"

    def test_truncates_long_lists(self):
        warnings = [{"source": f"f{i}.md", "message": "w"} for i in range(5)]
        text = _format_issues({"errors": [], "warnings": warnings}, limit=2)
        assert text.count("[yellow]") == 2
        assert text.endswith("  [dim]... 3 more[/dim]")


class TestMarkupEscaping:
    """User text must not be parsed as Rich markup."""

    def test_epic_name_and_story_id_are_escaped(self):
        stories = [Story(id="1-1-[b]tokens", title="Tokens", status="[red]", epic=1)]
        epic = Epic(num=1, id="epic-1", name="Parse [/] tokens", status="done", stories=stories)

        lines = _format_epic(epic)
        for line in lines:
            render(line)
        assert render(lines[0]).plain.startswith("1. Parse [/] tokens")
        assert "1-1-[b]tokens" in render(lines[1]).plain
        assert "[red]" in render(lines[1]).plain

    def test_issue_text_is_escaped(self):
        summary = {
            "errors": [{"source": "/p/[bold].yaml", "message": "bad [/] value"}],
            "warnings": [],
        }
        text = render(_format_issues(summary)).plain
        assert "[bold].yaml: bad [/] value" in text
