"""Tests for bmad_viewer.lib.storyparse module."""

from bmad_viewer.lib.storyparse import parse_epic_names, split_story_sections


class TestParseEpicNames:
    """Test parse_epic_names function."""

    def test_extracts_names_from_comments(self):
        raw = """# Sprint status
# Epic 1: Foundation
# Epic 2: User Accounts
development_status:
  epic-1: done
"""
        assert parse_epic_names(raw) == {1: "Foundation", 2: "User Accounts"}

    def test_last_match_wins(self):
        raw = "# Epic 3: Old Name\n# Epic 3: New Name\n"
        assert parse_epic_names(raw) == {3: "New Name"}

    def test_no_comments(self):
        assert parse_epic_names("development_status:\n  epic-1: done\n") == {}

    def test_empty_name_overrides_earlier_name(self):
        raw = "# Epic 1: Foundation\n# Epic 1:\ndevelopment_status:\n  epic-1: done\n"
        assert parse_epic_names(raw) == {1: ""}


EPICS_DOC = """# Epics

## Epic 1: Foundation

### Story 1.1: Project Setup

Set up the repo.

**Acceptance Criteria:** builds

### Story 1.2: CI Pipeline

Add CI.

---

## Epic 2: Accounts

### Story 2.1: Sign Up

Users can register.
"""


class TestSplitStorySections:
    """Test split_story_sections function."""

    def test_finds_every_story(self):
        sections = split_story_sections(EPICS_DOC)
        assert list(sections) == ["1-1", "1-2", "2-1"]
        assert sections["1-1"].title == "Project Setup"
        assert sections["2-1"].title == "Sign Up"

    def test_section_ends_at_next_story(self):
        sections = split_story_sections(EPICS_DOC)
        assert "Set up the repo." in sections["1-1"].html
        assert "Add CI." not in sections["1-1"].html

    def test_section_ends_at_rule(self):
        sections = split_story_sections(EPICS_DOC)
        assert "Add CI." in sections["1-2"].html
        assert "Epic 2" not in sections["1-2"].html
        assert "<hr" not in sections["1-2"].html

    def test_last_section_runs_to_end(self):
        sections = split_story_sections(EPICS_DOC)
        assert "Users can register." in sections["2-1"].html

    def test_heading_is_rendered(self):
        sections = split_story_sections(EPICS_DOC)
        assert "<h3>Story 1.1: Project Setup</h3>" in sections["1-1"].html

    def test_ignores_other_heading_levels(self):
        sections = split_story_sections("## Story 1.1: Not a story\n#### Story 1.2: Nope\n")
        assert sections == {}

    def test_crlf_line_endings(self):
        raw = "### Story 1.1: Setup\r\n\r\nBody\r\n\r\n---\r\n\r\n## Appendix\r\n"
        sections = split_story_sections(raw)
        assert sections["1-1"].title == "Setup"
        assert "Body" in sections["1-1"].html
        assert "Appendix" not in sections["1-1"].html
