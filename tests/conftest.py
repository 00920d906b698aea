"""Shared fixtures: small BMAD project trees on disk."""

import pytest


def write(path, text=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


SPRINT_STATUS = """# Sprint tracking
# Epic 1: Foundation
# Epic 2: Accounts
development_status:
  epic-1: done
  1-1-project-setup: done
  1-2-ci-pipeline: review
  epic-1-retrospective: optional
  epic-2: in-progress
  2-1-sign-up: in-progress
  2-2-login: ready-for-dev
  2-3-password-reset: backlog
  3-1-dashboard: drafted
"""

EPICS_MD = """# Epics

### Story 1.1: Project Setup

Initialize the repository.

### Story 2.1: Sign Up

Users can create an account.

---

## Appendix
"""


@pytest.fixture
def bmad_project(tmp_path):
    """A project with definitions and outputs covering every scanner path."""
    root = tmp_path / "project"
    bmad = root / "_bmad"
    out = root / "_bmad-output"

    write(bmad / "bmm" / "config.yaml", "project_name: Demo Project\nuser_name: Ada\n")
    write(bmad / "bmm" / "agents" / "pm.md", "---\nname: pm\n---\n# Product Manager\n")
    write(bmad / "bmm" / "agents" / "dev.md", "# Developer\n")
    write(bmad / "bmm" / "workflows" / "quick-flow.md", "# Quick Flow\n")
    write(bmad / "bmm" / "workflows" / "README.md", "# Readme\n")
    write(bmad / "bmm" / "workflows" / "create-prd" / "workflow.md", "# Create PRD\n")
    write(bmad / "bmm" / "workflows" / "4-implementation" / "dev-story" / "workflow.md", "# Dev Story\n")
    write(bmad / "bmm" / "workflows" / "4-implementation" / "retro.md", "# Retro\n")
    write(bmad / "bmm" / "tasks" / "shard-doc.md", "# Shard\n")
    write(bmad / "core" / "tasks" / "workflow.md", "# Core task\n")
    write(bmad / "cis" / "notes.txt", "not markdown\n")
    write(bmad / "_config" / "agent-manifest.csv", 'name,title\npm,"Product Manager"\ndev,Developer\n')

    write(out / "implementation-artifacts" / "sprint-status.yaml", SPRINT_STATUS)
    write(out / "implementation-artifacts" / "1-1-project-setup.md", "# Setup story file\n")
    write(out / "implementation-artifacts" / "stories" / "2-1-sign-up.md", "# Sign up story file\n")
    write(out / "planning-artifacts" / "prd.md", "# PRD\n")
    write(out / "planning-artifacts" / "epics.md", EPICS_MD)
    write(out / "planning-artifacts" / "mockup.html", "<html><body><h1>Mock</h1></body></html>")
    write(out / "planning-artifacts" / "research" / "market.md", "# Market\n")
    write(out / "planning-artifacts" / "product-brief-demo.md", "# Brief\n\nThe demo product.\n")
    write(out / "analysis" / "brainstorm.md", "# Brainstorm\n")
    write(out / "excalidraw-diagrams" / "flow.excalidraw",
          '{"type": "excalidraw", "elements": [{"id": "a"}], "appState": {"viewBackgroundColor": "#fff"}}')
    write(out / "bmb-creations" / "my-agent" / "agent.yaml", "name: <my-agent>\n")
    write(out / "bmb-creations" / "my-agent" / "readme.md", "# My Agent\n")
    write(out / "test-design-auth.md", "# Test design\n")
    write(out / "design-thinking-session.md", "# Design thinking\n")
    write(out / "notes.md", "# Notes\n")

    return root
