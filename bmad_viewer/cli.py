#!/usr/bin/env python3
"""bmad-viewer CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from bmad_viewer.lib.detect import detect_bmad_root
from bmad_viewer.commands import dump as cmd_dump_module
from bmad_viewer.commands import issues as cmd_issues_module
from bmad_viewer.commands import status as cmd_status_module


def get_project_root(args) -> Path:
    """Resolve the project root from --path or the current directory."""
    start = Path(args.path) if args.path else Path.cwd()
    root = detect_bmad_root(start)
    if root is None:
        print(f"ERROR: No _bmad/ directory found in {start} or its parents.")
        sys.exit(2)
    return root


def cmd_status(args):
    return cmd_status_module.cmd_status(args, get_project_root(args))


def cmd_issues(args):
    return cmd_issues_module.cmd_issues(args, get_project_root(args))


def cmd_dump(args):
    return cmd_dump_module.cmd_dump(args, get_project_root(args))


def cmd_watch(args):
    # Textual is only loaded for the TUI
    from bmad_viewer.commands import watch as cmd_watch_module
    return cmd_watch_module.cmd_watch(args, get_project_root(args))


def main():
    parser = argparse.ArgumentParser(prog='bmad-viewer', description='BMAD project dashboard')
    parser.add_argument('--path', help='Path to BMAD project (default: auto-detect _bmad/)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # bmad-viewer status
    p_status = subparsers.add_parser('status', help='Show sprint progress')
    p_status.set_defaults(func=cmd_status)

    # bmad-viewer issues
    p_issues = subparsers.add_parser('issues', help='List parse errors and warnings')
    p_issues.set_defaults(func=cmd_issues)

    # bmad-viewer dump
    p_dump = subparsers.add_parser('dump', help='Write the data model as JSON')
    p_dump.add_argument('--output', '-o', help='Output file (default: stdout)')
    p_dump.add_argument('--no-content', action='store_true', help='Omit rendered HTML and raw text')
    p_dump.set_defaults(func=cmd_dump)

    # bmad-viewer watch
    p_watch = subparsers.add_parser('watch', help='Live dashboard that refreshes on file changes')
    p_watch.set_defaults(func=cmd_watch)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
