"""
bmad-viewer dump - Write the snapshot as JSON.
"""

import json
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from bmad_viewer.model import build_snapshot
from bmad_viewer.model.models import Snapshot

CONTENT_FIELDS = ("html", "raw", "context_html")


def _jsonable(value: Any, include_content: bool) -> Any:
    if isinstance(value, dict):
        return {
            _jsonable(k, include_content): _jsonable(v, include_content)
            for k, v in value.items()
            if include_content or k not in CONTENT_FIELDS
        }
    if isinstance(value, (list, tuple)):
        return [_jsonable(v, include_content) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def snapshot_to_dict(snapshot: Snapshot, include_content: bool = True) -> dict:
    """Plain dict form of a snapshot, safe for json.dumps."""
    return {
        "wiki": _jsonable(asdict(snapshot.wiki), include_content),
        "project": _jsonable(asdict(snapshot.project), include_content),
        "config": _jsonable(asdict(snapshot.config), include_content),
        "issues": snapshot.aggregator.get_summary(),
    }


def cmd_dump(args, project_root: Path) -> int:
    snapshot = build_snapshot(project_root)
    data = snapshot_to_dict(snapshot, include_content=not args.no_content)
    text = json.dumps(data, indent=2)

    if args.output:
        Path(args.output).write_text(text + "\n")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(text + "\n")
    return 0
