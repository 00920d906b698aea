"""
YAML extractor.

Wraps PyYAML so syntax problems come back as a Result instead of an
exception.
"""

import logging
from pathlib import Path

import yaml

from bmad_viewer.lib.result import Result, create_result, error_result

logger = logging.getLogger(__name__)


def parse_yaml_content(content: str, source: str = "unknown") -> Result:
    """Parse a YAML string.

    Empty documents give data=None with a warning. Syntax errors give an
    error plus a warning with the 1-based line number when PyYAML knows it.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        warnings = [f"Failed to parse {source}"]
        mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
        if mark is not None and getattr(mark, "line", None) is not None:
            warnings.append(f"YAML syntax error at line {mark.line + 1} in {source}")
        return error_result(e, warnings)

    if data is None:
        return create_result(None, [], [f"Empty YAML content in {source}"])

    return create_result(data)


def parse_yaml(filepath) -> Result:
    """Read and parse a YAML file."""
    path = Path(filepath)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return error_result(e, [f"Failed to read {path}"])
    return parse_yaml_content(content, str(path))
