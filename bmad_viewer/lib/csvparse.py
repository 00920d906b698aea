"""
CSV extractor for BMAD manifest files.

Handles the subset of RFC 4180 the manifests use: quoted fields, commas
inside quotes, and "" as an escaped quote. Fields are trimmed. Rows with
the wrong number of columns are kept (padded when short) and reported as
warnings.
"""

import logging
import re
from pathlib import Path

from bmad_viewer.lib.result import Result, create_result, error_result

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r'\r?\n')


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields."""
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if in_quotes:
            if char == '"' and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ',':
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def parse_csv_content(content: str, source: str = "unknown") -> Result:
    """Parse CSV text into a list of dicts keyed by the header row."""
    lines = [line for line in LINE_SPLIT_RE.split(content) if line.strip()]
    if not lines:
        return create_result([], [], ["Empty CSV file"])

    headers = parse_csv_line(lines[0])
    if not any(headers):
        return error_result(f"No headers found in {source}")

    rows = []
    warnings = []
    for index, line in enumerate(lines[1:], 2):
        values = parse_csv_line(line)
        if len(values) != len(headers):
            warnings.append(
                f"Row {index} in {source}: expected {len(headers)} columns, got {len(values)}"
            )
            while len(values) < len(headers):
                values.append('')
        rows.append({header: values[j] for j, header in enumerate(headers)})

    return create_result(rows, [], warnings)


def parse_csv(filepath) -> Result:
    """Read and parse a CSV file."""
    path = Path(filepath)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return error_result(e, [f"Failed to read {path}"])
    return parse_csv_content(content, str(path))
