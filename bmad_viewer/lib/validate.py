"""
Schema checks for BMAD YAML files.

config.yaml and sprint-status.yaml are checked against the JSON Schemas in
bmad_viewer/schemas. The builders never fail on a schema problem; they
record the message as a warning and fall back to defaults.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class ValidationError(Exception):
    """A YAML document does not match its schema."""

    def __init__(self, schema_name: str, message: str, location: str = "(root)"):
        self.schema_name = schema_name
        self.location = location
        super().__init__(f"[{schema_name}] {message} at {location}")


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> jsonschema.Draft7Validator:
    schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not schema_path.is_file():
        raise ValidationError(schema_name, f"no schema file {schema_path.name}")
    return jsonschema.Draft7Validator(json.loads(schema_path.read_text()))


def validate(data: Any, schema_name: str) -> None:
    """Raise ValidationError for the most relevant schema violation in data."""
    error = best_match(_validator(schema_name).iter_errors(data))
    if error is None:
        return

    location = ".".join(str(p) for p in error.absolute_path) or "(root)"
    raise ValidationError(schema_name, error.message, location)


def check(data: Any, schema_name: str) -> str | None:
    """Validate without raising. Returns the error message, or None if valid."""
    try:
        validate(data, schema_name)
    except ValidationError as e:
        return str(e)
    return None
