"""
Result envelope for parser outputs.

Every extraction step returns a Result instead of raising, so a build can
always continue with whatever data was salvaged:

- data:     parsed value, or None when nothing usable was produced
- errors:   conditions that invalidate data
- warnings: non-fatal notes; data is still valid alongside them
"""

from dataclasses import dataclass, field
from typing import Any


class ParseError(Exception):
    """Error built from a plain string message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def error_message(error: BaseException) -> str:
    """Return the human readable message of an error."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or error.__class__.__name__


@dataclass(frozen=True)
class Result:
    data: Any = None
    errors: list[BaseException] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class Ok(Result):
    """Usable data, possibly with warnings."""


@dataclass(frozen=True)
class Err(Result):
    """At least one error; data is usually None."""


def _normalize_error(error) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return ParseError(str(error))


def create_result(data: Any = None, errors=None, warnings=None) -> Result:
    """Build a Result, normalizing single values and string errors."""
    if errors is None:
        errors = []
    elif isinstance(errors, (str, BaseException)):
        errors = [errors]
    if warnings is None:
        warnings = []
    elif isinstance(warnings, str):
        warnings = [warnings]

    errors = [_normalize_error(e) for e in errors]
    warnings = [str(w) for w in warnings]

    if errors:
        return Err(data=data, errors=errors, warnings=warnings)
    return Ok(data=data, errors=[], warnings=warnings)


def success_result(data: Any, warnings=None) -> Result:
    return create_result(data, [], warnings)


def error_result(error, warnings=None) -> Result:
    """Result with no data and a single error."""
    return create_result(None, [error], warnings)
