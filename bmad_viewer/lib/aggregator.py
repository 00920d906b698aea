"""
Per-build collector for parser errors and warnings.

One aggregator is created for every snapshot build and handed to each
builder, so the dashboard can show every problem in a single banner
without any build step aborting.
"""

from dataclasses import dataclass, field
from typing import Optional

from bmad_viewer.lib.result import Result, error_message


@dataclass
class AggregatedIssue:
    """A single error or warning tied to the file it came from."""
    source: str
    message: str
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def as_dict(self) -> dict[str, str]:
        return {"source": self.source, "message": self.message}


@dataclass
class ErrorAggregator:
    errors: list[AggregatedIssue] = field(default_factory=list)
    warnings: list[AggregatedIssue] = field(default_factory=list)

    def add_result(self, source, result: Result) -> None:
        """Record every error and warning carried by a Result."""
        source = str(source)
        for error in result.errors:
            self.errors.append(AggregatedIssue(source, error_message(error), error))
        for warning in result.warnings:
            self.warnings.append(AggregatedIssue(source, warning))

    def add_warning(self, source, message: str) -> None:
        """Record a warning raised by a builder rather than a parser."""
        self.warnings.append(AggregatedIssue(str(source), message))

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def get_summary(self) -> dict[str, list[dict[str, str]]]:
        """Flat summary for the warnings banner."""
        return {
            "errors": [e.as_dict() for e in self.errors],
            "warnings": [w.as_dict() for w in self.warnings],
        }
