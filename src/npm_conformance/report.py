"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .models import AssertionResult


@dataclass(frozen=True)
class Report:
    """Ordered results of one conformance run."""

    root: Path
    package: str
    results: tuple[AssertionResult, ...]

    @property
    def passed(self) -> bool:
        """A run is green only when every result passed; there is no partial success."""
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> list[AssertionResult]:
        return [result for result in self.results if not result.passed]

    @property
    def totals(self) -> dict[str, int]:
        failed = len(self.failures)
        return {
            "assertions": len(self.results),
            "passed": len(self.results) - failed,
            "failed": failed,
        }

    def get(self, assertion_id: str) -> AssertionResult | None:
        for result in self.results:
            if result.assertion_id == assertion_id:
                return result
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "version": "1",
            "root": str(self.root),
            "package": self.package,
            "passed": self.passed,
            "totals": self.totals,
            "results": [result.to_dict() for result in self.results],
        }


def aggregate(root: Path, package: str, results: Iterable[AssertionResult]) -> Report:
    """Fold per-assertion results, in evaluation order, into a report."""
    return Report(root=root, package=package, results=tuple(results))
