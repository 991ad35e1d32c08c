"""Per-assertion result records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

NOT_FOUND = "not-found"
SHAPE_MISMATCH = "shape-mismatch"
FORBIDDEN_ARTIFACT = "forbidden-artifact"

_VALID_KINDS = {NOT_FOUND, SHAPE_MISMATCH, FORBIDDEN_ARTIFACT}


@dataclass(frozen=True)
class AssertionResult:
    """Outcome of one named check, with expected vs. observed values on failure."""

    assertion_id: str
    passed: bool
    kind: str | None = None
    expected: Any = None
    observed: Any = None
    detail: str = ""

    def __post_init__(self) -> None:
        if not self.assertion_id:
            raise ValueError("assertion_id must be non-empty")
        if self.passed and self.kind is not None:
            raise ValueError("Passing results cannot carry a failure kind")
        if not self.passed and self.kind not in _VALID_KINDS:
            raise ValueError(f"Invalid failure kind: {self.kind}")

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.assertion_id,
            "passed": self.passed,
        }
        if not self.passed:
            data["kind"] = self.kind
            data["expected"] = self.expected
            data["observed"] = self.observed
        if self.detail:
            data["detail"] = self.detail
        return data

    @classmethod
    def ok(cls, assertion_id: str, *, detail: str = "") -> AssertionResult:
        return cls(assertion_id=assertion_id, passed=True, detail=detail)

    @classmethod
    def not_found(
        cls, assertion_id: str, path: str, *, expected: Any = None, detail: str = ""
    ) -> AssertionResult:
        return cls(
            assertion_id=assertion_id,
            passed=False,
            kind=NOT_FOUND,
            expected=expected if expected is not None else path,
            observed="file absent",
            detail=detail or f"{path} does not exist",
        )

    @classmethod
    def mismatch(
        cls, assertion_id: str, *, expected: Any, observed: Any, detail: str = ""
    ) -> AssertionResult:
        return cls(
            assertion_id=assertion_id,
            passed=False,
            kind=SHAPE_MISMATCH,
            expected=expected,
            observed=observed,
            detail=detail,
        )

    @classmethod
    def forbidden(
        cls, assertion_id: str, *, expected: Any, observed: Any, detail: str = ""
    ) -> AssertionResult:
        return cls(
            assertion_id=assertion_id,
            passed=False,
            kind=FORBIDDEN_ARTIFACT,
            expected=expected,
            observed=observed,
            detail=detail,
        )
