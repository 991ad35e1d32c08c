"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

import json

from .report import Report


def _cell(value: object) -> str:
    if value is None:
        return "n/a"
    text = value if isinstance(value, str) else json.dumps(value, sort_keys=True)
    return text.replace("|", "\\|").replace("\n", " ")


def render_summary(report: Report) -> str:
    """Return a Markdown string with totals and a table of failed assertions."""
    totals = report.totals

    lines = []
    lines.append(f"# npm-conformance: {report.package}")
    lines.append("")
    status = "PASS" if report.passed else "FAIL"
    lines.append(
        f"Status: {status} | Assertions: {totals['assertions']} | "
        f"Passed: {totals['passed']} | Failed: {totals['failed']}"
    )
    lines.append("")
    lines.append("| Assertion | Kind | Expected | Observed |")
    lines.append("| --- | --- | --- | --- |")

    failures = report.failures
    if not failures:
        lines.append("| (all assertions) | passed | n/a | n/a |")

    for result in failures:
        lines.append(
            f"| {_cell(result.assertion_id)} | {_cell(result.kind)} | "
            f"{_cell(result.expected)} | {_cell(result.observed)} |"
        )

    return "\n".join(lines) + "\n"
