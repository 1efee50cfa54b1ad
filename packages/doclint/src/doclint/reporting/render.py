from __future__ import annotations

import json
from typing import Any

from ..checks.model import CheckResult, CheckRunReport, CheckStatus
from ..contracts.ids import CHECK_RUN
from ..contracts.validate import validate_self


def results_as_rows(results: tuple[CheckResult, ...]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for result in results:
        row: dict[str, Any] = {
            "rule": result.rule,
            "document": result.document,
            "status": result.status.value.upper(),
            "diagnostics": list(result.diagnostics),
        }
        if result.reason:
            row["reason"] = result.reason
        rows.append(row)
    return rows


def build_report_payload(report: CheckRunReport, *, run_id: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": CHECK_RUN,
        "schema_version": 1,
        "tool": "doclint",
        "kind": "check-run",
        "run_id": run_id,
        "status": report.status.value,
        "summary": dict(report.summary),
        "rows": results_as_rows(report.rows),
    }
    if report.skip_reason:
        payload["skip_reason"] = report.skip_reason
    return validate_self(CHECK_RUN, payload)


def render_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, sort_keys=True)


def text_row_lines(row: CheckResult) -> list[str]:
    if row.status == CheckStatus.SKIP:
        return [f"SKIP {row.rule}: {row.reason}"]
    lines = [f"{row.status.value.upper()} {row.rule} {row.document}"]
    lines.extend(f"  - {item}" for item in row.diagnostics)
    return lines


def tap_plan_line(total: int, skip_reason: str = "") -> str:
    if total == 0:
        return f"1..0 # SKIP {skip_reason}".rstrip()
    return f"1..{total}"


def tap_row_lines(number: int, row: CheckResult) -> list[str]:
    if row.status == CheckStatus.SKIP:
        return [f"# SKIP {row.rule}: {row.reason}"]
    prefix = "ok" if row.status == CheckStatus.PASS else "not ok"
    lines = [f"{prefix} {number} - {row.rule}: {row.document}"]
    lines.extend(f"#   {item}" for item in row.diagnostics)
    return lines


def summary_line(report: CheckRunReport) -> str:
    summary = report.summary
    line = (
        f"summary: status={report.status.value} passed={int(summary.get('passed', 0))} "
        f"failed={int(summary.get('failed', 0))} skipped={int(summary.get('skipped', 0))} "
        f"total={int(summary.get('total', 0))}"
    )
    if report.skip_reason:
        line += f" reason={report.skip_reason}"
    return line


def text_footer_lines(report: CheckRunReport) -> list[str]:
    out: list[str] = []
    failed = report.failures
    if failed:
        out.append("failing checks:")
        out.extend(f"- {row.rule}: {row.document}" for row in failed)
    out.append(summary_line(report))
    return out


__all__ = [
    "build_report_payload",
    "render_json",
    "results_as_rows",
    "summary_line",
    "tap_plan_line",
    "tap_row_lines",
    "text_footer_lines",
    "text_row_lines",
]
