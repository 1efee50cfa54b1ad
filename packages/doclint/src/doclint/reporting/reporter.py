from __future__ import annotations

import threading
from typing import Callable

from ..checks.model import CheckResult, CheckRunReport, CheckStatus, RunStatus, Verdict
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL
from .render import tap_plan_line, tap_row_lines, text_footer_lines, text_row_lines

NOTHING_TO_CHECK = "nothing to check"

Emit = Callable[[str], None]


def _discard(_line: str) -> None:
    return None


class Reporter:
    """Owns the rows of one run and streams them in ``text`` or ``tap`` form.

    ``json`` streams nothing; the caller renders the finished report instead.
    """

    def __init__(self, fmt: str = "text", *, emit: Emit | None = None, quiet: bool = False) -> None:
        self._fmt = fmt
        self._emit = emit or _discard
        self._quiet = quiet
        self._lock = threading.Lock()
        self._rows: list[CheckResult] = []
        self._expected: int | None = None
        self._executed = 0
        self._skip_reason = ""

    def _write(self, lines: list[str]) -> None:
        for line in lines:
            self._emit(line)

    def begin(self, total_expected_checks: int, *, skip_reason: str = NOTHING_TO_CHECK) -> None:
        if self._expected is not None:
            raise ScriptError("reporter already started", ERR_INTERNAL, "internal_error")
        if total_expected_checks < 0:
            raise ScriptError(f"invalid check total: {total_expected_checks}", ERR_INTERNAL, "internal_error")
        self._expected = total_expected_checks
        if total_expected_checks == 0:
            self._skip_reason = skip_reason
        if self._fmt == "tap":
            self._write([tap_plan_line(total_expected_checks, self._skip_reason)])

    def _require_started(self) -> int:
        if self._expected is None:
            raise ScriptError("reporter used before begin()", ERR_INTERNAL, "internal_error")
        return self._expected

    def record(self, rule: str, identifier: str, verdict: Verdict) -> CheckResult:
        self._require_started()
        row = CheckResult(
            rule=rule,
            document=identifier,
            status=CheckStatus.FAIL if verdict.failed else CheckStatus.PASS,
            diagnostics=verdict.diagnostics,
        )
        with self._lock:
            self._rows.append(row)
            self._executed += 1
            number = self._executed
            if self._fmt == "tap":
                self._write(tap_row_lines(number, row))
            elif self._fmt == "text" and not (self._quiet and row.status == CheckStatus.PASS):
                self._write(text_row_lines(row))
        return row

    def skip(self, rule: str, reason: str) -> CheckResult:
        self._require_started()
        row = CheckResult(rule=rule, document="", status=CheckStatus.SKIP, reason=reason)
        with self._lock:
            self._rows.append(row)
            if self._fmt == "tap":
                self._write(tap_row_lines(0, row))
            elif self._fmt == "text":
                self._write(text_row_lines(row))
        return row

    def finish(self) -> CheckRunReport:
        expected = self._require_started()
        with self._lock:
            if self._executed != expected:
                raise ScriptError(
                    f"reporter recorded {self._executed} checks, expected {expected}",
                    ERR_INTERNAL,
                    "internal_error",
                )
            rows = tuple(self._rows)
        if any(row.status == CheckStatus.FAIL for row in rows):
            status = RunStatus.FAILED
        elif self._executed > 0:
            status = RunStatus.PASSED
        else:
            status = RunStatus.SKIPPED
        report = CheckRunReport(
            status=status,
            rows=rows,
            checks_executed=self._executed,
            skip_reason=self._skip_reason if status == RunStatus.SKIPPED else "",
        )
        if self._fmt == "text":
            self._write(text_footer_lines(report))
        return report


__all__ = ["NOTHING_TO_CHECK", "Reporter"]
