from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping

from .exclusions import ExclusionPredicate


class ContentMode(str, Enum):
    RAW = "raw"
    RENDERED = "rendered"


class FileSet(str, Enum):
    TRACKED = "tracked"
    DOCS = "docs"


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class RunStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Verdict:
    failed: bool = False
    diagnostics: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "diagnostics", tuple(str(item) for item in self.diagnostics))

    @classmethod
    def ok(cls) -> "Verdict":
        return cls()

    @classmethod
    def fail(cls, *diagnostics: str) -> "Verdict":
        return cls(failed=True, diagnostics=tuple(diagnostics))

    @property
    def passed(self) -> bool:
        return not self.failed


RuleFn = Callable[[str, str], Verdict]


@dataclass(frozen=True)
class RuleDef:
    name: str
    description: str
    mode: ContentMode
    fileset: FileSet
    fn: RuleFn
    requires_vcs_checkout: bool = False
    exclusions: tuple[ExclusionPredicate, ...] = ()
    fix_hint: str = "Review the diagnostics and fix the reported text."

    def evaluate(self, identifier: str, text: str) -> Verdict:
        return evaluate(self, identifier, text)


def evaluate(rule: RuleDef, identifier: str, text: str) -> Verdict:
    verdict = rule.fn(identifier, text)
    if not isinstance(verdict, Verdict):
        raise TypeError(f"rule `{rule.name}` returned {type(verdict).__name__}, expected Verdict")
    return verdict


@dataclass(frozen=True)
class CheckResult:
    rule: str
    document: str
    status: CheckStatus
    diagnostics: tuple[str, ...] = ()
    reason: str = ""

    @property
    def canonical_key(self) -> tuple[str, str]:
        return (self.rule, self.document)


@dataclass(frozen=True)
class CheckRunReport:
    status: RunStatus
    rows: tuple[CheckResult, ...] = ()
    checks_executed: int = 0
    skip_reason: str = ""
    summary: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.summary:
            object.__setattr__(
                self,
                "summary",
                {
                    "passed": sum(1 for row in self.rows if row.status == CheckStatus.PASS),
                    "failed": sum(1 for row in self.rows if row.status == CheckStatus.FAIL),
                    "skipped": sum(1 for row in self.rows if row.status == CheckStatus.SKIP),
                    "total": self.checks_executed,
                },
            )

    @property
    def failures(self) -> tuple[CheckResult, ...]:
        return tuple(row for row in self.rows if row.status == CheckStatus.FAIL)


__all__ = [
    "CheckResult",
    "CheckRunReport",
    "CheckStatus",
    "ContentMode",
    "FileSet",
    "RuleDef",
    "RuleFn",
    "RunStatus",
    "Verdict",
    "evaluate",
]
