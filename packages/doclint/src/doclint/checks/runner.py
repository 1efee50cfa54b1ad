from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from ..config import LintConfig
from ..core.context import RunContext
from ..core.git import is_checkout
from ..core.logging import log_event
from ..reporting.reporter import NOTHING_TO_CHECK, Reporter
from .files import FileEnumerator
from .model import CheckRunReport, ContentMode, RuleDef, Verdict, evaluate
from .resolve import ContentResolver, RawResolver, RenderedResolver

NOT_A_CHECKOUT = "not inside a version-control checkout"


@dataclass(frozen=True)
class RulePlan:
    rule: RuleDef
    documents: tuple[str, ...] = ()
    skip_reason: str = ""


def default_resolvers(ctx: RunContext, config: LintConfig) -> dict[ContentMode, ContentResolver]:
    return {
        ContentMode.RAW: RawResolver(ctx.repo_root),
        ContentMode.RENDERED: RenderedResolver(
            ctx.repo_root,
            Path(config.cache_dir),
            render_command=config.render_command,
            ctx=ctx,
        ),
    }


def default_enumerator(ctx: RunContext, config: LintConfig) -> FileEnumerator:
    return FileEnumerator(ctx.repo_root, docs_dir=config.docs_dir, doc_suffixes=config.doc_suffixes)


def plan_rules(rules: Sequence[RuleDef], enumerator: FileEnumerator, *, in_checkout: bool) -> list[RulePlan]:
    plans: list[RulePlan] = []
    for rule in rules:
        if rule.requires_vcs_checkout and not in_checkout:
            plans.append(RulePlan(rule, skip_reason=NOT_A_CHECKOUT))
            continue
        documents = enumerator.enumerate(rule.fileset, rule.exclusions)
        plans.append(RulePlan(rule, documents, "" if documents else NOTHING_TO_CHECK))
    return plans


def _evaluate_documents(rule: RuleDef, documents: tuple[str, ...], resolver: ContentResolver, jobs: int) -> Iterator[tuple[str, Verdict]]:
    def _one(identifier: str) -> tuple[str, Verdict]:
        return identifier, evaluate(rule, identifier, resolver.resolve(identifier))

    if jobs <= 1:
        yield from map(_one, documents)
        return
    # pool.map yields in submission order, so reporting stays identical to a serial run
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        yield from pool.map(_one, documents)


def _empty_run_reason(plans: list[RulePlan]) -> str:
    if plans and all(plan.skip_reason == NOT_A_CHECKOUT for plan in plans):
        return NOT_A_CHECKOUT
    return NOTHING_TO_CHECK


def run_checks(
    ctx: RunContext,
    rules: Sequence[RuleDef],
    *,
    enumerator: FileEnumerator,
    resolvers: Mapping[ContentMode, ContentResolver],
    reporter: Reporter,
    jobs: int = 1,
    in_checkout: bool | None = None,
) -> CheckRunReport:
    """Apply every rule to its documents and return the finished report.

    Enumeration and resolution failures propagate; rule violations never stop the run.
    """
    checkout = is_checkout(ctx.repo_root) if in_checkout is None else in_checkout
    plans = plan_rules(rules, enumerator, in_checkout=checkout)
    total = sum(len(plan.documents) for plan in plans)
    reporter.begin(total, skip_reason=_empty_run_reason(plans))
    for plan in plans:
        rule = plan.rule
        if plan.skip_reason:
            log_event(ctx, "info", "runner", "rule-skip", rule=rule.name, reason=plan.skip_reason)
            reporter.skip(rule.name, plan.skip_reason)
            continue
        log_event(ctx, "info", "runner", "rule-start", rule=rule.name, mode=rule.mode.value, documents=len(plan.documents))
        for identifier, verdict in _evaluate_documents(rule, plan.documents, resolvers[rule.mode], jobs):
            if verdict.failed:
                log_event(ctx, "info", "runner", "check-fail", rule=rule.name, document=identifier, diagnostics=len(verdict.diagnostics))
            reporter.record(rule.name, identifier, verdict)
    report = reporter.finish()
    log_event(ctx, "info", "runner", "finish", status=report.status.value, total=report.checks_executed)
    return report


__all__ = [
    "NOT_A_CHECKOUT",
    "RulePlan",
    "default_enumerator",
    "default_resolvers",
    "plan_rules",
    "run_checks",
]
