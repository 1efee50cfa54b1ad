from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .. import __version__
from ..checks.model import RunStatus
from ..checks.registry import build_rules, select_rules
from ..checks.runner import default_enumerator, default_resolvers, run_checks
from ..config import load_config
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CHECKS_FAILED, ERR_INTERNAL, ERR_USAGE, OK
from ..core.logging import log_event
from ..reporting.render import build_report_payload, render_json
from ..reporting.reporter import Reporter
from .output import emit, render_error, resolve_output_format


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="doclint", description="house-style checks for documentation sources")
    p.add_argument("--version", action="version", version=f"doclint {__version__}")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--repo-root", help="repository root (default: nearest ancestor with .git or pyproject.toml)")
    p.add_argument("--format", choices=["text", "json", "tap"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only report failures and skips")
    sub = p.add_subparsers(dest="cmd", required=True)

    check_p = sub.add_parser("check", help="run documentation rules")
    check_p.add_argument("--rule", action="append", default=[], help="rule name to run (repeatable; default: configured rules)")
    check_p.add_argument("--config", help="TOML file holding the doclint table (default: pyproject.toml)")
    check_p.add_argument("--jobs", type=int, default=1, help="evaluate documents on N worker threads")
    check_p.add_argument("--json", action="store_true", help="emit JSON output")

    rules_p = sub.add_parser("rules", help="list available rules")
    rules_p.add_argument("--config", help="TOML file holding the doclint table (default: pyproject.toml)")
    rules_p.add_argument("--json", action="store_true", help="emit JSON output")

    version_p = sub.add_parser("version", help="print version and git context")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    return p


def _print_line(line: str) -> None:
    print(line, flush=True)


def _config_path(ns: argparse.Namespace) -> Path | None:
    return Path(ns.config) if getattr(ns, "config", None) else None


def _run_check(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    if ns.jobs < 1:
        raise ScriptError(f"--jobs must be at least 1, got {ns.jobs}", ERR_USAGE, "usage_error")
    config = load_config(ctx.repo_root, _config_path(ns))
    rules = select_rules(build_rules(config), ns.rule or config.rules)
    fmt = "json" if as_json else ctx.output_format
    reporter = Reporter(fmt, emit=_print_line, quiet=ctx.quiet)
    report = run_checks(
        ctx,
        rules,
        enumerator=default_enumerator(ctx, config),
        resolvers=default_resolvers(ctx, config),
        reporter=reporter,
        jobs=ns.jobs,
    )
    if fmt == "json":
        print(render_json(build_report_payload(report, run_id=ctx.run_id)))
    return ERR_CHECKS_FAILED if report.status == RunStatus.FAILED else OK


def _run_rules(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    config = load_config(ctx.repo_root, _config_path(ns))
    enabled = {rule.name for rule in select_rules(build_rules(config), config.rules)}
    rows = [
        {
            "name": rule.name,
            "description": rule.description,
            "mode": rule.mode.value,
            "fileset": rule.fileset.value,
            "requires_vcs_checkout": rule.requires_vcs_checkout,
            "exclusions": [item.describe() for item in rule.exclusions],
            "fix_hint": rule.fix_hint,
            "enabled": rule.name in enabled,
        }
        for rule in build_rules(config)
    ]
    if as_json:
        emit({"schema_version": 1, "tool": "doclint", "status": "ok", "config": config.source, "rules": rows}, True)
        return OK
    for row in rows:
        marker = "" if row["enabled"] else " (disabled)"
        print(f"{row['name']}{marker}: {row['description']} [{row['mode']}, {row['fileset']}]")
    return OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    ctx: RunContext | None = None
    try:
        fmt = resolve_output_format(cli_json=bool(getattr(ns, "json", False)), cli_format=ns.format, ci_present=bool(os.environ.get("CI")))
        ctx = RunContext.from_args(ns.run_id, ns.repo_root, fmt, ns.verbose, ns.quiet, ns.log_json)  # type: ignore[arg-type]
        log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, repo_root=str(ctx.repo_root))
        as_json = ctx.output_format == "json"
        if ns.cmd == "version":
            if as_json:
                emit({"schema_version": 1, "tool": "doclint", "status": "ok", "version": __version__, "git_sha": ctx.git_sha}, True)
            else:
                print(f"doclint {__version__}+{ctx.git_sha}")
            return OK
        if ns.cmd == "rules":
            return _run_rules(ctx, ns, as_json)
        if ns.cmd == "check":
            return _run_check(ctx, ns, as_json)
        return ERR_USAGE
    except ScriptError as exc:
        print(
            render_error(
                as_json=(ctx is not None and ctx.output_format == "json"),
                message=str(exc),
                code=exc.code,
                kind=exc.kind,
                run_id=(ctx.run_id if ctx is not None else ""),
            ),
            file=sys.stderr,
        )
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(
                as_json=(ctx is not None and ctx.output_format == "json"),
                message=f"internal error: {exc}",
                code=ERR_INTERNAL,
                kind="internal_error",
                run_id=(ctx.run_id if ctx is not None else ""),
            ),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
