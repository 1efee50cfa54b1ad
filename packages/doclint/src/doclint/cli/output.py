"""CLI payload output helpers."""

from __future__ import annotations

import json

from ..contracts.ids import ERROR


def emit(payload: dict[str, object], as_json: bool) -> None:
    """Print ``payload`` on one line for machines, indented for people."""
    print(json.dumps(payload, sort_keys=True) if as_json else json.dumps(payload, indent=2, sort_keys=True))


def resolve_output_format(*, cli_json: bool, cli_format: str | None, ci_present: bool) -> str:
    if cli_json:
        return "json"
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", run_id: str = "") -> str:
    if not as_json:
        return f"doclint: {message}"
    return json.dumps(
        {
            "schema_name": ERROR,
            "schema_version": 1,
            "tool": "doclint",
            "status": "error",
            "run_id": run_id,
            "errors": [{"code": code, "kind": kind, "message": message}],
        },
        sort_keys=True,
    )
