"""Verbose-mode event lines on stderr, as ``key=value`` text or JSON objects."""

from __future__ import annotations

import json
import sys
import threading
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import RunContext

# render commands may log from worker threads
_WRITE_LOCK = threading.Lock()


def _text_value(value: object) -> str:
    text = str(value)
    if not text or any(ch.isspace() or ch in '"=' for ch in text):
        return json.dumps(text)
    return text


def log_event(
    ctx: RunContext,
    level: str,
    component: str,
    action: str,
    *,
    rule: str | None = None,
    document: str | None = None,
    **fields: object,
) -> None:
    """Write one event for ``ctx`` unless the run is not verbose.

    ``rule`` and ``document`` lead the extra fields so events about one check line up.
    """
    if not ctx.verbose:
        return
    scope = {key: value for key, value in (("rule", rule), ("document", document)) if value is not None}
    event: dict[str, object] = {
        "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **scope,
        **dict(sorted(fields.items())),
    }
    if ctx.log_json:
        line = json.dumps(event)
    else:
        line = "doclint " + " ".join(f"{key}={_text_value(value)}" for key, value in event.items())
    with _WRITE_LOCK:
        sys.stderr.write(line + "\n")
        sys.stderr.flush()


__all__ = ["log_event"]
