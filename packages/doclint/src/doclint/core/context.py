from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .git import short_sha

OutputFormat = Literal["text", "json", "tap"]

_ROOT_MARKERS = (".git", "pyproject.toml")


def find_repo_root(start: Path | None = None) -> Path:
    """Closest ancestor of ``start`` holding a root marker, else ``start`` itself."""
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return origin


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool
    git_sha: str

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        repo_root: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        root = Path(repo_root).resolve() if repo_root else find_repo_root()
        sha = short_sha(root)
        default_run = f"doclint-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{sha}"
        return cls(
            run_id=run_id or os.environ.get("RUN_ID", default_run),
            repo_root=root,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
            git_sha=sha,
        )
