from __future__ import annotations

from pathlib import Path

from .errors import EnumerationError
from .process import run_command


def checkout_root(path: Path) -> Path | None:
    """Nearest ancestor of ``path`` (inclusive) holding a ``.git`` dir or worktree file."""
    resolved = path.resolve()
    for candidate in (resolved, *resolved.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def is_checkout(path: Path) -> bool:
    return checkout_root(path) is not None


def short_sha(repo_root: Path) -> str:
    if not is_checkout(repo_root):
        return "unknown"
    result = run_command(["git", "rev-parse", "--short", "HEAD"], repo_root)
    return (result.stdout.strip() if result.code == 0 else "") or "unknown"


class Git:
    """``git ls-files`` view of a working copy."""

    def __init__(self, repo_root: Path) -> None:
        self._repo_root = repo_root

    def ls_files(self) -> list[str]:
        # -z keeps names verbatim; without it git C-quotes non-ASCII paths
        result = run_command(["git", "ls-files", "-z"], self._repo_root)
        if result.code != 0:
            detail = result.stderr.strip() or f"exit code {result.code}"
            raise EnumerationError(f"no candidate files: `git ls-files` failed in {self._repo_root}: {detail}")
        return [name for name in result.stdout.split("\0") if name]


__all__ = ["Git", "checkout_root", "is_checkout", "short_sha"]
