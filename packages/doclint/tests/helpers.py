from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
SRC = ROOT / "packages/doclint/src"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


def run_doclint(*args: str, cwd: Path | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    full_env = os.environ.copy()
    full_env.pop("CI", None)
    full_env["PYTHONPATH"] = str(SRC)
    full_env.setdefault("RUN_ID", "pytest-run")
    full_env.update(env or {})
    return subprocess.run(
        [sys.executable, "-m", "doclint", *args],
        cwd=(cwd or ROOT),
        env=full_env,
        text=True,
        capture_output=True,
        check=False,
    )


def write_file(root: Path, rel: str, content: str | bytes) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_bytes(content.encode("utf-8"))
    return path


def write_rendered(root: Path, rel: str, text: str | bytes, cache_dir: str = ".doclint/cache") -> Path:
    """Place ``text`` in the rendering cache for document ``rel``."""
    return write_file(root, f"{cache_dir}/{rel}.txt", text)


def git_init(root: Path) -> None:
    subprocess.run(["git", "init", "-q"], cwd=root, check=True)
    subprocess.run(["git", "add", "-A"], cwd=root, check=True)


class FakeGit:
    def __init__(self, files: list[str] | None = None, error: Exception | None = None) -> None:
        self._files = list(files or [])
        self._error = error
        self.calls = 0

    def ls_files(self) -> list[str]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._files)
