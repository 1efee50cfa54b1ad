"""Checkable text for a document identifier, raw or as rendered by an external tool."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

from ..core.errors import ResolutionError
from ..core.logging import log_event
from ..core.process import run_command

if TYPE_CHECKING:
    from ..core.context import RunContext

CACHE_SUFFIX = ".txt"
PATH_PLACEHOLDER = "{path}"


class ContentResolver(Protocol):
    def resolve(self, identifier: str) -> str: ...


class RawResolver:
    def __init__(self, repo_root: Path) -> None:
        self._repo_root = repo_root

    def resolve(self, identifier: str) -> str:
        path = self._repo_root / identifier
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ResolutionError(f"cannot read `{identifier}`: {exc.strerror or exc}") from exc
        # surrogateescape keeps undecodable bytes while tabs and newlines stay literal
        return data.decode("utf-8", errors="surrogateescape")


class RenderedResolver:
    """Reads ``<cache_dir>/<identifier>.txt``, regenerating it with ``render_command`` when configured."""

    def __init__(
        self,
        repo_root: Path,
        cache_dir: Path,
        *,
        render_command: Sequence[str] = (),
        ctx: RunContext | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._cache_dir = cache_dir if cache_dir.is_absolute() else repo_root / cache_dir
        self._render_command = tuple(render_command)
        self._ctx = ctx

    def cache_path(self, identifier: str) -> Path:
        return self._cache_dir / f"{identifier}{CACHE_SUFFIX}"

    def _is_stale(self, cached: Path, source: Path) -> bool:
        if not cached.is_file():
            return True
        if not self._render_command or not source.is_file():
            return False
        return cached.stat().st_mtime < source.stat().st_mtime

    def _render(self, identifier: str, source: Path, cached: Path) -> str:
        if not source.is_file():
            raise ResolutionError(f"cannot render `{identifier}`: source file not found")
        argv = [part.replace(PATH_PLACEHOLDER, str(source)) for part in self._render_command]
        result = run_command(argv, self._repo_root, ctx=self._ctx)
        if result.code != 0:
            detail = result.stderr.strip() or f"exit code {result.code}"
            raise ResolutionError(f"render command failed for `{identifier}`: {detail}")
        cached.parent.mkdir(parents=True, exist_ok=True)
        cached.write_text(result.stdout, encoding="utf-8")
        if self._ctx is not None:
            log_event(self._ctx, "info", "resolver", "cache-write", document=identifier, path=str(cached))
        return result.stdout

    def resolve(self, identifier: str) -> str:
        cached = self.cache_path(identifier)
        source = self._repo_root / identifier
        if self._is_stale(cached, source):
            if not self._render_command:
                raise ResolutionError(f"no rendered cache entry for `{identifier}` (expected {cached})")
            return self._render(identifier, source, cached)
        try:
            return cached.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ResolutionError(f"rendered cache entry for `{identifier}` is not valid UTF-8") from exc
        except OSError as exc:
            raise ResolutionError(f"cannot read rendered cache entry for `{identifier}`: {exc.strerror or exc}") from exc


__all__ = ["CACHE_SUFFIX", "ContentResolver", "RawResolver", "RenderedResolver"]
