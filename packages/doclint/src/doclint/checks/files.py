from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from ..core.errors import EnumerationError
from ..core.git import Git
from .exclusions import ExclusionPredicate, apply_exclusions
from .model import FileSet


@runtime_checkable
class GitView(Protocol):
    def ls_files(self) -> list[str]: ...


class FileEnumerator:
    """Stable, restartable candidate lists for each file set.

    Listings are computed once per enumerator; exclusions are applied per call so
    every rule can carry its own denylist.
    """

    def __init__(
        self,
        repo_root: Path,
        *,
        docs_dir: str,
        doc_suffixes: Iterable[str],
        git: GitView | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._docs_dir = docs_dir
        self._doc_suffixes = tuple(suffix.lower() for suffix in doc_suffixes)
        self._git = git or Git(repo_root)
        self._listings: dict[FileSet, tuple[str, ...]] = {}

    def enumerate(self, kind: FileSet, exclusions: Iterable[ExclusionPredicate] = ()) -> tuple[str, ...]:
        if kind not in self._listings:
            self._listings[kind] = self._tracked_files() if kind == FileSet.TRACKED else self._doc_files()
        return apply_exclusions(self._listings[kind], exclusions)

    def _tracked_files(self) -> tuple[str, ...]:
        listed = self._git.ls_files()
        # Submodule entries and tracked-but-deleted paths are not regular files.
        return tuple(sorted({rel for rel in listed if (self._repo_root / rel).is_file()}))

    def _doc_files(self) -> tuple[str, ...]:
        docs_root = self._repo_root / self._docs_dir
        if not docs_root.is_dir():
            raise EnumerationError(f"no candidate files: documentation directory `{self._docs_dir}` not found under {self._repo_root}")
        return tuple(
            sorted(
                path.relative_to(self._repo_root).as_posix()
                for path in docs_root.rglob("*")
                if path.is_file() and path.suffix.lower() in self._doc_suffixes
            )
        )


__all__ = ["FileEnumerator", "GitView"]
