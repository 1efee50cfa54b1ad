from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeGit, git_init, requires_git, write_file

from doclint.checks.exclusions import ExclusionPredicate
from doclint.checks.files import FileEnumerator
from doclint.checks.model import FileSet
from doclint.core.errors import EnumerationError
from doclint.core.exit_codes import ERR_CONTEXT


def _enumerator(root: Path, git: FakeGit | None = None) -> FileEnumerator:
    return FileEnumerator(root, docs_dir="doc", doc_suffixes=(".md", ".rakudoc"), git=git or FakeGit())


def test_docs_listing_is_sorted_and_filtered_by_suffix(tmp_path: Path) -> None:
    write_file(tmp_path, "doc/z.md", "z\n")
    write_file(tmp_path, "doc/Language/a.rakudoc", "a\n")
    write_file(tmp_path, "doc/image.png", b"\x89PNG")
    write_file(tmp_path, "doc/B.MD", "b\n")
    write_file(tmp_path, "README.md", "outside docs\n")
    assert _enumerator(tmp_path).enumerate(FileSet.DOCS) == ("doc/B.MD", "doc/Language/a.rakudoc", "doc/z.md")


def test_exclusions_drop_matching_documents(tmp_path: Path) -> None:
    write_file(tmp_path, "doc/a.md", "a\n")
    write_file(tmp_path, "doc/Language/brackets.md", "b\n")
    enumerator = _enumerator(tmp_path)
    kept = enumerator.enumerate(FileSet.DOCS, (ExclusionPredicate("brackets", "contains"),))
    assert kept == ("doc/a.md",)
    assert enumerator.enumerate(FileSet.DOCS) == ("doc/Language/brackets.md", "doc/a.md")


def test_missing_docs_dir_is_an_environment_error(tmp_path: Path) -> None:
    with pytest.raises(EnumerationError) as excinfo:
        _enumerator(tmp_path).enumerate(FileSet.DOCS)
    assert excinfo.value.code == ERR_CONTEXT
    assert "no candidate files" in str(excinfo.value)


def test_empty_docs_dir_yields_empty_listing(tmp_path: Path) -> None:
    (tmp_path / "doc").mkdir()
    assert _enumerator(tmp_path).enumerate(FileSet.DOCS) == ()


def test_tracked_listing_skips_missing_paths_and_directories(tmp_path: Path) -> None:
    write_file(tmp_path, "b.txt", "b\n")
    write_file(tmp_path, "a.txt", "a\n")
    (tmp_path / "vendor/submodule").mkdir(parents=True)
    git = FakeGit(["b.txt", "deleted.txt", "vendor/submodule", "a.txt"])
    assert _enumerator(tmp_path, git).enumerate(FileSet.TRACKED) == ("a.txt", "b.txt")


def test_listing_is_computed_once_and_restartable(tmp_path: Path) -> None:
    write_file(tmp_path, "a.txt", "a\n")
    git = FakeGit(["a.txt"])
    enumerator = _enumerator(tmp_path, git)
    first = enumerator.enumerate(FileSet.TRACKED)
    second = enumerator.enumerate(FileSet.TRACKED, (ExclusionPredicate("LICENSE"),))
    assert first == second == ("a.txt",)
    assert git.calls == 1


def test_git_failure_propagates(tmp_path: Path) -> None:
    git = FakeGit(error=EnumerationError("no candidate files: git unavailable"))
    with pytest.raises(EnumerationError):
        _enumerator(tmp_path, git).enumerate(FileSet.TRACKED)


@pytest.mark.integration
@requires_git
def test_tracked_listing_reads_git_index(tmp_path: Path) -> None:
    write_file(tmp_path, "doc/a.md", "a\n")
    write_file(tmp_path, "LICENSE", "text\n")
    git_init(tmp_path)
    write_file(tmp_path, "untracked.txt", "u\n")
    enumerator = FileEnumerator(tmp_path, docs_dir="doc", doc_suffixes=(".md",))
    assert enumerator.enumerate(FileSet.TRACKED) == ("LICENSE", "doc/a.md")


@pytest.mark.integration
@requires_git
def test_tracked_listing_outside_checkout_is_an_environment_error(tmp_path: Path) -> None:
    enumerator = FileEnumerator(tmp_path, docs_dir="doc", doc_suffixes=(".md",))
    with pytest.raises(EnumerationError):
        enumerator.enumerate(FileSet.TRACKED)


@pytest.mark.integration
@requires_git
def test_tracked_listing_keeps_non_ascii_and_spaced_names(tmp_path: Path) -> None:
    write_file(tmp_path, "doc/café.md", "no newline")
    write_file(tmp_path, "doc/plain.md", "a\n")
    write_file(tmp_path, "doc/ padded .md", "b\n")
    git_init(tmp_path)
    enumerator = FileEnumerator(tmp_path, docs_dir="doc", doc_suffixes=(".md",))
    assert enumerator.enumerate(FileSet.TRACKED) == ("doc/ padded .md", "doc/café.md", "doc/plain.md")
