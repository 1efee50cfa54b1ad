from __future__ import annotations

from pathlib import Path

import pytest

from doclint.checks.exclusions import ExclusionPredicate
from doclint.config import DEFAULT_EXCLUSIONS, LintConfig, load_config
from doclint.core.errors import ScriptError
from doclint.core.exit_codes import ERR_CONFIG
from helpers import write_file


def test_missing_pyproject_yields_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == LintConfig()
    assert config.docs_dir == "doc"
    assert config.include_all_tracked_files is True
    assert config.exclusions_for("trailing-newline") == DEFAULT_EXCLUSIONS["trailing-newline"]
    assert config.exclusions_for("stray-double-dots") == ()


def test_pyproject_without_table_yields_defaults(tmp_path: Path) -> None:
    write_file(tmp_path, "pyproject.toml", '[project]\nname = "x"\n')
    assert load_config(tmp_path).source == "defaults"


def test_pyproject_table_is_applied(tmp_path: Path) -> None:
    write_file(
        tmp_path,
        "pyproject.toml",
        """
[tool.doclint]
docs_dir = "docs"
doc_suffixes = [".md"]
render_command = ["pandoc", "-t", "plain", "{path}"]
include_all_tracked_files = false
require_vcs_checkout = false
rules = ["tab-characters"]
bracket_exempt = ["docs/glossary.md"]
""",
    )
    config = load_config(tmp_path)
    assert config.docs_dir == "docs"
    assert config.doc_suffixes == (".md",)
    assert config.render_command == ("pandoc", "-t", "plain", "{path}")
    assert config.include_all_tracked_files is False
    assert config.require_vcs_checkout is False
    assert config.rules == ("tab-characters",)
    assert config.bracket_exempt == ("docs/glossary.md",)
    assert config.source == str(tmp_path / "pyproject.toml")


def test_rule_exclusions_replace_defaults(tmp_path: Path) -> None:
    write_file(
        tmp_path,
        "pyproject.toml",
        """
[tool.doclint.exclusions]
tab-characters = [{ equals = "GNUmakefile" }, { contains = "vendor/" }, "LICENSE"]
""",
    )
    config = load_config(tmp_path)
    assert config.exclusions_for("tab-characters") == (
        ExclusionPredicate("GNUmakefile"),
        ExclusionPredicate("vendor/", "contains"),
        ExclusionPredicate("LICENSE"),
    )
    assert config.exclusions_for("trailing-newline") == DEFAULT_EXCLUSIONS["trailing-newline"]


def test_unknown_key_is_a_config_error(tmp_path: Path) -> None:
    write_file(tmp_path, "pyproject.toml", "[tool.doclint]\ndoc_dir = 'doc'\n")
    with pytest.raises(ScriptError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.code == ERR_CONFIG


def test_unknown_rule_in_exclusions_is_a_config_error(tmp_path: Path) -> None:
    write_file(tmp_path, "pyproject.toml", "[tool.doclint.exclusions]\nspelling = ['README']\n")
    with pytest.raises(ScriptError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.code == ERR_CONFIG


def test_invalid_toml_is_a_config_error(tmp_path: Path) -> None:
    write_file(tmp_path, "pyproject.toml", "[tool.doclint\n")
    with pytest.raises(ScriptError, match="invalid TOML") as excinfo:
        load_config(tmp_path)
    assert excinfo.value.code == ERR_CONFIG


def test_missing_explicit_file_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(ScriptError, match="config file not found") as excinfo:
        load_config(tmp_path, Path("doclint.toml"))
    assert excinfo.value.code == ERR_CONFIG


def test_explicit_file_may_hold_table_at_top_level(tmp_path: Path) -> None:
    write_file(tmp_path, "doclint.toml", 'docs_dir = "manual"\n')
    write_file(tmp_path, "pyproject.toml", '[tool.doclint]\ndocs_dir = "ignored"\n')
    assert load_config(tmp_path, Path("doclint.toml")).docs_dir == "manual"


def test_explicit_file_with_tool_table(tmp_path: Path) -> None:
    path = write_file(tmp_path, "conf/lint.toml", '[tool.doclint]\ncache_dir = "build/text"\n')
    assert load_config(tmp_path, path).cache_dir == "build/text"


def test_cache_dir_environment_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_file(tmp_path, "pyproject.toml", '[tool.doclint]\ncache_dir = "from-config"\n')
    monkeypatch.setenv("DOCLINT_CACHE_DIR", "/var/cache/doclint")
    assert load_config(tmp_path).cache_dir == "/var/cache/doclint"
