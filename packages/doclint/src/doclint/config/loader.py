from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from ..checks.exclusions import ExclusionPredicate
from ..contracts.ids import CONFIG
from ..contracts.validate import validate
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG

PYPROJECT = "pyproject.toml"

DEFAULT_EXCLUSIONS: Mapping[str, tuple[ExclusionPredicate, ...]] = {
    "trailing-newline": (
        ExclusionPredicate("LICENSE"),
        ExclusionPredicate("theme/assets/", "contains"),
        ExclusionPredicate(".rebuild-trigger"),
    ),
    "tab-characters": (
        ExclusionPredicate("LICENSE"),
        ExclusionPredicate("Makefile"),
        ExclusionPredicate("theme/assets/", "contains"),
    ),
}


@dataclass(frozen=True)
class LintConfig:
    docs_dir: str = "doc"
    doc_suffixes: tuple[str, ...] = (".md", ".rst", ".txt", ".pod6", ".rakudoc")
    cache_dir: str = ".doclint/cache"
    render_command: tuple[str, ...] = ()
    include_all_tracked_files: bool = True
    require_vcs_checkout: bool = True
    rules: tuple[str, ...] = ()
    exclusions: Mapping[str, tuple[ExclusionPredicate, ...]] = field(default_factory=lambda: dict(DEFAULT_EXCLUSIONS))
    bracket_exempt: tuple[str, ...] = ("doc/Language/brackets.md",)
    source: str = "defaults"

    def exclusions_for(self, rule_name: str) -> tuple[ExclusionPredicate, ...]:
        return tuple(self.exclusions.get(rule_name, ()))


def _read_table(path: Path, *, explicit: bool) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ScriptError(f"invalid TOML in {path}: {exc}", ERR_CONFIG, "config_error") from exc
    if "tool" in data or not explicit:
        section = data.get("tool", {}).get("doclint", {})
    else:
        # a dedicated config file holds the table at top level
        section = data
    if not isinstance(section, dict):
        raise ScriptError(f"invalid [tool.doclint] config in {path}", ERR_CONFIG, "config_error")
    return section


def _apply(cfg: LintConfig, data: dict[str, Any], source: str) -> LintConfig:
    exclusions = dict(cfg.exclusions)
    for rule_name, rows in data.get("exclusions", {}).items():
        exclusions[rule_name] = tuple(ExclusionPredicate.parse(row) for row in rows)
    return LintConfig(
        docs_dir=str(data.get("docs_dir", cfg.docs_dir)),
        doc_suffixes=tuple(data.get("doc_suffixes", cfg.doc_suffixes)),
        cache_dir=str(data.get("cache_dir", cfg.cache_dir)),
        render_command=tuple(data.get("render_command", cfg.render_command)),
        include_all_tracked_files=bool(data.get("include_all_tracked_files", cfg.include_all_tracked_files)),
        require_vcs_checkout=bool(data.get("require_vcs_checkout", cfg.require_vcs_checkout)),
        rules=tuple(data.get("rules", cfg.rules)),
        exclusions=exclusions,
        bracket_exempt=tuple(data.get("bracket_exempt", cfg.bracket_exempt)),
        source=source,
    )


def load_config(repo_root: Path, path: Path | None = None) -> LintConfig:
    """Load ``[tool.doclint]`` from ``path`` or the repository ``pyproject.toml``.

    A missing ``pyproject.toml`` yields the defaults; a missing explicit ``path`` is an error.
    ``DOCLINT_CACHE_DIR`` overrides ``cache_dir``.
    """
    config = LintConfig()
    if path is not None:
        target = path if path.is_absolute() else repo_root / path
        if not target.is_file():
            raise ScriptError(f"config file not found: {target}", ERR_CONFIG, "config_error")
        section = _read_table(target, explicit=True)
    else:
        target = repo_root / PYPROJECT
        section = _read_table(target, explicit=False) if target.is_file() else {}
    if section:
        validate(CONFIG, section, code=ERR_CONFIG)
        config = _apply(config, section, str(target))
    if env_val := os.environ.get("DOCLINT_CACHE_DIR"):
        config = replace(config, cache_dir=env_val)
    return config


__all__ = ["DEFAULT_EXCLUSIONS", "LintConfig", "PYPROJECT", "load_config"]
