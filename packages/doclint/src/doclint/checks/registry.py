from __future__ import annotations

from functools import partial
from typing import Iterable

from ..config import LintConfig
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE
from .model import ContentMode, FileSet, RuleDef
from .text_rules import (
    check_bracket_terminology,
    check_stray_double_dots,
    check_tab_characters,
    check_trailing_newline,
)

RULE_NAMES: tuple[str, ...] = (
    "stray-double-dots",
    "bracket-terminology",
    "trailing-newline",
    "tab-characters",
)


def build_rules(config: LintConfig) -> tuple[RuleDef, ...]:
    raw_fileset = FileSet.TRACKED if config.include_all_tracked_files else FileSet.DOCS
    return (
        RuleDef(
            "stray-double-dots",
            "forbid a word followed by exactly two dots in rendered docs",
            ContentMode.RENDERED,
            FileSet.DOCS,
            check_stray_double_dots,
            exclusions=config.exclusions_for("stray-double-dots"),
            fix_hint="Use a single period or a three-dot ellipsis.",
        ),
        RuleDef(
            "bracket-terminology",
            "require curly braces and square/angle/lenticular brackets in rendered docs",
            ContentMode.RENDERED,
            FileSet.DOCS,
            partial(check_bracket_terminology, exempt=frozenset(config.bracket_exempt)),
            exclusions=config.exclusions_for("bracket-terminology"),
            fix_hint='Write "curly braces", and qualify brackets as square, angle or lenticular.',
        ),
        RuleDef(
            "trailing-newline",
            "require files to end with a newline",
            ContentMode.RAW,
            raw_fileset,
            check_trailing_newline,
            exclusions=config.exclusions_for("trailing-newline"),
            fix_hint="Add a newline at the end of the file.",
        ),
        RuleDef(
            "tab-characters",
            "forbid tab characters in tracked files",
            ContentMode.RAW,
            raw_fileset,
            check_tab_characters,
            requires_vcs_checkout=config.require_vcs_checkout,
            exclusions=config.exclusions_for("tab-characters"),
            fix_hint="Replace tabs with spaces.",
        ),
    )


def select_rules(rules: Iterable[RuleDef], names: Iterable[str]) -> tuple[RuleDef, ...]:
    """Rules whose name is in ``names``, in registry order; all rules when ``names`` is empty."""
    wanted = tuple(dict.fromkeys(names))
    available = tuple(rules)
    if not wanted:
        return available
    known = {rule.name for rule in available}
    unknown = sorted(name for name in wanted if name not in known)
    if unknown:
        raise ScriptError(f"unknown rule(s): {', '.join(unknown)} (known: {', '.join(RULE_NAMES)})", ERR_USAGE, "usage_error")
    return tuple(rule for rule in available if rule.name in wanted)


__all__ = ["RULE_NAMES", "build_rules", "select_rules"]
