"""House-style rules over raw source or rendered documentation text.

Every rule is a pure function ``(identifier, text) -> Verdict``; none of them
reads other files or mutates its input.
"""

from __future__ import annotations

import re
from typing import Iterable

from .model import Verdict

# A letter (any script, no digits or underscore) followed by exactly two dots and then whitespace/EOL.
_STRAY_DOUBLE_DOTS = re.compile(r"[^\W\d_]\.\.(?=\s|$)")
_WORD = re.compile(r"\w+")
_WHITESPACE_RUN = re.compile(r"\s+")

BENIGN_PHRASES: tuple[str, ...] = ("Opening bracket is required for",)
BRACE_TERMS = frozenset({"braces"})
BRACE_QUALIFIERS = frozenset({"curly"})
BRACKET_TERMS = frozenset({"bracket", "brackets", "bracketed"})
BRACKET_QUALIFIERS = frozenset({"square", "angle", "lenticular"})

_EXCERPT_RADIUS = 30


def check_stray_double_dots(identifier: str, text: str) -> Verdict:
    offending = [
        f"{lineno}: {line.strip()}"
        for lineno, line in enumerate(text.split("\n"), start=1)
        if _STRAY_DOUBLE_DOTS.search(line)
    ]
    return Verdict.fail(*offending) if offending else Verdict.ok()


def normalize_prose(text: str) -> str:
    collapsed = _WHITESPACE_RUN.sub(" ", text)
    for phrase in BENIGN_PHRASES:
        collapsed = collapsed.replace(phrase, "")
    return collapsed


def _excerpt(text: str, start: int, end: int) -> str:
    lo = max(0, start - _EXCERPT_RADIUS)
    hi = min(len(text), end + _EXCERPT_RADIUS)
    return ("..." if lo else "") + text[lo:hi].strip() + ("..." if hi < len(text) else "")


def unqualified_terms(text: str, terms: Iterable[str], qualifiers: Iterable[str]) -> list[str]:
    """Whole-word ``terms`` whose immediately preceding word is not one of ``qualifiers``.

    Matching is case-insensitive and only whitespace may separate the qualifier from the term.
    """
    wanted = frozenset(term.lower() for term in terms)
    allowed = frozenset(word.lower() for word in qualifiers)
    qualifier_hint = " / ".join(f'"{word}"' for word in sorted(allowed))
    tokens = list(_WORD.finditer(text))
    diagnostics: list[str] = []
    for index, token in enumerate(tokens):
        if token.group(0).lower() not in wanted:
            continue
        previous = tokens[index - 1] if index else None
        if previous is not None:
            gap = text[previous.end() : token.start()]
            if gap.isspace() and previous.group(0).lower() in allowed:
                continue
        diagnostics.append(
            f'"{token.group(0)}" not preceded by {qualifier_hint}: {_excerpt(text, token.start(), token.end())}'
        )
    return diagnostics


def check_bracket_terminology(identifier: str, text: str, *, exempt: frozenset[str] = frozenset()) -> Verdict:
    prose = normalize_prose(text)
    diagnostics = unqualified_terms(prose, BRACE_TERMS, BRACE_QUALIFIERS)
    if identifier not in exempt:
        diagnostics.extend(unqualified_terms(prose, BRACKET_TERMS, BRACKET_QUALIFIERS))
    return Verdict.fail(*diagnostics) if diagnostics else Verdict.ok()


def check_trailing_newline(identifier: str, text: str) -> Verdict:
    # Empty files have no last character and pass.
    if not text or text.endswith("\n"):
        return Verdict.ok()
    return Verdict.fail(f"{identifier}: file does not end with a newline")


def tab_line_numbers(text: str) -> list[int]:
    return [lineno for lineno, line in enumerate(text.split("\n"), start=1) if "\t" in line]


def check_tab_characters(identifier: str, text: str) -> Verdict:
    lines = tab_line_numbers(text)
    if not lines:
        return Verdict.ok()
    return Verdict.fail(f"tab characters on lines {lines}")


__all__ = [
    "BENIGN_PHRASES",
    "BRACE_QUALIFIERS",
    "BRACE_TERMS",
    "BRACKET_QUALIFIERS",
    "BRACKET_TERMS",
    "check_bracket_terminology",
    "check_stray_double_dots",
    "check_tab_characters",
    "check_trailing_newline",
    "normalize_prose",
    "tab_line_numbers",
    "unqualified_terms",
]
