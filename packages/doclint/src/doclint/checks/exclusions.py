"""Static path predicates that drop documents before a rule sees them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping

MatchKind = Literal["equals", "contains"]
_MATCH_KINDS: tuple[MatchKind, ...] = ("equals", "contains")


@dataclass(frozen=True, order=True)
class ExclusionPredicate:
    value: str
    match: MatchKind = "equals"

    def __post_init__(self) -> None:
        value = str(self.value).strip().replace("\\", "/")
        if not value:
            raise ValueError("exclusion value cannot be empty")
        if self.match not in _MATCH_KINDS:
            raise ValueError(f"invalid exclusion match `{self.match}`: must be one of {list(_MATCH_KINDS)}")
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, raw: str | Mapping[str, str]) -> "ExclusionPredicate":
        """Accept ``{"equals": path}``, ``{"contains": fragment}`` or a bare path string."""
        if isinstance(raw, str):
            return cls(raw)
        if len(raw) != 1:
            raise ValueError(f"exclusion must have exactly one of {list(_MATCH_KINDS)}: {dict(raw)}")
        match, value = next(iter(raw.items()))
        if match not in _MATCH_KINDS:
            raise ValueError(f"invalid exclusion match `{match}`: must be one of {list(_MATCH_KINDS)}")
        return cls(str(value), match)  # type: ignore[arg-type]

    def matches(self, identifier: str) -> bool:
        if self.match == "equals":
            return identifier == self.value
        return self.value in identifier

    def describe(self) -> str:
        return f"{self.match}:{self.value}"


def is_excluded(identifier: str, predicates: Iterable[ExclusionPredicate]) -> bool:
    return any(predicate.matches(identifier) for predicate in predicates)


def apply_exclusions(identifiers: Iterable[str], predicates: Iterable[ExclusionPredicate]) -> tuple[str, ...]:
    frozen = tuple(predicates)
    return tuple(identifier for identifier in identifiers if not is_excluded(identifier, frozen))


__all__ = ["ExclusionPredicate", "MatchKind", "apply_exclusions", "is_excluded"]
