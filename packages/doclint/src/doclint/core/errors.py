from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONTEXT


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class EnumerationError(ScriptError):
    """Candidate file source is unavailable (no git listing, no docs directory)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONTEXT, "no_candidate_files")


class ResolutionError(ScriptError):
    """A listed document has no checkable text."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONTEXT, "content_unresolvable")
