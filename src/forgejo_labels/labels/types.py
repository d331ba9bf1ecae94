"""Label resolution result and error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from pydantic import BaseModel


@dataclass(frozen=True, slots=True)
class RepoLabel:
    """A repository label as returned by the forge."""

    id: int
    name: str
    color: str = ""
    description: str = ""


class ResolvedLabel(BaseModel):
    """A label with both its numeric ID and a display name."""

    id: int
    name: str


class ResolutionResult(NamedTuple):
    """Resolved label IDs and metadata, in input order."""

    label_ids: list[int]
    resolved_labels: list[ResolvedLabel]


class LabelResolutionError(Exception):
    """Raised when a single label token cannot be resolved.

    Attributes:
        input: The offending token (after whitespace trimming).
        reason: Human-readable reason.
        suggestions: Label names that look similar to the input, if any.
    """

    def __init__(self, input: str, reason: str, suggestions: list[str] | None = None) -> None:  # noqa: A002
        self.input = input
        self.reason = reason
        self.suggestions = list(suggestions or [])
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.suggestions:
            return (
                f"label '{self.input}' {self.reason}. "
                f"Did you mean: {', '.join(self.suggestions)}?"
            )
        return f"label '{self.input}' {self.reason}"


class LabelFetchError(RuntimeError):
    """Raised when a repository's labels could not be listed upstream."""

    def __init__(self, message: str, *, owner: str, repo: str) -> None:
        self.owner = owner
        self.repo = repo
        super().__init__(message)
