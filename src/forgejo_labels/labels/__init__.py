"""Label name/ID resolution."""

from forgejo_labels.labels.resolver import (
    LabelCatalog,
    LabelResolver,
    LabelSource,
    fetch_repository_labels,
)
from forgejo_labels.labels.types import (
    LabelFetchError,
    LabelResolutionError,
    RepoLabel,
    ResolutionResult,
    ResolvedLabel,
)

__all__ = [
    "LabelCatalog",
    "LabelFetchError",
    "LabelResolutionError",
    "LabelResolver",
    "LabelSource",
    "RepoLabel",
    "ResolutionResult",
    "ResolvedLabel",
    "fetch_repository_labels",
]
