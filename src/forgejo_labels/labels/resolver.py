"""Label name/ID resolution with a per-repository label cache.

Callers may refer to labels either by numeric ID ("47") or by name
("ready-to-merge"). The resolver fetches each repository's labels once, keeps
them for the lifetime of the process and translates a mixed list of tokens into
label IDs.

Notes:
    Only the first page (100 labels) is fetched. Repositories with more labels
    resolve against an incomplete catalog.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from forgejo_labels.labels.types import (
    LabelFetchError,
    LabelResolutionError,
    RepoLabel,
    ResolutionResult,
    ResolvedLabel,
)

logger = logging.getLogger(__name__)

LABELS_PAGE_SIZE = 100
MAX_SUGGESTIONS = 3

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class LabelSource(Protocol):
    """Anything that can list a repository's labels (one page at a time)."""

    def list_repo_labels(
        self, owner: str, repo: str, *, page: int = 1, limit: int = LABELS_PAGE_SIZE
    ) -> list[RepoLabel]: ...


@dataclass(frozen=True, slots=True)
class LabelCatalog:
    """Both lookup directions for one repository, built from a single fetch."""

    name_to_id: dict[str, int] = field(default_factory=dict)
    id_to_name: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_labels(cls, labels: Iterable[RepoLabel]) -> LabelCatalog:
        name_to_id: dict[str, int] = {}
        id_to_name: dict[int, str] = {}
        for label in labels:
            # Names differing only by case collapse; the last one fetched wins.
            name_to_id[label.name.lower()] = label.id
            id_to_name[label.id] = label.name
        return cls(name_to_id=name_to_id, id_to_name=id_to_name)

    def lookup_by_name(self, name: str) -> int | None:
        return self.name_to_id.get(name.lower())

    def find_name_by_id(self, label_id: int) -> str | None:
        return self.id_to_name.get(label_id)

    def suggestions(self, value: str, *, limit: int = MAX_SUGGESTIONS) -> list[str]:
        """Return up to ``limit`` names that contain, or are contained in, ``value``."""

        needle = value.lower()
        matches = sorted(name for name in self.name_to_id if needle in name or name in needle)
        return matches[:limit]


def _parse_label_id(token: str) -> int | None:
    """Parse a base-10 signed 64-bit integer, or return None if ``token`` isn't one."""

    if not _DECIMAL_RE.fullmatch(token):
        return None
    # More than 19 significant digits never fits in 64 bits.
    if len(token.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        return None
    value = int(token)
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


def fetch_repository_labels(source: LabelSource, owner: str, repo: str) -> list[RepoLabel]:
    """Fetch the first page of labels for ``owner/repo``."""

    try:
        return source.list_repo_labels(owner, repo, page=1, limit=LABELS_PAGE_SIZE)
    except Exception as e:
        raise LabelFetchError(f"failed to list labels: {e}", owner=owner, repo=repo) from e


class LabelResolver:
    """Resolve label tokens (IDs or names) to label IDs for a repository.

    Safe to share between threads. Each repository's labels are fetched at most
    once until :meth:`clear_cache` is called.
    """

    def __init__(self, source: LabelSource) -> None:
        self._source = source
        self._cache: dict[str, LabelCatalog] = {}
        self._lock = threading.Lock()

    def resolve_label_ids(self, owner: str, repo: str, labels: Sequence[str]) -> ResolutionResult:
        """Resolve ``labels`` to IDs, in order.

        Each token may be a positive numeric ID or a label name (matched
        case-insensitively). Numeric IDs are accepted even when the repository's
        catalog doesn't list them.

        Raises:
            LabelResolutionError: On the first token that can't be resolved.
            LabelFetchError: If the repository's labels could not be fetched.
        """

        if not labels:
            return ResolutionResult([], [])

        logger.debug(
            "Resolving labels",
            extra={"repository": f"{owner}/{repo}", "count": len(labels)},
        )

        catalog = self._get_catalog(owner, repo)

        label_ids: list[int] = []
        resolved: list[ResolvedLabel] = []
        for raw in labels:
            token = raw.strip()
            if not token:
                raise LabelResolutionError("", "empty label not allowed")

            label_id = _parse_label_id(token)
            if label_id is not None:
                if label_id <= 0:
                    raise LabelResolutionError(token, "ID must be positive")
                name = catalog.find_name_by_id(label_id) or token
                label_ids.append(label_id)
                resolved.append(ResolvedLabel(id=label_id, name=name))
                continue

            found = catalog.lookup_by_name(token)
            if found is None:
                raise LabelResolutionError(
                    token,
                    f"not found in repository {owner}/{repo}",
                    catalog.suggestions(token),
                )
            label_ids.append(found)
            resolved.append(ResolvedLabel(id=found, name=token))

        logger.debug("Resolved labels", extra={"count": len(label_ids)})
        return ResolutionResult(label_ids, resolved)

    def _get_catalog(self, owner: str, repo: str) -> LabelCatalog:
        key = f"{owner}/{repo}"

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Using cached labels", extra={"repository": key})
            return cached

        with self._lock:
            # Another thread may have populated the entry while we waited.
            cached = self._cache.get(key)
            if cached is not None:
                return cached

            logger.debug("Fetching labels from API", extra={"repository": key})
            try:
                labels = fetch_repository_labels(self._source, owner, repo)
            except LabelFetchError as e:
                raise LabelFetchError(
                    f"failed to fetch repository labels: {e}", owner=owner, repo=repo
                ) from e

            catalog = LabelCatalog.from_labels(labels)
            self._cache[key] = catalog

        logger.debug("Cached labels", extra={"repository": key, "count": len(labels)})
        return catalog

    def clear_cache(self) -> None:
        """Forget every cached repository."""

        with self._lock:
            self._cache = {}

    def get_cache_size(self) -> int:
        """Return the number of repositories currently cached."""

        return len(self._cache)
