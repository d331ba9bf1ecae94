"""Label tools callable by name with a mapping of arguments.

Each tool extracts and validates its arguments, calls the Forgejo client (via the
label resolver where labels may be given by name) and returns a text result.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import TypeAdapter

from forgejo_labels.client import ForgejoClient
from forgejo_labels.labels.resolver import LABELS_PAGE_SIZE, LabelResolver
from forgejo_labels.labels.types import RepoLabel, ResolvedLabel

logger = logging.getLogger(__name__)

_RESOLVED_LABELS = TypeAdapter(list[ResolvedLabel])


class ToolArgumentError(ValueError):
    """Raised when a tool is called with missing or invalid arguments."""


def _require_str(arguments: Mapping[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ToolArgumentError(f"{key} is required")
    return value.strip()


def _require_positive_int(arguments: Mapping[str, Any], key: str) -> int:
    value = arguments.get(key)
    if value is None or isinstance(value, bool):
        raise ToolArgumentError(f"{key} is required")

    # JSON numbers usually arrive as floats.
    number: int
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise ToolArgumentError(f"{key} must be an integer")

    if number <= 0:
        raise ToolArgumentError(f"{key} must be a positive integer")
    return number


def _optional_positive_int(arguments: Mapping[str, Any], key: str, default: int) -> int:
    if arguments.get(key) is None:
        return default
    return _require_positive_int(arguments, key)


def _require_labels(arguments: Mapping[str, Any]) -> list[str]:
    """Return label tokens from a comma-separated string or a list of strings.

    Empty entries are kept so the resolver can report them.
    """

    value = arguments.get("labels")
    if value is None:
        raise ToolArgumentError("labels is required")

    if isinstance(value, str):
        if not value.strip():
            raise ToolArgumentError("labels cannot be empty")
        return value.split(",")

    if isinstance(value, list | tuple):
        tokens: list[str] = []
        for item in value:
            if isinstance(item, str):
                tokens.append(item)
            elif isinstance(item, int) and not isinstance(item, bool):
                tokens.append(str(item))
            else:
                raise ToolArgumentError("labels must be a string or a list of strings")
        if not tokens or not any(t.strip() for t in tokens):
            raise ToolArgumentError("labels cannot be empty")
        return tokens

    raise ToolArgumentError("labels must be a string or a list of strings")


def _labels_json(labels: list[ResolvedLabel]) -> str:
    return _RESOLVED_LABELS.dump_json(labels).decode("utf-8")


def _repo_labels_json(labels: list[RepoLabel]) -> str:
    return json.dumps(
        [
            {"id": lbl.id, "name": lbl.name, "color": lbl.color, "description": lbl.description}
            for lbl in labels
        ],
        ensure_ascii=False,
    )


class IssueLabelTools:
    """Repository and issue label tools backed by one client and one resolver."""

    def __init__(self, *, client: ForgejoClient, resolver: LabelResolver | None = None) -> None:
        self._client = client
        self._resolver = resolver or LabelResolver(client)
        self._tools: dict[str, Callable[[Mapping[str, Any]], str]] = {
            "list_repo_labels": self.list_repo_labels,
            "resolve_labels": self.resolve_labels,
            "add_issue_labels": self.add_issue_labels,
            "replace_issue_labels": self.replace_issue_labels,
            "delete_issue_label": self.delete_issue_label,
        }

    @property
    def resolver(self) -> LabelResolver:
        return self._resolver

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    def call(self, name: str, arguments: Mapping[str, Any]) -> str:
        """Invoke a tool by name."""

        tool = self._tools.get(name)
        if tool is None:
            raise ToolArgumentError(f"unknown tool: {name}")
        logger.debug("Calling tool", extra={"tool": name})
        return tool(arguments)

    def list_repo_labels(self, arguments: Mapping[str, Any]) -> str:
        owner = _require_str(arguments, "owner")
        repo = _require_str(arguments, "repo")
        page = _optional_positive_int(arguments, "page", 1)
        limit = _optional_positive_int(arguments, "limit", LABELS_PAGE_SIZE)

        labels = self._client.list_repo_labels(owner, repo, page=page, limit=limit)
        return f"Found {len(labels)} labels in {owner}/{repo}\n{_repo_labels_json(labels)}"

    def resolve_labels(self, arguments: Mapping[str, Any]) -> str:
        owner = _require_str(arguments, "owner")
        repo = _require_str(arguments, "repo")
        tokens = _require_labels(arguments)

        _, resolved = self._resolver.resolve_label_ids(owner, repo, tokens)
        return f"Resolved {len(resolved)} labels in {owner}/{repo}\n{_labels_json(resolved)}"

    def add_issue_labels(self, arguments: Mapping[str, Any]) -> str:
        owner = _require_str(arguments, "owner")
        repo = _require_str(arguments, "repo")
        index = _require_positive_int(arguments, "index")
        tokens = _require_labels(arguments)

        label_ids, resolved = self._resolver.resolve_label_ids(owner, repo, tokens)
        self._client.add_issue_labels(owner, repo, index, label_ids)
        return f"Added labels to issue #{index} in {owner}/{repo}\n{_labels_json(resolved)}"

    def replace_issue_labels(self, arguments: Mapping[str, Any]) -> str:
        owner = _require_str(arguments, "owner")
        repo = _require_str(arguments, "repo")
        index = _require_positive_int(arguments, "index")
        tokens = _require_labels(arguments)

        label_ids, resolved = self._resolver.resolve_label_ids(owner, repo, tokens)
        self._client.replace_issue_labels(owner, repo, index, label_ids)
        return f"Replaced labels on issue #{index} in {owner}/{repo}\n{_labels_json(resolved)}"

    def delete_issue_label(self, arguments: Mapping[str, Any]) -> str:
        owner = _require_str(arguments, "owner")
        repo = _require_str(arguments, "repo")
        index = _require_positive_int(arguments, "index")
        label_id = _require_positive_int(arguments, "id")

        self._client.delete_issue_label(owner, repo, index, label_id)
        return f"Deleted label {label_id} from issue #{index} in {owner}/{repo}"
