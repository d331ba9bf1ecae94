"""Forgejo REST API client for repository and issue labels.

This wraps a ``requests.Session`` to keep HTTP calls out of the tool layer and make
tests easy (inject a mocked session).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from forgejo_labels.labels.types import RepoLabel

logger = logging.getLogger(__name__)


class ForgejoClient:
    """Small wrapper around the Forgejo v1 REST API for label operations."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://codeberg.org/api/v1",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("Forgejo access token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"token {token}",
                "Accept": "application/json",
                "User-Agent": "forgejo-label-tools",
            }
        )

    def _repo_url(self, *, owner: str, repo: str, path: str = "") -> str:
        owner = owner.strip().strip("/")
        repo = repo.strip().strip("/")
        if not owner:
            raise ValueError("owner is required")
        if not repo:
            raise ValueError("repo is required")
        path = path.lstrip("/")
        url = f"{self._rest_base_url}/repos/{owner}/{repo}"
        return f"{url}/{path}" if path else url

    def _issue_labels_url(self, *, owner: str, repo: str, index: int, suffix: str = "") -> str:
        if index <= 0:
            raise ValueError("index must be a positive integer")
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return self._repo_url(owner=owner, repo=repo, path=f"issues/{index}/labels{suffix}")

    @staticmethod
    def _parse_labels(payload: object) -> list[RepoLabel]:
        if not isinstance(payload, list):
            raise ValueError("Unexpected labels response: expected a list")

        labels: list[RepoLabel] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            label_id = item.get("id")
            name = item.get("name")
            if not isinstance(label_id, int) or not isinstance(name, str):
                continue
            color = item.get("color")
            description = item.get("description")
            labels.append(
                RepoLabel(
                    id=label_id,
                    name=name,
                    color=color if isinstance(color, str) else "",
                    description=description if isinstance(description, str) else "",
                )
            )
        return labels

    @staticmethod
    def _validate_label_ids(label_ids: list[int]) -> list[int]:
        if not label_ids:
            raise ValueError("at least one label ID is required")
        for label_id in label_ids:
            if label_id <= 0:
                raise ValueError("label IDs must be positive integers")
        return list(label_ids)

    def list_repo_labels(
        self, owner: str, repo: str, *, page: int = 1, limit: int = 100
    ) -> list[RepoLabel]:
        """List one page of a repository's labels."""

        url = self._repo_url(owner=owner, repo=repo, path="labels")
        logger.debug(
            "Listing repository labels",
            extra={"repository": f"{owner}/{repo}", "page": page, "limit": limit},
        )
        resp = self._session.get(
            url, params={"page": page, "limit": limit}, timeout=self._timeout
        )
        resp.raise_for_status()
        return self._parse_labels(resp.json())

    def add_issue_labels(
        self, owner: str, repo: str, index: int, label_ids: list[int]
    ) -> list[RepoLabel]:
        """Add labels to an issue; returns the issue's labels afterwards."""

        url = self._issue_labels_url(owner=owner, repo=repo, index=index)
        payload: dict[str, Any] = {"labels": self._validate_label_ids(label_ids)}
        resp = self._session.post(url, json=payload, timeout=self._timeout)
        resp.raise_for_status()
        logger.info(
            "Added issue labels",
            extra={"repository": f"{owner}/{repo}", "issue": index, "label_ids": label_ids},
        )
        return self._parse_labels(resp.json())

    def replace_issue_labels(
        self, owner: str, repo: str, index: int, label_ids: list[int]
    ) -> list[RepoLabel]:
        """Replace all labels on an issue; returns the issue's labels afterwards."""

        url = self._issue_labels_url(owner=owner, repo=repo, index=index)
        payload: dict[str, Any] = {"labels": self._validate_label_ids(label_ids)}
        resp = self._session.put(url, json=payload, timeout=self._timeout)
        resp.raise_for_status()
        logger.info(
            "Replaced issue labels",
            extra={"repository": f"{owner}/{repo}", "issue": index, "label_ids": label_ids},
        )
        return self._parse_labels(resp.json())

    def delete_issue_label(self, owner: str, repo: str, index: int, label_id: int) -> None:
        """Remove a single label from an issue."""

        if label_id <= 0:
            raise ValueError("label ID must be a positive integer")
        url = self._issue_labels_url(owner=owner, repo=repo, index=index, suffix=str(label_id))
        resp = self._session.delete(url, timeout=self._timeout)
        resp.raise_for_status()
        logger.info(
            "Deleted issue label",
            extra={"repository": f"{owner}/{repo}", "issue": index, "label_id": label_id},
        )

    def close(self) -> None:
        self._session.close()
