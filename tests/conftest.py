"""Test configuration and fixtures."""

from __future__ import annotations

import threading
import time

import pytest

from forgejo_labels.labels.resolver import LabelResolver
from forgejo_labels.labels.types import RepoLabel


class FakeLabelSource:
    """In-memory label source that counts upstream calls."""

    def __init__(
        self,
        labels: list[RepoLabel],
        *,
        delay_seconds: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.labels = labels
        self.delay_seconds = delay_seconds
        self.error = error
        self.calls: list[tuple[str, str, int, int]] = []
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def list_repo_labels(
        self, owner: str, repo: str, *, page: int = 1, limit: int = 100
    ) -> list[RepoLabel]:
        with self._lock:
            self.calls.append((owner, repo, page, limit))
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return list(self.labels)


@pytest.fixture
def repo_labels() -> list[RepoLabel]:
    """Provide a typical repository label set."""
    return [
        RepoLabel(id=47, name="ready-to-merge"),
        RepoLabel(id=48, name="ready-to-test"),
        RepoLabel(id=49, name="ready-to-review"),
        RepoLabel(id=46, name="In-Review"),
        RepoLabel(id=1, name="bug"),
        RepoLabel(id=2, name="enhancement"),
        RepoLabel(id=3, name="duplicate"),
    ]


@pytest.fixture
def label_source(repo_labels: list[RepoLabel]) -> FakeLabelSource:
    return FakeLabelSource(repo_labels)


@pytest.fixture
def resolver(label_source: FakeLabelSource) -> LabelResolver:
    return LabelResolver(label_source)


@pytest.fixture
def forgejo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide a minimal Forgejo environment and hide any developer overrides."""
    monkeypatch.setenv("FORGEJO_ACCESS_TOKEN", "test-token")
    monkeypatch.delenv("FORGEJO_URL", raising=False)
    monkeypatch.delenv("FORGEJO_REQUEST_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def make_label_source() -> type[FakeLabelSource]:
    """Provide the fake label source class for tests that need custom behavior."""
    return FakeLabelSource
