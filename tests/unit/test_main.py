"""Unit tests for the CLI entrypoint (mocked HTTP session)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from unittest.mock import Mock

import pytest
import requests

from forgejo_labels.main import build_parser, main

LABELS_JSON = [
    {"id": 47, "name": "ready-to-merge"},
    {"id": 1, "name": "bug"},
]


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def _response(payload: object, status_code: int = 200) -> Mock:
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


@pytest.fixture
def session() -> Mock:
    mock = Mock(spec=requests.Session)
    mock.headers = {}
    mock.get.return_value = _response(LABELS_JSON)
    return mock


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.mark.usefixtures("forgejo_env")
def test_resolve_labels_prints_resolved_json(
    session: Mock, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        ["resolve-labels", "--owner", "octo", "--repo", "repo", "--labels", "Bug,47"],
        session=session,
    )

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("Resolved 2 labels in octo/repo\n")
    assert json.loads(out.split("\n", 1)[1]) == [
        {"id": 1, "name": "Bug"},
        {"id": 47, "name": "ready-to-merge"},
    ]
    session.get.assert_called_once_with(
        "https://codeberg.org/api/v1/repos/octo/repo/labels",
        params={"page": 1, "limit": 100},
        timeout=30.0,
    )
    session.close.assert_called_once_with()


@pytest.mark.usefixtures("forgejo_env")
def test_add_labels_posts_resolved_ids(session: Mock) -> None:
    session.post.return_value = _response(LABELS_JSON)

    code = main(
        ["add-labels", "--owner", "octo", "--repo", "repo", "--index", "7", "--labels", "bug"],
        session=session,
    )

    assert code == 0
    session.post.assert_called_once_with(
        "https://codeberg.org/api/v1/repos/octo/repo/issues/7/labels",
        json={"labels": [1]},
        timeout=30.0,
    )


@pytest.mark.usefixtures("forgejo_env")
def test_delete_label(session: Mock, capsys: pytest.CaptureFixture[str]) -> None:
    session.delete.return_value = _response(None, status_code=204)

    code = main(
        ["delete-label", "--owner", "octo", "--repo", "repo", "--index", "7", "--id", "47"],
        session=session,
    )

    assert code == 0
    assert capsys.readouterr().out.strip() == "Deleted label 47 from issue #7 in octo/repo"


@pytest.mark.usefixtures("forgejo_env")
def test_unresolvable_label_exits_3(session: Mock, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(
        ["resolve-labels", "--owner", "octo", "--repo", "repo", "--labels", "ready"],
        session=session,
    )

    assert code == 3
    assert "Did you mean: ready-to-merge?" in capsys.readouterr().err


@pytest.mark.usefixtures("forgejo_env")
def test_upstream_failure_exits_1(session: Mock) -> None:
    session.get.return_value = _response({"message": "boom"}, status_code=500)

    code = main(
        ["resolve-labels", "--owner", "octo", "--repo", "repo", "--labels", "bug"],
        session=session,
    )

    assert code == 1
    session.close.assert_called_once_with()


def test_missing_token_exits_2(
    monkeypatch: pytest.MonkeyPatch, tmp_path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FORGEJO_ACCESS_TOKEN", raising=False)

    code = main(["list-labels", "--owner", "octo", "--repo", "repo"])

    assert code == 2
    assert "Configuration error" in capsys.readouterr().err
