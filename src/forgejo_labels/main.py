"""CLI entrypoint for the Forgejo label tools."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import requests
from pydantic import ValidationError

from forgejo_labels import __version__
from forgejo_labels.client import ForgejoClient
from forgejo_labels.config import ForgejoSettings
from forgejo_labels.labels.types import LabelFetchError, LabelResolutionError
from forgejo_labels.logging import configure_logging
from forgejo_labels.tools import IssueLabelTools, ToolArgumentError

logger = logging.getLogger(__name__)

_COMMAND_TOOLS = {
    "list-labels": "list_repo_labels",
    "resolve-labels": "resolve_labels",
    "add-labels": "add_issue_labels",
    "replace-labels": "replace_issue_labels",
    "delete-label": "delete_issue_label",
}


def _add_repo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--owner", required=True, help="Repository owner (user or organization)")
    parser.add_argument("--repo", required=True, help="Repository name")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forgejo-labels",
        description="Resolve and apply Forgejo repository labels by name or ID",
    )
    parser.add_argument("--version", action="version", version=f"forgejo-label-tools {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_labels = subparsers.add_parser("list-labels", help="List a repository's labels")
    _add_repo_arguments(list_labels)
    list_labels.add_argument("--page", type=int, default=None, help="Page number (default 1)")
    list_labels.add_argument("--limit", type=int, default=None, help="Page size (default 100)")

    resolve = subparsers.add_parser(
        "resolve-labels", help="Resolve label names and/or IDs without changing anything"
    )
    _add_repo_arguments(resolve)
    resolve.add_argument(
        "--labels",
        required=True,
        help="Comma-separated label names or IDs, e.g. 'bug,47,ready-to-merge'",
    )

    for command, help_text in (
        ("add-labels", "Add labels to an issue"),
        ("replace-labels", "Replace all labels on an issue"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        _add_repo_arguments(sub)
        sub.add_argument("--index", type=int, required=True, help="Issue index")
        sub.add_argument(
            "--labels",
            required=True,
            help="Comma-separated label names or IDs, e.g. 'bug,47,ready-to-merge'",
        )

    delete = subparsers.add_parser("delete-label", help="Remove one label from an issue")
    _add_repo_arguments(delete)
    delete.add_argument("--index", type=int, required=True, help="Issue index")
    delete.add_argument("--id", type=int, required=True, help="Label ID to remove")

    return parser


def _tool_arguments(args: argparse.Namespace) -> dict[str, Any]:
    keys = ("owner", "repo", "index", "labels", "id", "page", "limit")
    return {key: getattr(args, key) for key in keys if getattr(args, key, None) is not None}


def main(argv: list[str] | None = None, *, session: requests.Session | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ForgejoSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    client = ForgejoClient(
        token=settings.access_token,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        session=session,
    )
    try:
        tools = IssueLabelTools(client=client)
        print(tools.call(_COMMAND_TOOLS[args.command], _tool_arguments(args)))
        return 0

    except (LabelResolutionError, ToolArgumentError) as e:
        logger.warning(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return 3

    except (LabelFetchError, requests.RequestException) as e:
        logger.error("Forgejo request failed", extra={"command": args.command, "error": str(e)})
        print(str(e), file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1

    finally:
        client.close()


if __name__ == "__main__":
    raise SystemExit(main())
