"""Basic usage example for the Forgejo label tools."""

import os

from forgejo_labels import LabelResolutionError
from forgejo_labels.client import ForgejoClient
from forgejo_labels.config import ForgejoSettings
from forgejo_labels.logging import configure_logging
from forgejo_labels.tools import IssueLabelTools


def main() -> None:
    """Run a basic example."""
    settings = ForgejoSettings()
    configure_logging(settings.log_level)

    owner = os.environ.get("EXAMPLE_OWNER", "forgejo")
    repo = os.environ.get("EXAMPLE_REPO", "forgejo")

    client = ForgejoClient(
        token=settings.access_token,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )
    try:
        tools = IssueLabelTools(client=client)

        print(tools.call("list_repo_labels", {"owner": owner, "repo": repo, "limit": 10}))

        try:
            ids, resolved = tools.resolver.resolve_label_ids(owner, repo, ["bug", "Kind/Feature"])
            print(f"Resolved IDs: {ids}")
            for label in resolved:
                print(f"  {label.id}: {label.name}")
        except LabelResolutionError as e:
            print(f"Could not resolve: {e}")
    finally:
        client.close()


if __name__ == "__main__":
    main()
