"""Repository label provisioning.

This module provides the LabelProvisioner class that makes sure every label
in the run's catalog exists in the repository before the issue is labeled.
Missing labels are created with their catalog description and a color
picked at random from a fixed palette.

Provisioning never fails the run:
- If the repository labels cannot be listed, the whole step is skipped
  with a warning (the labels may already exist)
- If one label cannot be created, it is skipped with a warning and the
  remaining labels are still created

Source:
- src/labeler/github/client.py (GitHubClient)
- src/labeler/labels/catalog.py (LabelCatalog)
"""

import logging
import random
from typing import List

from src.labeler.github.client import GitHubAPIError, GitHubClient
from src.labeler.labels.catalog import LabelCatalog


logger = logging.getLogger(__name__)


LABEL_COLORS: tuple[str, ...] = (
    "0075ca",  # blue
    "7057ff",  # purple
    "a2eeef",  # light blue
    "e99695",  # red
    "f9d0c4",  # orange
    "fef2c0",  # yellow
    "c5f015",  # green
    "d73a4a",  # dark red
    "0052cc",  # dark blue
    "6f42c1",  # dark purple
)


def random_label_color() -> str:
    """Pick a color for a new label, uniformly from LABEL_COLORS."""
    return random.choice(LABEL_COLORS)


class LabelProvisioner:
    """Creates catalog labels that are missing from a repository.

    Attributes:
        github_client: The GitHub API client for label operations.
        owner: Repository owner (user or organization).
        repo: Repository name.

    Example:
        >>> provisioner = LabelProvisioner(client, "octo", "demo")
        >>> created = await provisioner.ensure_labels(LabelCatalog.build())
    """

    def __init__(self, github_client: GitHubClient, owner: str, repo: str):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo

    async def ensure_labels(self, catalog: LabelCatalog) -> List[str]:
        """Create every catalog label the repository does not have yet.

        Names are compared case-insensitively. A name that appears more
        than once in the catalog is created at most once.

        Args:
            catalog: The labels that should exist.

        Returns:
            Names of the labels that were created.
        """
        try:
            existing = await self.github_client.list_labels(self.owner, self.repo)
        except GitHubAPIError as e:
            logger.warning(
                "Failed to ensure labels exist: %s",
                e,
                extra={"owner": self.owner, "repo": self.repo},
            )
            return []

        known = {label.name.lower() for label in existing}
        created: List[str] = []

        for definition in catalog:
            key = definition.label.lower()
            if key in known:
                continue
            known.add(key)

            try:
                await self.github_client.create_label(
                    self.owner,
                    self.repo,
                    name=definition.label,
                    description=definition.description,
                    color=random_label_color(),
                )
            except GitHubAPIError as e:
                logger.warning(
                    "Failed to create label '%s': %s",
                    definition.label,
                    e,
                    extra={"owner": self.owner, "repo": self.repo},
                )
                continue

            logger.info("Created label: %s", definition.label)
            created.append(definition.label)

        return created
