"""Explicit GitHub Actions run context.

The runner describes the triggering event through environment variables
and a JSON payload file. This module loads that information once into an
ActionContext that is passed to the components that need it, instead of
letting them read process-wide state.

GitHub Actions environment:
- GITHUB_EVENT_NAME: the event that triggered the workflow (e.g. "issues")
- GITHUB_EVENT_PATH: path to the JSON webhook payload
- GITHUB_REPOSITORY: "{owner}/{repo}"
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


logger = logging.getLogger(__name__)


class ActionContext(BaseModel):
    """The triggering event of a workflow run.

    Attributes:
        event_name: Name of the triggering event (e.g. "issues").
        payload: The webhook payload of the triggering event.
        repository: Repository path in format "{owner}/{repo}".
    """

    model_config = ConfigDict(frozen=True)

    event_name: str = Field(
        default="",
        description="Name of the event that triggered the run",
    )

    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="The webhook payload of the triggering event",
    )

    repository: str = Field(
        ...,
        description='Repository path in format "{owner}/{repo}"',
    )

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate that the repository is an "{owner}/{repo}" path."""
        owner, _, repo = v.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError(f'repository must be "owner/repo", got {v!r}')
        return v

    @property
    def owner(self) -> str:
        """The repository owner (user or organization)."""
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        """The repository name without owner prefix."""
        return self.repository.split("/", 1)[1]


def load_action_context(
    repository: str,
    event_path: Optional[str] = None,
    event_name: str = "",
) -> ActionContext:
    """Load the run context from the event payload file.

    A missing or unreadable payload file yields an empty payload; the issue
    reader then rejects the run as not triggered by an issue event.

    Args:
        repository: Repository path in format "{owner}/{repo}".
        event_path: Path to the JSON webhook payload, if any.
        event_name: Name of the triggering event.

    Returns:
        The loaded ActionContext.
    """
    payload: Dict[str, Any] = {}

    if event_path:
        path = Path(event_path)
        if path.is_file():
            try:
                loaded = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning(
                    "Failed to read event payload: %s",
                    e,
                    extra={"event_path": event_path},
                )
            else:
                if isinstance(loaded, dict):
                    payload = loaded
        else:
            logger.warning(
                "Event payload file does not exist: %s",
                event_path,
                extra={"event_path": event_path},
            )

    return ActionContext(
        event_name=event_name,
        payload=payload,
        repository=repository,
    )
