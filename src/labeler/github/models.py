"""GitHub data models for the labeler.

This module defines the snapshots the labeler reads from GitHub:
- IssueRecord: the triggering issue (title, body, number, URL)
- RepositoryLabel: a label already present in the repository

The models use Pydantic for validation, consistent with the labeler's
configuration approach in config.py.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class IssueRecord(BaseModel):
    """Read-only snapshot of the issue that triggered the run.

    Attributes:
        title: The issue title. Empty when the payload has none.
        body: The issue body. Empty when the payload has none.
        number: The issue number within the repository.
        url: The issue's HTML URL. Empty when the payload has none.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(
        default="",
        description="The issue title text (may be empty)",
    )

    body: str = Field(
        default="",
        description="The issue body/description text (may be empty)",
    )

    number: int = Field(
        ...,
        gt=0,
        description="The issue number within the repository (positive integer)",
    )

    url: str = Field(
        default="",
        description="The issue HTML URL",
    )


class RepositoryLabel(BaseModel):
    """A label defined in the repository's label registry.

    Attributes:
        name: The label name.
        description: The label description, if any.
        color: Six-digit hex color without the leading '#'.
    """

    name: str
    description: str = ""
    color: str = ""

    @classmethod
    def from_github_response(cls, data: Dict[str, Any]) -> "RepositoryLabel":
        """Create a RepositoryLabel from a GitHub API label object."""
        return cls(
            name=data["name"],
            description=data.get("description") or "",
            color=data.get("color") or "",
        )
