"""Issue classification models for the labeler.

This module defines the structured result the language model must return
for an issue. The same pydantic model drives both sides of the exchange:
- `classification_json_schema()` builds the JSON schema sent with the
  request so the model's output is constrained to this shape
- `IssueClassification.model_validate()` re-checks the returned payload

Keeping a single definition means the request constraint and the response
validation cannot drift apart.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


ISSUE_TYPES: tuple[str, ...] = ("Bug", "Feature", "Task")

IssueTypeName = Literal["Bug", "Feature", "Task"]

CLASSIFICATION_SCHEMA_NAME = "issue_classification"


class IssueClassification(BaseModel):
    """Result of LLM-based issue classification.

    Attributes:
        labels: Names of the labels the model suggests, in the model's order.
            They are not guaranteed to exist in the catalog; the applier
            filters them before anything is written to the issue.
        type: Exactly one of "Bug", "Feature" or "Task".
        reasoning: Brief explanation of the labeling decision.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    labels: list[str] = Field(
        ...,
        description="Array of relevant labels for this issue",
    )

    type: IssueTypeName = Field(
        ...,
        description="Single type classification for this issue",
    )

    reasoning: str = Field(
        ...,
        description="Brief explanation of the labeling decision",
    )

    def to_dict(self) -> dict:
        """Convert the classification to a plain dictionary."""
        return {
            "labels": list(self.labels),
            "type": self.type,
            "reasoning": self.reasoning,
        }


def classification_json_schema() -> dict[str, Any]:
    """Build the structured-output schema for the classification request.

    The schema is generated from IssueClassification and named for the
    OpenAI `json_schema` response format. Pydantic emits
    `additionalProperties: false` for the forbidden extras and lists every
    field as required, which is what strict structured outputs expect.

    Returns:
        JSON schema dictionary with `title` set to the schema name.
    """
    schema = IssueClassification.model_json_schema()
    schema["title"] = CLASSIFICATION_SCHEMA_NAME
    schema["description"] = "Labels, type and reasoning for a GitHub issue"
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema
