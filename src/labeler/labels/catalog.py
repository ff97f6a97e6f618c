"""Label catalog for the issue labeler.

This module defines the label definitions known to a labeling run:
- The five stock GitHub labels every repository starts with
- One label per issue type (Bug, Feature, Task)
- Custom labels supplied through the `custom-labels` input

The catalog keeps definitions in the order they were concatenated and
does not deduplicate them. Membership tests compare names
case-insensitively.
"""

from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.labeler.classifier.models import ISSUE_TYPES


class LabelDefinition(BaseModel):
    """A label name paired with its description.

    Attributes:
        label: The label name as it appears on GitHub.
        description: Human-readable description shown in the label picker
            and embedded in the classification prompt.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(
        ...,
        min_length=1,
        description="The label name (cannot be empty)",
    )

    description: str = Field(
        ...,
        min_length=1,
        description="The label description (cannot be empty)",
    )

    @field_validator("label", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names and descriptions."""
        if not v.strip():
            raise ValueError("value cannot be blank")
        return v


DEFAULT_LABELS: tuple[LabelDefinition, ...] = (
    LabelDefinition(label="bug", description="Something isn't working"),
    LabelDefinition(label="enhancement", description="New feature or request"),
    LabelDefinition(
        label="documentation",
        description="Improvements or additions to documentation",
    ),
    LabelDefinition(label="help wanted", description="Extra attention is needed"),
    LabelDefinition(label="question", description="Further information is requested"),
)

TYPE_LABELS: tuple[LabelDefinition, ...] = tuple(
    LabelDefinition(label=issue_type, description=f"Issue type: {issue_type}")
    for issue_type in ISSUE_TYPES
)


class LabelCatalog:
    """Ordered collection of label definitions known to a run.

    Attributes:
        definitions: The label definitions, in concatenation order.
    """

    def __init__(self, definitions: Iterable[LabelDefinition]):
        self.definitions: tuple[LabelDefinition, ...] = tuple(definitions)
        self._lowered = frozenset(d.label.lower() for d in self.definitions)

    @classmethod
    def build(cls, custom_labels: Iterable[LabelDefinition] = ()) -> "LabelCatalog":
        """Build the catalog of defaults, type labels, then custom labels."""
        return cls([*DEFAULT_LABELS, *TYPE_LABELS, *custom_labels])

    def __iter__(self) -> Iterator[LabelDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    @property
    def names(self) -> list[str]:
        """Label names in catalog order, duplicates included."""
        return [d.label for d in self.definitions]

    def contains(self, name: str) -> bool:
        """Check whether a label name is in the catalog, ignoring case."""
        return name.lower() in self._lowered
