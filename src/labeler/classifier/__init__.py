"""LLM-based issue classification.

This module classifies GitHub issues using an LLM to determine:
- Labels from the run's label catalog
- Exactly one issue type (Bug, Feature, Task)
- A short reasoning string
"""

from src.labeler.classifier.agent import ClassificationError, IssueClassifier
from src.labeler.classifier.models import (
    ISSUE_TYPES,
    IssueClassification,
    classification_json_schema,
)

__all__ = [
    "ClassificationError",
    "ISSUE_TYPES",
    "IssueClassification",
    "IssueClassifier",
    "classification_json_schema",
]
