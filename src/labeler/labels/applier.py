"""Application of classification results to the issue.

The classifier may suggest labels that are not in the catalog. This module
keeps only the suggestions that match a catalog entry (ignoring case),
warns about the rest, and writes the result to the issue.

The write replaces the issue's labels wholesale: after it succeeds the issue
carries exactly the accepted labels and the classified type. Applying the
same classification twice leaves the issue in the same state.

Source:
- src/labeler/github/client.py (GitHubClient)
- src/labeler/classifier/models.py (IssueClassification)
- src/labeler/labels/catalog.py (LabelCatalog)
"""

import logging
from typing import List, Sequence, Tuple

from pydantic import BaseModel, Field

from src.labeler.classifier.models import IssueClassification
from src.labeler.github.client import GitHubClient
from src.labeler.github.models import IssueRecord
from src.labeler.labels.catalog import LabelCatalog


logger = logging.getLogger(__name__)


class LabelingResult(BaseModel):
    """What was written to the issue.

    Attributes:
        labels_applied: Labels set on the issue, in suggestion order.
        type_applied: The issue type set on the issue.
        reasoning: The classifier's explanation.
        rejected_labels: Suggestions dropped because the catalog lacks them.
    """

    labels_applied: List[str] = Field(default_factory=list)
    type_applied: str
    reasoning: str = ""
    rejected_labels: List[str] = Field(default_factory=list)


def filter_valid_labels(
    suggested: Sequence[str],
    catalog: LabelCatalog,
) -> Tuple[List[str], List[str]]:
    """Split suggested labels into catalog matches and unknown names.

    Matching ignores case; accepted labels keep the spelling and order the
    classifier used.

    Args:
        suggested: Label names suggested by the classifier.
        catalog: The run's label catalog.

    Returns:
        Tuple of (valid labels, rejected labels).

    Example:
        >>> catalog = LabelCatalog([bug_definition, enhancement_definition])
        >>> filter_valid_labels(["Bug", "urgent"], catalog)
        (['Bug'], ['urgent'])
    """
    valid: List[str] = []
    rejected: List[str] = []
    for label in suggested:
        if catalog.contains(label):
            valid.append(label)
        else:
            rejected.append(label)
    return valid, rejected


class ResultApplier:
    """Writes accepted labels and the type onto the issue.

    Filtering and writing are separate steps so the caller can record
    progress between them.

    Attributes:
        github_client: The GitHub API client for issue updates.
        owner: Repository owner (user or organization).
        repo: Repository name.
    """

    def __init__(self, github_client: GitHubClient, owner: str, repo: str):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo

    def select(
        self,
        classification: IssueClassification,
        catalog: LabelCatalog,
    ) -> LabelingResult:
        """Keep the suggested labels that exist in the catalog.

        Unknown suggestions are dropped and reported in one warning.

        Args:
            classification: The validated classifier result.
            catalog: The run's label catalog.

        Returns:
            LabelingResult describing what should be written.
        """
        valid, rejected = filter_valid_labels(classification.labels, catalog)

        if rejected:
            logger.warning(
                "Some suggested labels are not available: %s",
                ", ".join(rejected),
                extra={"rejected": rejected},
            )

        return LabelingResult(
            labels_applied=valid,
            type_applied=classification.type,
            reasoning=classification.reasoning,
            rejected_labels=rejected,
        )

    async def apply(self, issue: IssueRecord, result: LabelingResult) -> None:
        """Replace the issue's labels and set its type.

        Args:
            issue: The issue to update.
            result: The selection produced by `select`.

        Raises:
            GitHubAPIError: If GitHub rejects the update.
        """
        await self.github_client.update_issue_labels_and_type(
            self.owner,
            self.repo,
            issue.number,
            labels=result.labels_applied,
            issue_type=result.type_applied,
        )

        logger.info(
            "Successfully applied labels: %s",
            ", ".join(result.labels_applied),
            extra={"issue_number": issue.number, "type": result.type_applied},
        )
