"""Issue extraction from the triggering event.

GitHub Issue Event Payload Structure (issues event):
{
  "action": "opened",
  "issue": {
    "number": 123,
    "title": "Issue title",
    "body": "Issue body",
    "html_url": "https://github.com/owner/repo/issues/123"
  },
  "repository": {...}
}
"""

import logging

from src.labeler.actions.context import ActionContext
from src.labeler.github.models import IssueRecord


logger = logging.getLogger(__name__)


class WrongEventError(Exception):
    """Raised when the run was not triggered by an issue event."""


def read_issue(context: ActionContext) -> IssueRecord:
    """Extract the triggering issue from the run context.

    Missing or null title, body and URL default to empty strings.

    Args:
        context: The run context carrying the event payload.

    Returns:
        IssueRecord snapshot of the issue.

    Raises:
        WrongEventError: If the payload carries no issue object.
    """
    issue = context.payload.get("issue")
    if not isinstance(issue, dict):
        logger.debug(
            "No issue in event payload",
            extra={"event_name": context.event_name},
        )
        raise WrongEventError("This action can only be run on issue events")

    return IssueRecord(
        title=issue.get("title") or "",
        body=issue.get("body") or "",
        number=issue.get("number"),
        url=issue.get("html_url") or "",
    )
