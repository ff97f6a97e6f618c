"""GitHub integration for the labeler.

This module provides:
- An async GitHub API client for listing/creating labels and updating issues
- Extraction of the triggering issue from the run context
"""

from src.labeler.github.client import GitHubAPIError, GitHubClient
from src.labeler.github.models import IssueRecord, RepositoryLabel
from src.labeler.github.reader import WrongEventError, read_issue

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "IssueRecord",
    "RepositoryLabel",
    "WrongEventError",
    "read_issue",
]
