"""GitHub API client for label and issue interactions.

This module provides an async wrapper around the GitHub REST API for:
- Listing the labels defined in a repository
- Creating repository labels
- Replacing an issue's labels and type in one update

Requests are made exactly once. Any non-2xx response, transport error or
malformed response body is raised as GitHubAPIError for the caller to
absorb or propagate.

Source:
- src/labeler/github/models.py (RepositoryLabel)
- src/labeler/config.py (github_token, github_api_url)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from src.labeler.github.models import RepositoryLabel


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from GitHub API.
        request_url: The URL that was requested.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class GitHubClient:
    """Async GitHub API client for the labeler.

    Supports both github.com and GitHub Enterprise Server through the
    base URL (Actions exposes it as GITHUB_API_URL).

    Attributes:
        token: GitHub API token (usually the workflow's GITHUB_TOKEN).
        base_url: Base URL for GitHub API (default: https://api.github.com).
        page_size: Number of items requested per page when listing.

    Example:
        >>> async with GitHubClient(token="ghp_xxx") as client:
        ...     labels = await client.list_labels("owner", "repo")
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        page_size: int = 100,
    ):
        """Initialize the GitHub client.

        Args:
            token: GitHub API token for authentication.
            base_url: Base URL for GitHub API. Use this to support
                      GitHub Enterprise Server endpoints.
            page_size: Items per page for paginated list endpoints.
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._default_headers(),
            )
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        """Build default headers for GitHub API requests."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "llm-issue-labeler/1.0",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make a single HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH).
            path: API path or absolute URL (pagination links are absolute).
            json_data: Optional JSON body for the request.
            params: Optional query parameters.

        Returns:
            The HTTP response from GitHub.

        Raises:
            GitHubAPIError: If the request fails or returns an error status.
        """
        try:
            response = await self.client.request(
                method=method,
                url=path,
                json=json_data,
                params=params,
            )
        except httpx.RequestError as e:
            logger.error(
                "GitHub API request error",
                extra={"path": path, "method": method, "error": str(e)},
            )
            raise GitHubAPIError(
                message=f"GitHub API request failed: {e}",
                request_url=path,
            ) from e

        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "GitHub API error",
                extra={
                    "status_code": response.status_code,
                    "path": path,
                    "method": method,
                    "response_body": error_body[:500],
                },
            )
            detail = _error_message(response)
            raise GitHubAPIError(
                message=f"GitHub API error: {response.status_code} {detail}".rstrip(),
                status_code=response.status_code,
                response_body=error_body,
                request_url=str(response.url),
            )

        return response

    async def list_labels(self, owner: str, repo: str) -> List[RepositoryLabel]:
        """List every label defined in a repository.

        Follows the `next` links of GitHub's paginated response until all
        pages have been read.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.

        Returns:
            All repository labels, in the order GitHub returns them.

        Raises:
            GitHubAPIError: If any page request fails.
        """
        labels: List[RepositoryLabel] = []
        next_url: Optional[str] = f"/repos/{owner}/{repo}/labels"
        params: Optional[Dict[str, Any]] = {"per_page": self.page_size}

        while next_url:
            response = await self._request(method="GET", path=next_url, params=params)
            page = _json_body(response)
            if not isinstance(page, list):
                raise GitHubAPIError(
                    message="GitHub API error: expected a list of labels",
                    status_code=response.status_code,
                    response_body=response.text,
                    request_url=str(response.url),
                )
            labels.extend(_label_from(response, item) for item in page)
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string.
            params = None

        logger.debug(
            "Listed repository labels",
            extra={"owner": owner, "repo": repo, "count": len(labels)},
        )
        return labels

    async def create_label(
        self,
        owner: str,
        repo: str,
        name: str,
        description: str,
        color: str,
    ) -> RepositoryLabel:
        """Create a label in a repository.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            name: Label name.
            description: Label description.
            color: Six-digit hex color without the leading '#'.

        Returns:
            The created label.

        Raises:
            GitHubAPIError: If the request fails (e.g. 422 when it already exists).
        """
        path = f"/repos/{owner}/{repo}/labels"

        response = await self._request(
            method="POST",
            path=path,
            json_data={"name": name, "description": description, "color": color},
        )

        logger.info(
            "Label created",
            extra={"owner": owner, "repo": repo, "label": name, "color": color},
        )
        return _label_from(response, _json_body(response))

    async def update_issue_labels_and_type(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        labels: List[str],
        issue_type: str,
    ) -> Dict[str, Any]:
        """Replace an issue's labels and set its type in one update.

        The label list replaces whatever the issue held before; labels not
        in `labels` are removed.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            issue_number: Issue number to update.
            labels: The complete set of label names the issue should carry.
            issue_type: Issue type name (e.g. "Bug").

        Returns:
            The updated issue data from GitHub API.

        Raises:
            GitHubAPIError: If the request fails (e.g. 403 or 404).
        """
        path = f"/repos/{owner}/{repo}/issues/{issue_number}"

        logger.info(
            "Updating issue labels and type",
            extra={
                "owner": owner,
                "repo": repo,
                "issue_number": issue_number,
                "labels": labels,
                "type": issue_type,
            },
        )

        response = await self._request(
            method="PATCH",
            path=path,
            json_data={"labels": list(labels), "type": issue_type},
        )
        return _json_body(response)


def _error_message(response: httpx.Response) -> str:
    """Pull GitHub's `message` field out of an error response, if any."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict):
        return str(data.get("message") or "")
    return ""


def _json_body(response: httpx.Response) -> Any:
    """Decode a successful response body.

    Raises:
        GitHubAPIError: If the body is not valid JSON (e.g. a proxy error page).
    """
    try:
        return response.json()
    except ValueError as e:
        raise GitHubAPIError(
            message=f"GitHub API error: invalid JSON in {response.status_code} response",
            status_code=response.status_code,
            response_body=response.text,
            request_url=str(response.url),
        ) from e


def _label_from(response: httpx.Response, data: Any) -> RepositoryLabel:
    """Build a RepositoryLabel, reporting malformed label objects as API errors."""
    try:
        return RepositoryLabel.from_github_response(data)
    except (KeyError, TypeError, ValidationError) as e:
        raise GitHubAPIError(
            message=f"GitHub API error: malformed label object: {e}",
            status_code=response.status_code,
            response_body=response.text,
            request_url=str(response.url),
        ) from e
