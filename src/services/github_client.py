"""
GitHub API client for first-interaction operations
"""

import asyncio
import httpx
import structlog
from typing import List, Dict, Any, Optional, Sequence
from datetime import datetime
from config.settings import settings
from src.models.github import HistoryItem

logger = structlog.get_logger()


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors"""
    def __init__(self, message: str, status_code: int = None, response_data: Any = None):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class GitHubClient:
    """GitHub API client for first-interaction operations"""

    def __init__(self, token: str = None, api_url: str = None,
                 transport: httpx.AsyncBaseTransport = None):
        self.token = token or settings.GITHUB_TOKEN
        if not self.token:
            raise ValueError("GitHub token is required")

        self.api_url = (api_url or settings.GITHUB_API_URL).rstrip("/")
        self.headers = {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "first-interaction/1.0"
        }
        self.client = httpx.AsyncClient(
            headers=self.headers,
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def _make_request(self, method: str, path: str, expected_status: int = 200,
                            **kwargs) -> Any:
        """Make an authenticated request and fail on any status other than the expected one"""

        # Check rate limit
        if self.rate_limit_remaining <= 10 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            logger.warning("Rate limit approaching, waiting", wait_time=wait_time)
            await asyncio.sleep(wait_time)

        url = f"{self.api_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error("GitHub API request failed", error=str(e), url=url)
            raise GitHubAPIError(f"Request failed: {str(e)}")

        # Update rate limit info
        self.rate_limit_remaining = int(response.headers.get("X-RateLimit-Remaining", 5000))
        reset_timestamp = int(response.headers.get("X-RateLimit-Reset", 0))
        if reset_timestamp:
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

        if response.status_code != expected_status:
            error_data = {}
            try:
                error_data = response.json()
            except ValueError:
                pass

            raise GitHubAPIError(
                f"Received unexpected API status code {response.status_code}",
                status_code=response.status_code,
                response_data=error_data
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise GitHubAPIError(
                f"GitHub API returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            )

    async def _list_items(self, path: str, params: Dict[str, Any]) -> List[HistoryItem]:
        data = await self._make_request("GET", path, params=params)
        if not isinstance(data, list):
            raise GitHubAPIError(
                f"Expected a list from {path}, got {type(data).__name__}",
                response_data=data
            )
        try:
            return [HistoryItem.from_api(entry) for entry in data]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise GitHubAPIError(f"Unexpected item in {path} listing: {str(e)}")

    # Listing Operations
    async def list_issues(self, owner: str, repo: str, creator: Optional[str] = None,
                          state: str = "all", page: int = 1,
                          per_page: int = 100) -> List[HistoryItem]:
        """List one page of issues (pull requests included, as GitHub returns them)"""
        params = {"state": state, "page": page, "per_page": per_page}
        if creator:
            params["creator"] = creator
        return await self._list_items(f"/repos/{owner}/{repo}/issues", params)

    async def list_pull_requests(self, owner: str, repo: str, state: str = "all",
                                 page: int = 1, per_page: int = 100) -> List[HistoryItem]:
        """List one page of pull requests; GitHub offers no author filter here"""
        params = {"state": state, "page": page, "per_page": per_page}
        return await self._list_items(f"/repos/{owner}/{repo}/pulls", params)

    # Comment Operations
    async def create_issue_comment(self, owner: str, repo: str, number: int,
                                   body: str) -> Dict[str, Any]:
        """Create a comment on an issue"""
        path = f"/repos/{owner}/{repo}/issues/{number}/comments"
        return await self._make_request("POST", path, expected_status=201, json={"body": body})

    async def create_pull_request_review(self, owner: str, repo: str, number: int,
                                         body: str, event: str = "COMMENT") -> Dict[str, Any]:
        """Create a pull request review carrying the body"""
        path = f"/repos/{owner}/{repo}/pulls/{number}/reviews"
        data = {"body": body, "event": event}
        return await self._make_request("POST", path, json=data)

    # Label Operations
    async def add_labels(self, owner: str, repo: str, number: int,
                         labels: Sequence[str]) -> List[Dict[str, Any]]:
        """Add labels to an issue or pull request in a single call"""
        path = f"/repos/{owner}/{repo}/issues/{number}/labels"
        return await self._make_request("POST", path, json={"labels": list(labels)})
