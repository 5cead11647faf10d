"""
Tests for GitHub API client
"""

import json

import httpx
import pytest
from unittest.mock import patch

from src.models.github import HistoryItem
from src.services.github_client import GitHubClient, GitHubAPIError


class RecordingHandler:
    """httpx MockTransport handler returning canned responses in order"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(handler) -> GitHubClient:
    return GitHubClient(
        token="test_token",
        api_url="https://api.github.com",
        transport=httpx.MockTransport(handler)
    )


class TestGitHubClient:
    """Test cases for GitHub API client"""

    def test_client_initialization(self):
        """Test client initialization"""
        client = GitHubClient(token="test_token")

        assert client.token == "test_token"
        assert client.headers["Authorization"] == "token test_token"
        assert client.headers["User-Agent"] == "first-interaction/1.0"

    def test_client_no_token_raises_error(self):
        """Test that missing token raises ValueError"""
        with patch('src.services.github_client.settings') as mock_settings:
            mock_settings.GITHUB_TOKEN = ""
            mock_settings.GITHUB_API_URL = "https://api.github.com"

            with pytest.raises(ValueError, match="GitHub token is required"):
                GitHubClient()

    @pytest.mark.asyncio
    async def test_list_issues_sends_creator_filter(self):
        """Issue listing is filtered by creator and spans all states"""
        handler = RecordingHandler(httpx.Response(200, json=[
            {"number": 3, "user": {"login": "alice"}},
            {"number": 2, "user": {"login": "alice"}, "pull_request": {"url": "x"}},
        ]))

        async with make_client(handler) as client:
            items = await client.list_issues("octo", "repo", creator="alice", page=2)

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/repos/octo/repo/issues"
        assert request.url.params["creator"] == "alice"
        assert request.url.params["state"] == "all"
        assert request.url.params["page"] == "2"
        assert request.url.params["per_page"] == "100"
        assert items == [
            HistoryItem(number=3, author_id="alice", is_pull_request=False),
            HistoryItem(number=2, author_id="alice", is_pull_request=True),
        ]

    @pytest.mark.asyncio
    async def test_list_pull_requests_has_no_creator(self):
        """Pull request listing cannot be filtered by author"""
        handler = RecordingHandler(httpx.Response(200, json=[
            {"number": 10, "user": {"login": "bob"}},
        ]))

        async with make_client(handler) as client:
            items = await client.list_pull_requests("octo", "repo")

        request = handler.requests[0]
        assert request.url.path == "/repos/octo/repo/pulls"
        assert "creator" not in request.url.params
        assert items[0].author_id == "bob"

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self):
        """Non-200 listing responses are errors, not empty history"""
        handler = RecordingHandler(httpx.Response(404, json={"message": "Not Found"}))

        async with make_client(handler) as client:
            with pytest.raises(GitHubAPIError) as exc_info:
                await client.list_issues("octo", "repo", creator="alice")

        assert exc_info.value.status_code == 404
        assert exc_info.value.response_data == {"message": "Not Found"}
        assert "Received unexpected API status code 404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_listing_must_be_a_list(self):
        """A JSON object where a list is expected is reported"""
        handler = RecordingHandler(httpx.Response(200, json={"items": []}))

        async with make_client(handler) as client:
            with pytest.raises(GitHubAPIError, match="Expected a list"):
                await client.list_pull_requests("octo", "repo")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["oops"], [{"number": 1, "user": "alice"}]])
    async def test_malformed_listing_entry_raises(self, body):
        """Entries that are not objects are reported as API errors"""
        handler = RecordingHandler(httpx.Response(200, json=body))

        async with make_client(handler) as client:
            with pytest.raises(GitHubAPIError, match="Unexpected item"):
                await client.list_issues("octo", "repo", creator="alice")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        """Transport faults surface as GitHubAPIError"""
        handler = RecordingHandler(httpx.ConnectError("Connection refused"))

        async with make_client(handler) as client:
            with pytest.raises(GitHubAPIError, match="Request failed"):
                await client.list_pull_requests("octo", "repo")

    @pytest.mark.asyncio
    async def test_create_issue_comment_expects_created(self):
        """Comment creation posts the body and expects 201"""
        handler = RecordingHandler(httpx.Response(201, json={"id": 1}))

        async with make_client(handler) as client:
            await client.create_issue_comment("octo", "repo", 42, "Thanks!")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/repos/octo/repo/issues/42/comments"
        assert json.loads(request.content) == {"body": "Thanks!"}

    @pytest.mark.asyncio
    async def test_create_issue_comment_rejects_200(self):
        """Anything other than 201 for comment creation is unexpected"""
        handler = RecordingHandler(httpx.Response(200, json={"id": 1}))

        async with make_client(handler) as client:
            with pytest.raises(GitHubAPIError):
                await client.create_issue_comment("octo", "repo", 42, "Thanks!")

    @pytest.mark.asyncio
    async def test_create_pull_request_review(self):
        """Pull request welcome is a COMMENT review"""
        handler = RecordingHandler(httpx.Response(200, json={"id": 7}))

        async with make_client(handler) as client:
            await client.create_pull_request_review("octo", "repo", 55, "Welcome!")

        request = handler.requests[0]
        assert request.url.path == "/repos/octo/repo/pulls/55/reviews"
        assert json.loads(request.content) == {"body": "Welcome!", "event": "COMMENT"}

    @pytest.mark.asyncio
    async def test_add_labels_single_call(self):
        """All labels are sent in one request"""
        handler = RecordingHandler(httpx.Response(200, json=[{"name": "triage"}]))

        async with make_client(handler) as client:
            await client.add_labels("octo", "repo", 42, ("triage", "first-time"))

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.url.path == "/repos/octo/repo/issues/42/labels"
        assert json.loads(request.content) == {"labels": ["triage", "first-time"]}

    @pytest.mark.asyncio
    async def test_rate_limit_headers_tracked(self):
        """Rate limit headers update the client's budget"""
        handler = RecordingHandler(httpx.Response(
            200, json=[], headers={"X-RateLimit-Remaining": "42"}
        ))

        async with make_client(handler) as client:
            await client.list_pull_requests("octo", "repo")
            assert client.rate_limit_remaining == 42
