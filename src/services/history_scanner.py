"""
Paginated scan of issue and pull request history
"""

import structlog
from abc import ABC, abstractmethod
from typing import List, Optional

from src.models.github import HistoryItem
from .github_client import GitHubClient

logger = structlog.get_logger()

PAGE_SIZE = 100


class CollectionSource(ABC):
    """A paged listing of a repository's issues or pull requests"""

    name: str = "collection"
    # The server already restricted the listing to one author
    supports_author_filter: bool = False
    # The listing may contain pull requests that do not count as history
    includes_pull_requests: bool = False

    @abstractmethod
    async def fetch_page(self, page: int) -> List[HistoryItem]:
        """Fetch a 1-based page of items"""
        pass


class IssueCollection(CollectionSource):
    """Issues opened by one author, filtered server-side"""

    name = "issues"
    supports_author_filter = True
    includes_pull_requests = True

    def __init__(self, github_client: GitHubClient, owner: str, repo: str, creator: str):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo
        self.creator = creator

    async def fetch_page(self, page: int) -> List[HistoryItem]:
        return await self.github_client.list_issues(
            self.owner, self.repo, creator=self.creator,
            state="all", page=page, per_page=PAGE_SIZE
        )


class PullRequestCollection(CollectionSource):
    """All pull requests of a repository; authorship is checked client-side"""

    name = "pulls"

    def __init__(self, github_client: GitHubClient, owner: str, repo: str):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo

    async def fetch_page(self, page: int) -> List[HistoryItem]:
        return await self.github_client.list_pull_requests(
            self.owner, self.repo, state="all", page=page, per_page=PAGE_SIZE
        )


class HistoryScanner:
    """Decides whether an author has any item older than the triggering one"""

    def __init__(self, max_pages: Optional[int] = None):
        # None scans until an empty page; otherwise give up after max_pages
        self.max_pages = max_pages

    async def scan(self, source: CollectionSource, author_id: str,
                   triggering_number: int) -> bool:
        """
        Walk the source page by page.

        Returns:
            bool: True when no earlier item by the author exists, False as soon
            as one is found (or when the page ceiling is hit)
        """
        page = 1
        while True:
            # Provide output if we loop for a while
            logger.info("Checking...", collection=source.name, page=page)
            items = await source.fetch_page(page)

            if not items:
                return True

            for item in items:
                if self._precedes(source, item, author_id, triggering_number):
                    logger.info(
                        "Earlier contribution found",
                        collection=source.name,
                        number=item.number,
                        author=author_id
                    )
                    return False

            if self.max_pages is not None and page >= self.max_pages:
                logger.warning(
                    "History page limit reached, treating as not first contribution",
                    collection=source.name,
                    max_pages=self.max_pages
                )
                return False

            page += 1

    @staticmethod
    def _precedes(source: CollectionSource, item: HistoryItem, author_id: str,
                  triggering_number: int) -> bool:
        if item.number >= triggering_number:
            return False
        if not source.supports_author_filter and item.author_id != author_id:
            return False
        if source.includes_pull_requests and item.is_pull_request:
            return False
        return True
