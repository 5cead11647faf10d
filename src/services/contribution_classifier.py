"""
First contribution detection for issues and pull requests
"""

import structlog
from typing import Optional

from src.models.github import ContributionKind
from .github_client import GitHubClient
from .history_scanner import (
    HistoryScanner, CollectionSource, IssueCollection, PullRequestCollection
)

logger = structlog.get_logger()


class ContributionClassifier:
    """Answers whether an item is its author's first of that kind in a repository"""

    def __init__(self, github_client: GitHubClient, owner: str, repo: str,
                 max_pages: Optional[int] = None):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo
        self.scanner = HistoryScanner(max_pages=max_pages)

    def source_for(self, kind: ContributionKind, author_id: str) -> CollectionSource:
        if kind is ContributionKind.ISSUE:
            return IssueCollection(self.github_client, self.owner, self.repo, author_id)
        return PullRequestCollection(self.github_client, self.owner, self.repo)

    async def is_first_contribution(self, kind: ContributionKind, author_id: str,
                                    triggering_number: int) -> bool:
        source = self.source_for(kind, author_id)
        is_first = await self.scanner.scan(source, author_id, triggering_number)

        logger.info(
            "Contribution classified",
            kind=kind.value,
            author=author_id,
            number=triggering_number,
            first_contribution=is_first
        )
        return is_first
