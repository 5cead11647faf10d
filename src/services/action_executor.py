"""
Applies an ActionPlan through the GitHub API
"""

import structlog
from dataclasses import dataclass, field
from typing import Tuple

from src.models.github import ContributionKind
from .github_client import GitHubClient
from .response_planner import ActionPlan

logger = structlog.get_logger()


@dataclass
class ExecutionReport:
    """What was written to GitHub during a run"""
    commented: bool = False
    labels_added: Tuple[str, ...] = field(default_factory=tuple)


class ActionExecutor:
    """Posts the welcome comment and labels; any API error propagates"""

    def __init__(self, github_client: GitHubClient, owner: str, repo: str):
        self.github_client = github_client
        self.owner = owner
        self.repo = repo

    async def execute(self, kind: ContributionKind, number: int,
                      plan: ActionPlan) -> ExecutionReport:
        report = ExecutionReport()

        if plan.should_comment:
            logger.info(
                "Adding message",
                message=plan.comment_body,
                kind=kind.display_name,
                number=number
            )
            if kind is ContributionKind.ISSUE:
                await self.github_client.create_issue_comment(
                    self.owner, self.repo, number, plan.comment_body
                )
            else:
                await self.github_client.create_pull_request_review(
                    self.owner, self.repo, number, plan.comment_body, event="COMMENT"
                )
            report.commented = True

        # Labels only after the comment, in a single call
        if plan.labels_to_add:
            logger.info(
                f"Adding labels to first-time {kind.display_name}",
                labels=list(plan.labels_to_add),
                number=number
            )
            await self.github_client.add_labels(
                self.owner, self.repo, number, list(plan.labels_to_add)
            )
            report.labels_added = tuple(plan.labels_to_add)

        return report
