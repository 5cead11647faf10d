"""
Per-kind response configuration
"""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .github import ContributionKind


class ConfigurationError(Exception):
    """Raised when the run is misconfigured and must fail before any API call"""


def parse_labels(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated label input, keeping order and duplicates"""
    if not raw:
        return ()
    return tuple(label.strip() for label in raw.split(",") if label.strip())


class ResponseConfig(BaseModel):
    """Messages and labels to apply to a first contribution"""

    issue_message: Optional[str] = None
    issue_labels: Tuple[str, ...] = Field(default_factory=tuple)
    pr_message: Optional[str] = None
    pr_labels: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings) -> "ResponseConfig":
        """Build from the action inputs held by Settings"""
        return cls(
            issue_message=settings.ISSUE_MESSAGE or None,
            issue_labels=parse_labels(settings.ISSUE_LABELS),
            pr_message=settings.PR_MESSAGE or None,
            pr_labels=parse_labels(settings.PR_LABELS),
        )

    def validate_messages(self) -> None:
        """At least one kind must have a message, otherwise the run cannot do anything"""
        if not self.issue_message and not self.pr_message:
            raise ConfigurationError(
                "Action must have at least one of issue-message or pr-message set"
            )

    def message_for(self, kind: ContributionKind) -> Optional[str]:
        if kind is ContributionKind.ISSUE:
            return self.issue_message
        return self.pr_message

    def labels_for(self, kind: ContributionKind) -> Tuple[str, ...]:
        if kind is ContributionKind.ISSUE:
            return self.issue_labels
        return self.pr_labels
