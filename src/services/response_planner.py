"""
Decides which comment and labels a contribution should receive
"""

import structlog
from dataclasses import dataclass, field
from typing import Optional, Tuple

from src.models.github import ContributionKind
from src.models.configuration import ResponseConfig

logger = structlog.get_logger()

NOT_FIRST_CONTRIBUTION = "Not the users first contribution"
NO_MESSAGE_FOR_KIND = "No message provided for this type of contribution"


@dataclass(frozen=True)
class ActionPlan:
    """Side effects to apply to the triggering item"""
    should_comment: bool = False
    comment_body: Optional[str] = None
    labels_to_add: Tuple[str, ...] = field(default_factory=tuple)
    skip_reason: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return not self.should_comment and not self.labels_to_add

    @classmethod
    def noop(cls, reason: str) -> "ActionPlan":
        return cls(skip_reason=reason)


class ResponsePlanner:
    """Turns a classification and configuration into an ActionPlan"""

    def plan(self, kind: ContributionKind, is_first: bool, debug_mode: bool,
             config: ResponseConfig) -> ActionPlan:
        # Debug mode gets past this gate but never past a missing message
        if not is_first and not debug_mode:
            logger.info(NOT_FIRST_CONTRIBUTION, kind=kind.value)
            return ActionPlan.noop(NOT_FIRST_CONTRIBUTION)

        message = config.message_for(kind)
        if not message:
            logger.info(NO_MESSAGE_FOR_KIND, kind=kind.value)
            return ActionPlan.noop(NO_MESSAGE_FOR_KIND)

        return ActionPlan(
            should_comment=True,
            comment_body=message,
            labels_to_add=tuple(config.labels_for(kind)),
        )
