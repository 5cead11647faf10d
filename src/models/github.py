"""
GitHub event and history data models
"""

from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict


class MalformedTriggerError(Exception):
    """Raised when GitHub delivers an event that breaks the payload contract"""


class ContributionKind(str, Enum):
    """Kind of item that triggered the run"""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"

    @property
    def display_name(self) -> str:
        return "issue" if self is ContributionKind.ISSUE else "pull request"


class HistoryItem(BaseModel):
    """A prior issue or pull request returned by a listing endpoint"""

    number: int
    author_id: str
    is_pull_request: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "HistoryItem":
        """Build from an entry of GET /issues or GET /pulls"""
        if not isinstance(data, dict):
            raise TypeError(f"listing entry is {type(data).__name__}, not an object")
        user = data.get("user") or {}
        if not isinstance(user, dict):
            raise TypeError(f"user of #{data.get('number')} is {type(user).__name__}, not an object")
        return cls(
            number=data["number"],
            author_id=user.get("login", ""),
            # The issues listing also returns pull requests, marked by this key
            is_pull_request="pull_request" in data,
        )


class TriggerEvent(BaseModel):
    """The issue or pull request event that started this run"""

    kind: ContributionKind
    action: str
    number: int
    sender: Optional[str] = None
    repository_owner: str
    repository_name: str

    model_config = ConfigDict(frozen=True)

    @staticmethod
    def detect_kind(payload: Dict[str, Any]) -> Optional[ContributionKind]:
        """Return the kind of item in the payload, or None for other events"""
        if payload.get("issue"):
            return ContributionKind.ISSUE
        if payload.get("pull_request"):
            return ContributionKind.PULL_REQUEST
        return None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any],
                     fallback_repository: str = "") -> "TriggerEvent":
        """
        Build an event from a webhook payload.

        Args:
            payload: Raw event payload as delivered by GitHub
            fallback_repository: "owner/repo" used when the payload has no
                repository object (GITHUB_REPOSITORY in Actions)

        Raises:
            MalformedTriggerError: payload is not an issue or pull request
                event, or the repository cannot be determined
        """
        kind = cls.detect_kind(payload)
        if kind is None:
            raise MalformedTriggerError("Payload contains neither an issue nor a pull request")

        item = payload[kind.value]
        number = item.get("number", payload.get("number"))
        if number is None:
            raise MalformedTriggerError(f"No number found on {kind.display_name} payload")

        owner, name = cls._repository_from(payload, fallback_repository)

        sender = payload.get("sender") or {}
        return cls(
            kind=kind,
            action=payload.get("action") or "",
            number=number,
            sender=sender.get("login") or None,
            repository_owner=owner,
            repository_name=name,
        )

    @staticmethod
    def _repository_from(payload: Dict[str, Any], fallback_repository: str):
        repository = payload.get("repository") or {}
        owner = (repository.get("owner") or {}).get("login")
        name = repository.get("name")
        if owner and name:
            return owner, name

        full_name = repository.get("full_name") or fallback_repository
        if full_name and "/" in full_name:
            owner, name = full_name.split("/", 1)
            return owner, name

        raise MalformedTriggerError("Unable to determine the repository of the event")

    @property
    def repo_full_name(self) -> str:
        return f"{self.repository_owner}/{self.repository_name}"
