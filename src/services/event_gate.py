"""
Entry orchestrator: validates the trigger and drives classification, planning and execution
"""

import structlog
from enum import Enum
from typing import Dict, List, Optional, Any, Set
from dataclasses import dataclass, field

from src.models.github import TriggerEvent, MalformedTriggerError
from src.models.configuration import ResponseConfig, ConfigurationError
from .github_client import GitHubClient
from .contribution_classifier import ContributionClassifier
from .response_planner import ResponsePlanner, ActionPlan
from .action_executor import ActionExecutor, ExecutionReport

logger = structlog.get_logger()

NOT_OPENED = "No issue or PR was opened, skipping"
NOT_ISSUE_OR_PR = "The event that triggered this action was not a pull request or issue, skipping."
NO_SENDER = "Internal error, no sender provided by GitHub"


class GateState(str, Enum):
    START = "start"
    VALIDATED = "validated"
    CLASSIFIED = "classified"
    PLANNED = "planned"
    EXECUTED = "executed"
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


VALID_TRANSITIONS: Dict[GateState, Set[GateState]] = {
    GateState.START: {GateState.VALIDATED, GateState.SKIPPED, GateState.FAILED},
    GateState.VALIDATED: {GateState.CLASSIFIED, GateState.FAILED},
    GateState.CLASSIFIED: {GateState.PLANNED, GateState.FAILED},
    GateState.PLANNED: {GateState.EXECUTED, GateState.SKIPPED, GateState.FAILED},
    GateState.EXECUTED: {GateState.DONE, GateState.FAILED},
    GateState.DONE: set(),
    GateState.SKIPPED: set(),
    GateState.FAILED: set(),
}


class InvalidStateTransitionError(Exception):
    """Raised when the gate attempts a transition its state machine does not allow"""
    def __init__(self, from_state: GateState, to_state: GateState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition {from_state.value} -> {to_state.value}")


class OutcomeStatus(str, Enum):
    PROCEED = "proceed"
    SKIP = "skip"
    FAIL = "fail"


@dataclass(frozen=True)
class GateOutcome:
    """Result of validating a trigger: Proceed(event) | Skip(reason) | Fail(error)"""
    status: OutcomeStatus
    reason: str = ""
    error: Optional[Exception] = None
    event: Optional[TriggerEvent] = None

    @classmethod
    def proceed(cls, event: TriggerEvent) -> "GateOutcome":
        return cls(OutcomeStatus.PROCEED, event=event)

    @classmethod
    def skip(cls, reason: str) -> "GateOutcome":
        return cls(OutcomeStatus.SKIP, reason=reason)

    @classmethod
    def fail(cls, error: Exception) -> "GateOutcome":
        return cls(OutcomeStatus.FAIL, reason=str(error), error=error)


@dataclass
class GateResult:
    """Everything a single run decided and did"""
    state: GateState = GateState.START
    outcome: Optional[OutcomeStatus] = None
    message: str = ""
    event: Optional[TriggerEvent] = None
    is_first: Optional[bool] = None
    plan: Optional[ActionPlan] = None
    report: Optional[ExecutionReport] = None
    error: Optional[Exception] = None
    history: List[GateState] = field(default_factory=lambda: [GateState.START])

    @property
    def succeeded(self) -> bool:
        return self.state in (GateState.DONE, GateState.SKIPPED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "success" if self.succeeded else "failure",
            "state": self.state.value,
            "message": self.message,
        }


class EventGate:
    """Runs one trigger event through validation, classification, planning and execution"""

    def __init__(self, github_client: Optional[GitHubClient], config: ResponseConfig,
                 debug_mode: bool = False, max_pages: Optional[int] = None,
                 fallback_repository: str = "", planner: Optional[ResponsePlanner] = None):
        self.github_client = github_client
        self.config = config
        self.debug_mode = debug_mode
        self.max_pages = max_pages
        self.fallback_repository = fallback_repository
        self.planner = planner or ResponsePlanner()

    def validate(self, payload: Dict[str, Any]) -> GateOutcome:
        """Check configuration and trigger shape before any API call"""
        try:
            self.config.validate_messages()
        except ConfigurationError as e:
            return GateOutcome.fail(e)

        if payload.get("action") != "opened" and not self.debug_mode:
            return GateOutcome.skip(NOT_OPENED)

        if TriggerEvent.detect_kind(payload) is None:
            return GateOutcome.skip(NOT_ISSUE_OR_PR)

        sender = payload.get("sender") or {}
        if not sender.get("login"):
            return GateOutcome.fail(MalformedTriggerError(NO_SENDER))

        try:
            event = TriggerEvent.from_payload(payload, self.fallback_repository)
        except MalformedTriggerError as e:
            return GateOutcome.fail(e)

        return GateOutcome.proceed(event)

    async def run(self, payload: Dict[str, Any]) -> GateResult:
        """Process a trigger payload; failures are reported in the result, never raised"""
        result = GateResult()

        try:
            outcome = self.validate(payload)
            if outcome.status is OutcomeStatus.SKIP:
                return self._skip(result, outcome.reason)
            if outcome.status is OutcomeStatus.FAIL:
                raise outcome.error

            event = outcome.event
            result.event = event
            self._transition(result, GateState.VALIDATED)

            logger.info(
                "Checking if its the users first contribution",
                kind=event.kind.value,
                number=event.number,
                sender=event.sender,
                repository=event.repo_full_name
            )
            classifier = ContributionClassifier(
                self.github_client, event.repository_owner, event.repository_name,
                max_pages=self.max_pages
            )
            result.is_first = await classifier.is_first_contribution(
                event.kind, event.sender, event.number
            )
            self._transition(result, GateState.CLASSIFIED)

            result.plan = self.planner.plan(
                event.kind, result.is_first, self.debug_mode, self.config
            )
            self._transition(result, GateState.PLANNED)
            if result.plan.is_noop:
                return self._skip(result, result.plan.skip_reason)

            executor = ActionExecutor(
                self.github_client, event.repository_owner, event.repository_name
            )
            result.report = await executor.execute(event.kind, event.number, result.plan)
            self._transition(result, GateState.EXECUTED)

            result.outcome = OutcomeStatus.PROCEED
            result.message = f"Welcomed {event.sender} on {event.kind.display_name} #{event.number}"
            self._transition(result, GateState.DONE)
            logger.info("First interaction handled", number=event.number, sender=event.sender)
            return result

        except Exception as e:
            failed_in = result.state
            result.outcome = OutcomeStatus.FAIL
            result.error = e
            result.message = str(e)
            self._transition(result, GateState.FAILED)
            logger.error(
                "First interaction run failed",
                error=str(e),
                error_type=type(e).__name__,
                state=failed_in.value
            )
            return result

    @classmethod
    def failed_result(cls, error: Exception) -> GateResult:
        """Result for a run that could not even be started"""
        result = GateResult(error=error, message=str(error), outcome=OutcomeStatus.FAIL)
        cls._transition(result, GateState.FAILED)
        logger.error("First interaction run failed", error=str(error), state=GateState.START.value)
        return result

    def _skip(self, result: GateResult, reason: str) -> GateResult:
        result.outcome = OutcomeStatus.SKIP
        result.message = reason
        self._transition(result, GateState.SKIPPED)
        logger.info(reason)
        return result

    @staticmethod
    def _transition(result: GateResult, new_state: GateState) -> None:
        if new_state not in VALID_TRANSITIONS[result.state]:
            raise InvalidStateTransitionError(result.state, new_state)
        result.state = new_state
        result.history.append(new_state)
