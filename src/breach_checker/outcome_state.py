"""
Outcome State for the breach checker.

Holds the application state that a display renders (password, its digest and
the current lookup outcome) and the single update function every change goes
through. Input events and completed lookups both arrive as messages, so state
transitions are serialized in one place.

Submitting returns a LookupTask instead of running the lookup. The caller owns
the executor: it runs the task and feeds the resulting LookupCompleted message
back into update(). Each task carries the identifier of its submission, and a
completion is only applied if it belongs to the latest submission and the
state is still SEARCHING. A slow lookup can therefore never overwrite a newer
submission or an edited password.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .audit_logger import AuditLogger
from .digest_engine import hash_password
from .enums import LogLevel, LookupStatus
from .models import LookupOutcome
from .orchestrator import LookupOrchestrator


@dataclass(frozen=True)
class PasswordChanged:
    """The password input changed."""

    password: str = field(repr=False)


@dataclass(frozen=True)
class Submit:
    """The user asked for the current password to be checked."""


@dataclass(frozen=True)
class ShowPassword:
    """Toggle whether the password is displayed in clear text."""

    show: bool


@dataclass(frozen=True)
class LookupCompleted:
    """A lookup task finished."""

    lookup_id: int
    outcome: LookupOutcome


Message = Union[PasswordChanged, Submit, ShowPassword, LookupCompleted]


@dataclass
class LookupTask:
    """A pending lookup returned by OutcomeState.update."""

    lookup_id: int
    password: str = field(repr=False)

    async def run(self, orchestrator: LookupOrchestrator) -> LookupCompleted:
        outcome = await orchestrator.lookup(self.password)
        return LookupCompleted(lookup_id=self.lookup_id, outcome=outcome)


class OutcomeState:
    """
    Application state for one password field and its lookup.

    Starts in NOT_SUBMITTED. There is no terminal state: a resolved or failed
    outcome is replaced by SEARCHING on resubmission, or by NOT_SUBMITTED as
    soon as the password is edited.
    """

    def __init__(self, logger: Optional[AuditLogger] = None) -> None:
        self._password = ""
        self._current_digest = ""
        self._show_password = False
        self._outcome = LookupOutcome.not_submitted()
        self._latest_lookup_id = 0
        self._logger = logger

    @property
    def password(self) -> str:
        return self._password

    @property
    def current_digest(self) -> str:
        """SHA-1 digest of the current password, "" when empty."""
        return self._current_digest

    @property
    def show_password(self) -> bool:
        return self._show_password

    @property
    def outcome(self) -> LookupOutcome:
        return self._outcome

    @property
    def latest_lookup_id(self) -> int:
        return self._latest_lookup_id

    @property
    def can_submit(self) -> bool:
        return bool(self._password)

    def update(self, message: Message) -> Optional[LookupTask]:
        """
        Apply a message and return the next task to run, if any.

        Args:
            message: One of PasswordChanged, Submit, ShowPassword, LookupCompleted

        Returns:
            A LookupTask for Submit with a non-empty password, otherwise None
        """
        if isinstance(message, PasswordChanged):
            self._password = message.password
            self._current_digest = hash_password(message.password)
            self._outcome = LookupOutcome.not_submitted()
            return None

        if isinstance(message, Submit):
            if not self.can_submit:
                return None
            self._latest_lookup_id += 1
            self._outcome = LookupOutcome.searching()
            return LookupTask(lookup_id=self._latest_lookup_id, password=self._password)

        if isinstance(message, LookupCompleted):
            if (
                message.lookup_id != self._latest_lookup_id
                or self._outcome.status != LookupStatus.SEARCHING
            ):
                self._log(LogLevel.DEBUG, "Discarding stale lookup result", {
                    "lookup_id": message.lookup_id,
                    "latest_lookup_id": self._latest_lookup_id,
                    "current_status": self._outcome.status.value,
                })
                return None
            self._outcome = message.outcome
            return None

        if isinstance(message, ShowPassword):
            self._show_password = message.show
            return None

        raise TypeError(f"Unsupported message: {type(message).__name__}")

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "OutcomeState", message, data)


async def drive(
    state: OutcomeState,
    orchestrator: LookupOrchestrator,
    message: Message,
) -> LookupOutcome:
    """
    Apply a message and run any resulting task to completion.

    The task's completion is fed back through the same update function.

    Returns:
        The outcome after all follow-up messages were applied
    """
    task = state.update(message)
    while task is not None:
        completed = await task.run(orchestrator)
        task = state.update(completed)
    return state.outcome
