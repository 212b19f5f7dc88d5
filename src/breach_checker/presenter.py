"""
Text presenter for the breach checker.

Turns the read-only parts of OutcomeState into the lines a terminal shows:
the title, the digest, the (optionally masked) password and one of the four
outcome messages.
"""

from typing import Optional

from .enums import LookupStatus
from .i18n import get_message
from .models import LookupOutcome
from .outcome_state import OutcomeState

MASK_CHAR = "*"


def render_digest(digest: str, language: Optional[str] = None) -> str:
    return get_message("digest.label", language, digest=digest)


def render_password(password: str, show: bool, language: Optional[str] = None) -> str:
    shown = password if show else MASK_CHAR * len(password)
    return get_message("cli.password_label", language, password=shown)


def render_outcome(
    outcome: LookupOutcome,
    language: Optional[str] = None,
    simulated: bool = False,
) -> str:
    """
    Render an outcome as a user-facing message.

    NOT_SUBMITTED renders as an empty string. With simulated=True a lookup
    without matches is reported as not checked rather than safe.
    """
    if outcome.status == LookupStatus.SEARCHING:
        return get_message("outcome.searching", language)

    if outcome.status == LookupStatus.FAILED:
        return get_message("outcome.failed", language, error=outcome.error or "")

    if outcome.status == LookupStatus.RESOLVED and outcome.result is not None:
        if not outcome.result.is_breached:
            if simulated:
                return get_message("outcome.simulated", language)
            return get_message("outcome.safe", language)
        return get_message(
            "outcome.breached",
            language,
            occurrences=outcome.result.occurrences,
            sites=outcome.result.sites,
        )

    return get_message("outcome.not_submitted", language)


def render_state(
    state: OutcomeState,
    language: Optional[str] = None,
    simulated: bool = False,
) -> list[str]:
    """Render the whole view as lines, skipping empty ones."""
    lines = [
        get_message("app.title", language),
        render_digest(state.current_digest, language),
        render_password(state.password, state.show_password, language),
        render_outcome(state.outcome, language, simulated),
    ]
    return [line for line in lines if line]
