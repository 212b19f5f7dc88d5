"""
Lookup Orchestrator for the breach checker.

Coordinates one k-anonymity lookup:
- hashing the password with the digest engine
- fetching the range for the 5-character prefix through the transport
- parsing the untrusted response body
- matching candidates against the full digest

The orchestrator never raises for transport problems. Error responses and
exceptions escaping the transport both become a FAILED outcome carrying a
readable message.
"""

import time
from typing import Callable, Optional

from .audit_logger import AuditLogger
from .breach_matcher import BreachMatcher
from .digest_engine import hash_password, split_digest
from .enums import LogLevel
from .models import LookupOutcome
from .range_client import RangeTransport
from .range_parser import parse_candidates

TransitionCallback = Callable[[LookupOutcome], None]

EMPTY_PASSWORD_MESSAGE = "Password is empty"


class LookupOrchestrator:
    """
    Drives a single breach lookup from password to outcome.

    The transport is injected so tests can substitute a deterministic fake
    for the real RangeClient.
    """

    def __init__(
        self,
        transport: RangeTransport,
        matcher: Optional[BreachMatcher] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            transport: Anything implementing RangeTransport
            matcher: Optional breach matcher (a default one is created)
            logger: Optional audit logger
        """
        self._transport = transport
        self._matcher = matcher or BreachMatcher()
        self._logger = logger

    async def __aenter__(self) -> "LookupOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    @property
    def transport(self) -> RangeTransport:
        return self._transport

    @property
    def matcher(self) -> BreachMatcher:
        return self._matcher

    async def lookup(
        self,
        password: str,
        on_transition: Optional[TransitionCallback] = None,
    ) -> LookupOutcome:
        """
        Look up a password in the breach index.

        SEARCHING is published through on_transition before the request is
        sent; the final outcome is published and returned.

        Args:
            password: The password to check; must not be empty
            on_transition: Optional callback receiving each outcome

        Returns:
            RESOLVED with the breach result, or FAILED with a message
        """
        start_time = time.perf_counter()
        self._publish(on_transition, LookupOutcome.searching())

        digest = hash_password(password)
        if not digest:
            self._log(LogLevel.WARN, "Lookup requested for an empty password", {})
            return self._publish(on_transition, LookupOutcome.failed(EMPTY_PASSWORD_MESSAGE))

        parts = split_digest(digest)
        self._log(LogLevel.INFO, f"Starting range lookup for prefix {parts.prefix}", {
            "prefix": parts.prefix,
        })

        try:
            response = await self._transport.fetch_range(parts.prefix)
        except Exception as e:
            message = str(e) or type(e).__name__
            if self._logger:
                self._logger.log_error(
                    "LookupOrchestrator",
                    f"Range transport raised: {message}",
                    error=e,
                    additional_data={"prefix": parts.prefix},
                )
            return self._publish(on_transition, LookupOutcome.failed(message))

        if not response.ok:
            message = response.error.message if response.error else "Empty range response"
            if self._logger:
                self._logger.log_error(
                    "LookupOrchestrator",
                    f"Range lookup failed: {message}",
                    response_status_code=response.http_status_code or None,
                    additional_data={
                        "prefix": parts.prefix,
                        "error_code": response.error.code.value if response.error else None,
                    },
                )
            return self._publish(on_transition, LookupOutcome.failed(message))

        candidates = parse_candidates(response.body)
        result = self._matcher.match(candidates, digest)

        self._log(LogLevel.INFO, f"Lookup completed for prefix {parts.prefix}", {
            "prefix": parts.prefix,
            "candidates": len(candidates),
            "sites": result.sites,
            "occurrences": result.occurrences,
            "duration_ms": (time.perf_counter() - start_time) * 1000,
        })

        return self._publish(on_transition, LookupOutcome.resolved(result))

    @staticmethod
    def _publish(
        on_transition: Optional[TransitionCallback],
        outcome: LookupOutcome,
    ) -> LookupOutcome:
        if on_transition is not None:
            on_transition(outcome)
        return outcome

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        """Log a message if logger is available."""
        if self._logger:
            self._logger.log(level, "LookupOrchestrator", message, data)
