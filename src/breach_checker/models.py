"""
Data models for the breach checker.

This module defines the values that flow through a lookup: the split digest,
parsed range candidates, the aggregated breach result and the lookup outcome.
"""

from dataclasses import dataclass
from typing import Optional

from .enums import LookupStatus


@dataclass(frozen=True)
class DigestParts:
    """A digest split into the disclosed prefix and the locally kept suffix."""

    prefix: str  # First 5 characters, sent to the range endpoint
    suffix: str  # Remaining 35 characters, never leaves the process


@dataclass(frozen=True)
class Candidate:
    """One `SUFFIX:COUNT` record from a range response."""

    suffix: str
    count: int


@dataclass(frozen=True)
class BreachResult:
    """Exposure summary for one completed lookup."""

    sites: int = 0
    occurrences: int = 0

    @property
    def is_breached(self) -> bool:
        """True if at least one candidate matched the digest suffix."""
        return self.sites > 0


@dataclass(frozen=True)
class LookupOutcome:
    """
    Current state of a lookup.

    Build instances through the classmethods so that `result` is only set
    for RESOLVED outcomes and `error` only for FAILED ones.
    """

    status: LookupStatus
    result: Optional[BreachResult] = None
    error: Optional[str] = None

    @classmethod
    def not_submitted(cls) -> "LookupOutcome":
        return cls(status=LookupStatus.NOT_SUBMITTED)

    @classmethod
    def searching(cls) -> "LookupOutcome":
        return cls(status=LookupStatus.SEARCHING)

    @classmethod
    def resolved(cls, result: BreachResult) -> "LookupOutcome":
        return cls(status=LookupStatus.RESOLVED, result=result)

    @classmethod
    def failed(cls, message: str) -> "LookupOutcome":
        return cls(status=LookupStatus.FAILED, error=message)

    @property
    def is_pending(self) -> bool:
        """True while the remote request is in flight."""
        return self.status == LookupStatus.SEARCHING
