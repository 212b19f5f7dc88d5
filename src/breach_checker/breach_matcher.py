"""
Breach matcher for range lookups.

Filters the candidates returned for a prefix down to the ones whose suffix
equals the locally computed digest suffix and aggregates their counts.
"""

from typing import Iterable

from .digest_engine import PREFIX_LENGTH
from .models import BreachResult, Candidate


class BreachMatcher:
    """
    Matches range candidates against a full digest.

    A well-formed index returns at most one record per suffix, but every
    matching record is counted so duplicated lines are summed rather than
    silently picked from.
    """

    @staticmethod
    def normalize_suffix(suffix: str) -> str:
        """Normalize a suffix so local and remote casing compare equal."""
        return suffix.strip().upper()

    def match(self, candidates: Iterable[Candidate], full_digest: str) -> BreachResult:
        """
        Build the breach result for a digest.

        Args:
            candidates: Parsed records for the digest's prefix
            full_digest: The 40-character digest that was looked up

        Returns:
            BreachResult with the number of matching records and the sum
            of their counts; (0, 0) when nothing matches
        """
        if len(full_digest) <= PREFIX_LENGTH:
            return BreachResult(sites=0, occurrences=0)

        wanted = self.normalize_suffix(full_digest[PREFIX_LENGTH:])
        matches = [
            candidate
            for candidate in candidates
            if self.normalize_suffix(candidate.suffix) == wanted
        ]

        return BreachResult(
            sites=len(matches),
            occurrences=sum(candidate.count for candidate in matches),
        )
