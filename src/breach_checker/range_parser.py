"""
Parser for range API responses.

A range response is plain text with one `SUFFIX:COUNT` record per line. The
body comes from the network and is untrusted, so anything that does not look
like a record is skipped instead of failing the whole lookup.
"""

import re
from typing import Optional

from .models import Candidate

_COUNT_PATTERN = re.compile(r"[0-9]+")


def parse_line(line: str) -> Optional[Candidate]:
    """
    Parse a single response line.

    Returns:
        A Candidate, or None if the line is not a valid record
    """
    suffix, sep, count_text = line.partition(":")
    if not sep:
        return None

    suffix = suffix.strip()
    count_text = count_text.strip()

    if not suffix or not _COUNT_PATTERN.fullmatch(count_text):
        return None

    return Candidate(suffix=suffix, count=int(count_text))


def parse_candidates(raw_text: str) -> list[Candidate]:
    """
    Parse a range response body into candidates.

    Lines end at `\\n` or `\\r\\n`; other Unicode line boundaries stay part of
    the line. Lines without a colon, with an empty suffix or with a count that
    is not a non-negative decimal integer are dropped. Order is preserved and
    duplicate suffixes are kept.

    Args:
        raw_text: The response body

    Returns:
        List of valid candidates in input order
    """
    candidates = []
    for line in raw_text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        candidate = parse_line(line)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
