"""
Digest engine for the k-anonymity range lookup.

Passwords are fingerprinted with unsalted SHA-1 and rendered as uppercase
hexadecimal, the format the Pwned Passwords range API indexes by. Only the
first PREFIX_LENGTH characters of the digest are ever sent over the network.
"""

import hashlib
import string

from .exceptions import ValidationError
from .models import DigestParts

DIGEST_LENGTH = 40
PREFIX_LENGTH = 5
SUFFIX_LENGTH = DIGEST_LENGTH - PREFIX_LENGTH

_HEX_DIGITS = frozenset(string.hexdigits)


def hash_password(password: str) -> str:
    """
    Compute the SHA-1 digest of a password as uppercase hex.

    Args:
        password: The password to fingerprint

    Returns:
        40-character uppercase hex digest, or "" for an empty password
    """
    if not password:
        return ""

    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def is_valid_digest(digest: str) -> bool:
    """Check that a string is a full-length hex digest."""
    return len(digest) == DIGEST_LENGTH and all(c in _HEX_DIGITS for c in digest)


def split_digest(digest: str) -> DigestParts:
    """
    Split a digest into the range prefix and the private suffix.

    Args:
        digest: A 40-character hex digest

    Returns:
        DigestParts with a 5-character prefix and 35-character suffix

    Raises:
        ValidationError: If the digest is empty or malformed
    """
    if not is_valid_digest(digest):
        raise ValidationError(
            code="invalid_digest",
            message=f"Digest must be {DIGEST_LENGTH} hexadecimal characters",
            details={"length": len(digest)},
        )

    return DigestParts(prefix=digest[:PREFIX_LENGTH], suffix=digest[PREFIX_LENGTH:])
