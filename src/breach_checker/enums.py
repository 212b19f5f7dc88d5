"""
Enumeration types for the breach checker.
"""

from enum import Enum


class LookupStatus(Enum):
    """Lifecycle of a single breach lookup."""

    NOT_SUBMITTED = "not_submitted"
    SEARCHING = "searching"
    RESOLVED = "resolved"
    FAILED = "failed"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class RangeErrorCode(Enum):
    """Error codes for range client operations."""

    NETWORK_ERROR = "network_error"
    TLS_ERROR = "tls_error"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    DECODE_ERROR = "decode_error"
