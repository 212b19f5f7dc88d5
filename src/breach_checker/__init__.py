"""
Breach Checker - k-anonymity password breach lookups.

This package checks whether a password appears in a known breach corpus by
sending only the first five characters of its SHA-1 digest to a range
endpoint and matching the returned suffixes locally.
"""

__version__ = "0.1.0"
__author__ = "Breach Checker Team"

from breach_checker.exceptions import (
    BreachCheckerError,
    ValidationError,
    NetworkError,
    ConfigurationError,
)
from breach_checker.enums import (
    LookupStatus,
    LogLevel,
    RangeErrorCode,
)
from breach_checker.models import (
    DigestParts,
    Candidate,
    BreachResult,
    LookupOutcome,
)
from breach_checker.config import (
    RangeApiConfig,
    LoggingConfig,
    SystemConfig,
)
from breach_checker.digest_engine import (
    DIGEST_LENGTH,
    PREFIX_LENGTH,
    SUFFIX_LENGTH,
    hash_password,
    is_valid_digest,
    split_digest,
)
from breach_checker.range_parser import (
    parse_line,
    parse_candidates,
)
from breach_checker.breach_matcher import (
    BreachMatcher,
)
from breach_checker.range_client import (
    RangeClient,
    RangeError,
    RangeResponse,
    RangeTransport,
)
from breach_checker.audit_logger import (
    AuditLogger,
    LogEntry,
)
from breach_checker.orchestrator import (
    LookupOrchestrator,
)
from breach_checker.outcome_state import (
    OutcomeState,
    PasswordChanged,
    Submit,
    ShowPassword,
    LookupCompleted,
    LookupTask,
    drive,
)
from breach_checker.presenter import (
    render_digest,
    render_outcome,
    render_password,
    render_state,
)
from breach_checker.i18n import (
    get_message,
    get_all_message_keys,
    get_missing_translations,
    validate_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from breach_checker.self_test import (
    SelfTest,
    SelfTestResult,
    EndpointTestResult,
    ConfigValidationResult,
    run_self_test,
)
from breach_checker.cli import (
    main as cli_main,
    create_parser,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)

__all__ = [
    # Exceptions
    "BreachCheckerError",
    "ValidationError",
    "NetworkError",
    "ConfigurationError",
    # Enums
    "LookupStatus",
    "LogLevel",
    "RangeErrorCode",
    # Models
    "DigestParts",
    "Candidate",
    "BreachResult",
    "LookupOutcome",
    # Config
    "RangeApiConfig",
    "LoggingConfig",
    "SystemConfig",
    # Digest engine
    "DIGEST_LENGTH",
    "PREFIX_LENGTH",
    "SUFFIX_LENGTH",
    "hash_password",
    "is_valid_digest",
    "split_digest",
    # Range parser
    "parse_line",
    "parse_candidates",
    # Breach matcher
    "BreachMatcher",
    # Range client
    "RangeClient",
    "RangeError",
    "RangeResponse",
    "RangeTransport",
    # Audit logger
    "AuditLogger",
    "LogEntry",
    # Orchestrator
    "LookupOrchestrator",
    # Outcome state
    "OutcomeState",
    "PasswordChanged",
    "Submit",
    "ShowPassword",
    "LookupCompleted",
    "LookupTask",
    "drive",
    # Presenter
    "render_digest",
    "render_outcome",
    "render_password",
    "render_state",
    # i18n
    "get_message",
    "get_all_message_keys",
    "get_missing_translations",
    "validate_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # Self-test
    "SelfTest",
    "SelfTestResult",
    "EndpointTestResult",
    "ConfigValidationResult",
    "run_self_test",
    # CLI
    "cli_main",
    "create_parser",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
]
