"""
Configuration dataclasses for the breach checker.

This module defines the range API endpoint settings, logging settings and the
top-level system configuration.
"""

from dataclasses import dataclass, field

from . import __version__

DEFAULT_RANGE_BASE_URL = "https://api.pwnedpasswords.com"
DEFAULT_USER_AGENT = f"password-breach-checker/{__version__}"


@dataclass
class RangeApiConfig:
    """Settings for the k-anonymity range endpoint."""

    base_url: str = DEFAULT_RANGE_BASE_URL
    timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    add_padding: bool = False  # Ask the server to pad responses with zero-count records


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SystemConfig:
    """Main system configuration combining all sub-configurations."""

    range_api: RangeApiConfig = field(default_factory=RangeApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    language: str = "en"  # 'en' or 'de'
    simulation_mode: bool = False
    startup_self_test: bool = False
