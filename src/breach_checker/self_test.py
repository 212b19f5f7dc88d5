"""
Startup Self-Test module for the breach checker.

Validates the configuration and verifies that the range endpoint answers a
range query before the first real lookup is made.
"""

import time
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

import httpx

from .config import SystemConfig
from .enums import LogLevel
from .i18n import SUPPORTED_LANGUAGES, get_message
from .range_client import RangeClient
from .range_parser import parse_candidates

# Any prefix works; this one is fetched for connectivity only.
PROBE_PREFIX = "21BD1"

VALID_OUTPUT_FORMATS = ("json", "text", "both")


@dataclass
class EndpointTestResult:
    """Result of probing the range endpoint."""

    endpoint: str
    success: bool
    response_time_ms: float
    error: Optional[str] = None
    http_status_code: Optional[int] = None
    candidate_count: int = 0


@dataclass
class ConfigValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class SelfTestResult:
    """Complete self-test result."""

    success: bool
    config_validation: ConfigValidationResult
    endpoint_result: Optional[EndpointTestResult] = None
    total_duration_ms: float = 0.0


class SelfTest:
    """
    Startup self-test for the breach checker.

    Performs:
    1. Configuration validation
    2. A single range query against the configured endpoint
       (skipped in simulation mode)
    """

    def __init__(
        self,
        config: SystemConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the self-test.

        Args:
            config: System configuration to validate and test
            transport: Optional httpx transport used for the probe request
        """
        self._config = config
        self._transport = transport

    async def run(self) -> SelfTestResult:
        """Run the complete self-test."""
        start_time = time.perf_counter()

        config_result = self.validate_config()

        # If config is invalid, don't proceed with the connectivity test
        if not config_result.valid or self._config.simulation_mode:
            return SelfTestResult(
                success=config_result.valid,
                config_validation=config_result,
                endpoint_result=None,
                total_duration_ms=self._elapsed_ms(start_time),
            )

        endpoint_result = await self._test_endpoint()

        return SelfTestResult(
            success=endpoint_result.success,
            config_validation=config_result,
            endpoint_result=endpoint_result,
            total_duration_ms=self._elapsed_ms(start_time),
        )

    def validate_config(self) -> ConfigValidationResult:
        """
        Validate the system configuration.

        Checks:
        - The range endpoint is an HTTPS URL
        - The timeout is positive
        - Language, log level and output format are supported
        """
        errors: list[str] = []
        warnings: list[str] = []
        range_api = self._config.range_api

        if not range_api.base_url:
            errors.append("No range endpoint configured")
        else:
            parsed = urlparse(range_api.base_url)
            if parsed.scheme.lower() != "https":
                errors.append(f"Range endpoint must use HTTPS: {range_api.base_url}")
            if not parsed.netloc:
                errors.append(f"Range endpoint has no host: {range_api.base_url}")

        if range_api.timeout_seconds <= 0:
            errors.append(f"Timeout must be positive: {range_api.timeout_seconds}")
        elif range_api.timeout_seconds > 60:
            warnings.append("Timeout is above 60s - a hung request will block for a long time")

        if not range_api.user_agent:
            warnings.append("No User-Agent configured - some endpoints reject such requests")

        if self._config.language not in SUPPORTED_LANGUAGES:
            errors.append(f"Unsupported language: {self._config.language}")

        if self._config.logging.level not in {level.value for level in LogLevel}:
            errors.append(f"Unsupported log level: {self._config.logging.level}")

        if self._config.logging.output_format not in VALID_OUTPUT_FORMATS:
            errors.append(f"Unsupported log output format: {self._config.logging.output_format}")

        return ConfigValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    async def _test_endpoint(self) -> EndpointTestResult:
        async with RangeClient(self._config.range_api, transport=self._transport) as client:
            endpoint = client.build_url(PROBE_PREFIX)
            response = await client.fetch_range(PROBE_PREFIX)

        if not response.ok:
            return EndpointTestResult(
                endpoint=endpoint,
                success=False,
                response_time_ms=response.response_time_ms,
                error=response.error.message if response.error else None,
                http_status_code=response.http_status_code or None,
            )

        return EndpointTestResult(
            endpoint=endpoint,
            success=True,
            response_time_ms=response.response_time_ms,
            http_status_code=response.http_status_code,
            candidate_count=len(parse_candidates(response.body)),
        )

    def _elapsed_ms(self, start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    def print_results(self, result: SelfTestResult, language: str = "en") -> None:
        """Print self-test results to stdout."""
        print(get_message("selftest.starting", language))
        print("=" * 60)

        if result.config_validation.valid:
            print(f"  ✓ {get_message('selftest.config_valid', language)}")
        else:
            print(f"  ✗ {get_message('selftest.config_invalid', language)}")
            for error in result.config_validation.errors:
                print(f"    - {error}")

        for warning in result.config_validation.warnings:
            print(f"    ! {warning}")

        endpoint_result = result.endpoint_result
        if endpoint_result is None:
            if self._config.simulation_mode:
                print(f"  - {get_message('selftest.skipped_simulation', language)}")
        elif endpoint_result.success:
            print("  ✓ " + get_message(
                "selftest.endpoint_ok",
                language,
                endpoint=endpoint_result.endpoint,
                time_ms=endpoint_result.response_time_ms,
            ))
        else:
            print("  ✗ " + get_message(
                "selftest.endpoint_failed",
                language,
                endpoint=endpoint_result.endpoint,
                error=endpoint_result.error,
            ))

        print("-" * 60)
        if result.success:
            print(f"✓ {get_message('selftest.passed', language)}")
        else:
            print(f"✗ {get_message('selftest.failed', language)}")


async def run_self_test(
    config: SystemConfig,
    print_output: bool = True,
    language: str = "en",
) -> SelfTestResult:
    """
    Convenience function to run self-test.

    Args:
        config: System configuration to test
        print_output: Whether to print results to stdout
        language: Output language

    Returns:
        SelfTestResult with test outcomes
    """
    self_test = SelfTest(config)
    result = await self_test.run()

    if print_output:
        self_test.print_results(result, language)

    return result
