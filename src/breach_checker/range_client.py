"""
Range client for the k-anonymity breach index.

This module provides an async client that fetches all hash suffixes sharing a
5-character prefix from a Pwned Passwords compatible range endpoint. Only the
prefix is transmitted. The client enforces TLS and reports every failure as a
RangeResponse with an error instead of raising.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable
from urllib.parse import urlparse
import time

import httpx

from .config import RangeApiConfig
from .digest_engine import PREFIX_LENGTH
from .enums import RangeErrorCode
from .exceptions import NetworkError, ValidationError

_HEX_DIGITS = frozenset("0123456789ABCDEF")

# Offline sample served in simulation mode: records for "password" and "123456".
SIMULATED_RANGES = {
    "5BAA6": "1E4C9B93F3F0682250B6CF8331B7EE68FD7:3730471\r\n",
    "7C4A8": "D09CA3762AF61E59520943DC26494F8941B:37359195\r\n",
}


@dataclass
class RangeError:
    """Error information from a range query."""

    code: RangeErrorCode
    message: str
    http_status_code: Optional[int] = None


@dataclass
class RangeResponse:
    """Result of a single range query."""

    prefix: str
    http_status_code: int
    body: Optional[str]
    error: Optional[RangeError]
    response_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """True if the body can be parsed for candidates."""
        return self.error is None and self.body is not None


@runtime_checkable
class RangeTransport(Protocol):
    """Protocol for anything that can fetch the range for a prefix."""

    @abstractmethod
    async def fetch_range(self, prefix: str) -> RangeResponse:
        """
        Fetch the candidate records for a digest prefix.

        Args:
            prefix: 5-character uppercase hex prefix

        Returns:
            RangeResponse carrying either the body or an error
        """
        ...


class RangeClient:
    """
    Async range client with TLS enforcement.

    Issues exactly one GET per call; there is no retry or caching.
    """

    def __init__(
        self,
        config: Optional[RangeApiConfig] = None,
        simulation_mode: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the range client.

        Args:
            config: Endpoint settings; defaults to the public Pwned Passwords API
            simulation_mode: If True, no real network requests are made and
                SIMULATED_RANGES is served instead
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self._config = config or RangeApiConfig()
        self._simulation_mode = simulation_mode
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "RangeClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def config(self) -> RangeApiConfig:
        return self._config

    def build_url(self, prefix: str) -> str:
        """Build the range URL for a prefix."""
        return f"{self._config.base_url.rstrip('/')}/range/{prefix}"

    def _validate_endpoint_url(self, endpoint: str) -> None:
        """
        Validate that the endpoint uses HTTPS.

        Raises:
            NetworkError: If the endpoint does not use HTTPS
        """
        parsed = urlparse(endpoint)
        if parsed.scheme.lower() != "https":
            raise NetworkError(
                code=RangeErrorCode.TLS_ERROR.value,
                message=f"Range endpoint must use HTTPS: {endpoint}",
                details={"endpoint": endpoint, "scheme": parsed.scheme},
            )

    def _validate_prefix(self, prefix: str) -> None:
        if len(prefix) != PREFIX_LENGTH or not all(c in _HEX_DIGITS for c in prefix):
            raise ValidationError(
                code="invalid_prefix",
                message=f"Range prefix must be {PREFIX_LENGTH} uppercase hex characters",
                details={"prefix": prefix},
            )

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "text/plain",
        }
        if self._config.add_padding:
            headers["Add-Padding"] = "true"
        return headers

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=True,  # TLS certificate verification enforced
                timeout=httpx.Timeout(self._config.timeout_seconds),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _error(
        self,
        prefix: str,
        code: RangeErrorCode,
        message: str,
        start_time: float,
        http_status_code: int = 0,
    ) -> RangeResponse:
        return RangeResponse(
            prefix=prefix,
            http_status_code=http_status_code,
            body=None,
            error=RangeError(
                code=code,
                message=message,
                http_status_code=http_status_code or None,
            ),
            response_time_ms=self._elapsed_ms(start_time),
        )

    async def fetch_range(self, prefix: str) -> RangeResponse:
        """
        Fetch every `SUFFIX:COUNT` record for a prefix.

        Args:
            prefix: 5-character uppercase hex prefix of a SHA-1 digest

        Returns:
            RangeResponse with the raw body on HTTP 200, or an error

        Raises:
            ValidationError: If the prefix is not 5 uppercase hex characters
        """
        self._validate_prefix(prefix)
        start_time = time.perf_counter()
        url = self.build_url(prefix)

        try:
            self._validate_endpoint_url(url)
        except NetworkError as e:
            return self._error(prefix, RangeErrorCode.TLS_ERROR, e.message, start_time)

        if self._simulation_mode:
            return RangeResponse(
                prefix=prefix,
                http_status_code=200,
                body=SIMULATED_RANGES.get(prefix, ""),
                error=None,
                response_time_ms=self._elapsed_ms(start_time),
            )

        client = self._ensure_client()

        try:
            response = await client.get(url, headers=self._build_headers())
        except httpx.TimeoutException:
            return self._error(
                prefix,
                RangeErrorCode.TIMEOUT,
                f"Range request timed out after {self._config.timeout_seconds}s",
                start_time,
            )
        except httpx.ConnectError as e:
            error_msg = str(e)
            if "ssl" in error_msg.lower() or "certificate" in error_msg.lower():
                return self._error(
                    prefix,
                    RangeErrorCode.TLS_ERROR,
                    f"TLS connection error: {error_msg}",
                    start_time,
                )
            return self._error(
                prefix,
                RangeErrorCode.NETWORK_ERROR,
                f"Connection error: {error_msg}",
                start_time,
            )
        except httpx.HTTPError as e:
            return self._error(
                prefix,
                RangeErrorCode.NETWORK_ERROR,
                f"HTTP error: {e}",
                start_time,
            )

        status = response.status_code

        if status == 429:
            return self._error(
                prefix,
                RangeErrorCode.RATE_LIMITED,
                "Rate limited by range server",
                start_time,
                http_status_code=status,
            )

        if status >= 500:
            return self._error(
                prefix,
                RangeErrorCode.SERVER_ERROR,
                f"Range server error: {status}",
                start_time,
                http_status_code=status,
            )

        if status != 200:
            return self._error(
                prefix,
                RangeErrorCode.SERVER_ERROR,
                f"Unexpected HTTP status: {status}",
                start_time,
                http_status_code=status,
            )

        try:
            body = response.text
        except (UnicodeDecodeError, LookupError) as e:
            return self._error(
                prefix,
                RangeErrorCode.DECODE_ERROR,
                f"Failed to decode range response: {e}",
                start_time,
                http_status_code=status,
            )

        return RangeResponse(
            prefix=prefix,
            http_status_code=status,
            body=body,
            error=None,
            response_time_ms=self._elapsed_ms(start_time),
        )

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
