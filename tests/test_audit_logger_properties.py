"""
Property-based tests for the audit logger.

Covers masking of password material, the minimum level filter and the
structure of the JSON and text output formats.
"""

import json
from io import StringIO

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from breach_checker.audit_logger import DEFAULT_MAX_ENTRIES, AuditLogger
from breach_checker.config import LoggingConfig
from breach_checker.enums import LogLevel


@st.composite
def component_name_strategy(draw) -> str:
    """Generate valid component names."""
    return draw(st.text(
        alphabet="abcdefghijklmnopqrstuvwxyz_-",
        min_size=1,
        max_size=30,
    ))


@st.composite
def message_strategy(draw) -> str:
    """Generate single-line log messages."""
    return draw(st.text(
        alphabet=st.characters(
            whitelist_categories=("L", "N", "P", "S", "Zs"),
            blacklist_characters="\x00\n\r",
        ),
        min_size=1,
        max_size=100,
    ))


@st.composite
def safe_key_strategy(draw) -> str:
    """Generate keys that contain no sensitive fragment."""
    key = draw(st.text(alphabet="bcfgilmnrxyz_", min_size=1, max_size=20))
    return "k_" + key if any(s in key for s in AuditLogger.SENSITIVE_KEYS) else key


class TestSensitiveDataMaskingProperty:
    """Values under sensitive keys never reach the output."""

    @given(
        key=st.sampled_from(sorted(AuditLogger.SENSITIVE_KEYS)),
        value=st.text(alphabet="jkqvxz", min_size=8, max_size=40),
    )
    @settings(max_examples=100)
    def test_sensitive_values_are_masked(self, key: str, value: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="both", output_stream=stream)

        entry = logger.log(LogLevel.INFO, "test", "message", {key: value, "nested": {key: value}})

        assert entry.data[key] == AuditLogger.MASK_VALUE
        assert entry.data["nested"][key] == AuditLogger.MASK_VALUE
        assert value not in stream.getvalue()

    @given(
        key=safe_key_strategy(),
        value=st.one_of(st.integers(), st.text(max_size=20), st.booleans()),
    )
    @settings(max_examples=100)
    def test_non_sensitive_values_are_kept(self, key: str, value) -> None:
        logger = AuditLogger(output_stream=StringIO())

        entry = logger.log(LogLevel.INFO, "test", "message", {key: value})

        assert entry.data[key] == value

    def test_compound_keys_are_masked(self) -> None:
        logger = AuditLogger(output_stream=StringIO())

        masked = logger.mask_sensitive_data({
            "full_digest": "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD7",
            "Password_Input": "hunter2",
            "items": [{"suffix": "1E4C9"}, "plain"],
            "prefix": "5BAA6",
        })

        assert masked["full_digest"] == AuditLogger.MASK_VALUE
        assert masked["Password_Input"] == AuditLogger.MASK_VALUE
        assert masked["items"] == [{"suffix": AuditLogger.MASK_VALUE}, "plain"]
        assert masked["prefix"] == "5BAA6"

    def test_masking_does_not_modify_input(self) -> None:
        data = {"password": "hunter2"}

        AuditLogger(output_stream=StringIO()).mask_sensitive_data(data)

        assert data == {"password": "hunter2"}


class TestLevelFilterProperty:
    """Entries below the configured minimum level are dropped."""

    @given(
        min_level=st.sampled_from(list(LogLevel)),
        level=st.sampled_from(list(LogLevel)),
    )
    @settings(max_examples=100)
    def test_filter_respects_level_order(self, min_level: LogLevel, level: LogLevel) -> None:
        order = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR]
        stream = StringIO()
        logger = AuditLogger(output_stream=stream, min_level=min_level)

        entry = logger.log(level, "test", "message")

        if order.index(level) >= order.index(min_level):
            assert entry is not None
            assert len(logger.entries) == 1
        else:
            assert entry is None
            assert stream.getvalue() == ""
            assert logger.entries == []

    def test_from_config(self) -> None:
        logger = AuditLogger.from_config(LoggingConfig(level="warn", output_format="json"))

        assert logger.min_level == LogLevel.WARN
        assert logger.output_format == "json"


class TestOutputFormatProperty:
    """JSON lines parse back; text lines carry level and component."""

    @given(
        level=st.sampled_from(list(LogLevel)),
        component=component_name_strategy(),
        message=message_strategy(),
    )
    @settings(max_examples=100)
    def test_json_output_is_parseable(self, level: LogLevel, component: str, message: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream)

        logger.log(level, component, message, {"prefix": "5BAA6"})

        record = json.loads(stream.getvalue().strip())
        assert record["level"] == level.value
        assert record["component"] == component
        assert record["message"] == message
        assert record["data"] == {"prefix": "5BAA6"}
        assert "timestamp" in record

    @given(level=st.sampled_from(list(LogLevel)), component=component_name_strategy())
    @settings(max_examples=50)
    def test_text_output_format(self, level: LogLevel, component: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream)

        logger.log(level, component, "hello")

        line = stream.getvalue().strip()
        assert line.startswith("[")
        assert f"{level.value.upper()} [{component}] hello" in line

    def test_both_writes_two_lines(self) -> None:
        stream = StringIO()
        AuditLogger(output_format="both", output_stream=stream).log(LogLevel.INFO, "test", "hi")

        lines = stream.getvalue().strip().split("\n")
        assert len(lines) == 2
        json.loads(lines[0])

    def test_invalid_format_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            AuditLogger(output_format="xml")


class TestEntryRetentionProperty:
    """Only the most recent entries are kept in memory; output is unaffected."""

    @given(
        max_entries=st.integers(min_value=1, max_value=20),
        count=st.integers(min_value=0, max_value=60),
    )
    @settings(max_examples=100)
    def test_retained_entries_are_bounded(self, max_entries: int, count: int) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream, max_entries=max_entries)

        for i in range(count):
            logger.log(LogLevel.INFO, "test", f"message {i}")

        retained = [entry.message for entry in logger.entries]
        assert retained == [f"message {i}" for i in range(max(0, count - max_entries), count)]
        assert len(stream.getvalue().splitlines()) == count

    def test_default_cap(self) -> None:
        logger = AuditLogger(output_stream=StringIO())

        for i in range(DEFAULT_MAX_ENTRIES + 5):
            logger.log(LogLevel.DEBUG, "test", "tick")

        assert len(logger.entries) == DEFAULT_MAX_ENTRIES

    def test_unbounded_when_requested(self) -> None:
        logger = AuditLogger(output_stream=StringIO(), max_entries=None)

        for i in range(DEFAULT_MAX_ENTRIES + 5):
            logger.log(LogLevel.DEBUG, "test", "tick")

        assert len(logger.entries) == DEFAULT_MAX_ENTRIES + 5


class TestErrorLogging:
    def test_log_error_includes_context(self) -> None:
        logger = AuditLogger(output_stream=StringIO())

        entry = logger.log_error(
            "range_client",
            "Lookup failed",
            error=RuntimeError("boom"),
            request_url="https://api.pwnedpasswords.com/range/5BAA6",
            response_status_code=503,
            additional_data={"prefix": "5BAA6"},
        )

        assert entry.level == LogLevel.ERROR
        assert entry.data["error_message"] == "boom"
        assert entry.data["error_type"] == "RuntimeError"
        assert entry.data["request_url"].endswith("/range/5BAA6")
        assert entry.data["response_status_code"] == 503
        assert entry.data["prefix"] == "5BAA6"

    def test_clear_entries_after_cap(self) -> None:
        logger = AuditLogger(output_stream=StringIO(), max_entries=2)
        for i in range(3):
            logger.log(LogLevel.INFO, "test", f"message {i}")

        logger.clear_entries()

        assert logger.entries == []

    def test_clear_entries(self) -> None:
        logger = AuditLogger(output_stream=StringIO())
        logger.log(LogLevel.INFO, "test", "one")

        logger.clear_entries()

        assert logger.entries == []
