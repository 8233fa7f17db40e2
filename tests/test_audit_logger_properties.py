"""
Property-based tests for the run logger.
"""

import json
from io import StringIO

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from root_rdap.audit_logger import AuditLogger
from root_rdap.enums import LogLevel
from root_rdap.exceptions import WhoisParseError


# Strategies for generating valid test data

@st.composite
def log_level_strategy(draw) -> LogLevel:
    """Generate valid LogLevel values."""
    return draw(st.sampled_from(list(LogLevel)))


@st.composite
def component_name_strategy(draw) -> str:
    """Generate valid component names."""
    return draw(st.text(
        alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"),
        min_size=1,
        max_size=50,
    ))


@st.composite
def message_strategy(draw) -> str:
    """Generate valid log messages."""
    return draw(st.text(
        alphabet=st.characters(
            whitelist_categories=('L', 'N', 'P', 'S', 'Z'),
            blacklist_characters='\x00\n\r',
        ),
        min_size=1,
        max_size=200,
    ))


@st.composite
def data_strategy(draw) -> dict:
    """Generate small JSON-serializable data dictionaries."""
    return draw(st.dictionaries(
        keys=st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=15),
        values=st.one_of(
            st.text(max_size=30),
            st.integers(min_value=-1000, max_value=1000),
            st.booleans(),
            st.none(),
        ),
        max_size=5,
    ))


class TestJSONFormatProperty:
    """JSON output is one parseable object per line with all fields."""

    @given(
        level=log_level_strategy(),
        component=component_name_strategy(),
        message=message_strategy(),
        data=data_strategy(),
    )
    @settings(max_examples=100)
    def test_json_entry_roundtrip(self, level, component, message, data) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream, min_level=LogLevel.DEBUG)

        entry = logger.log(level, component, message, data)
        parsed = json.loads(stream.getvalue().strip())

        assert parsed["level"] == level.value
        assert parsed["component"] == component
        assert parsed["message"] == message
        assert parsed["data"] == data
        assert parsed["timestamp"] == entry.timestamp


class TestTextFormatProperty:
    """Text output carries level, component and message on one line."""

    @given(
        level=log_level_strategy(),
        component=component_name_strategy(),
        message=message_strategy(),
    )
    @settings(max_examples=100)
    def test_text_entry_fields(self, level, component, message) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream, min_level=LogLevel.DEBUG)

        logger.log(level, component, message)
        line = stream.getvalue()

        assert line.count("\n") == 1
        assert level.value.upper() in line
        assert f"[{component}]" in line
        assert message in line

    def test_both_formats(self) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="both", output_stream=stream)

        logger.info("RootZoneGenerator", "done")
        lines = stream.getvalue().splitlines()

        assert len(lines) == 2
        assert json.loads(lines[0])["message"] == "done"
        assert lines[1].endswith("done")

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValueError):
            AuditLogger(output_format="xml")


class TestLevelFilterProperty:
    """Entries below the minimum level are recorded but not written."""

    @given(level=log_level_strategy(), min_level=log_level_strategy())
    @settings(max_examples=100)
    def test_filtering(self, level: LogLevel, min_level: LogLevel) -> None:
        stream = StringIO()
        logger = AuditLogger(output_stream=stream, min_level=min_level)

        logger.log(level, "component", "message")

        assert len(logger.entries) == 1
        assert bool(stream.getvalue()) == (level.rank >= min_level.rank)

    @given(
        max_entries=st.integers(min_value=1, max_value=20),
        count=st.integers(min_value=0, max_value=50),
    )
    @settings(max_examples=100)
    def test_retained_entries_capped(self, max_entries: int, count: int) -> None:
        stream = StringIO()
        logger = AuditLogger(output_stream=stream, max_entries=max_entries)

        for i in range(count):
            logger.info("component", f"message {i}")

        messages = [e.message for e in logger.entries]
        assert messages == [f"message {i}" for i in range(max(0, count - max_entries), count)]
        assert len(stream.getvalue().splitlines()) == count

    def test_clear_entries(self) -> None:
        logger = AuditLogger(output_stream=StringIO())
        logger.warn("component", "first")
        logger.clear_entries()

        assert logger.entries == []


class TestErrorContextProperty:
    """log_error records the exception type, message and code."""

    def test_error_context(self) -> None:
        logger = AuditLogger(output_stream=StringIO())
        error = WhoisParseError(code="unknown_key", message="Unknown key 'foo'")

        entry = logger.log_error("RootZoneGenerator", "Run aborted", error, {"tld": "aaa"})

        assert entry.level == LogLevel.ERROR
        assert entry.data["tld"] == "aaa"
        assert entry.data["error_type"] == "WhoisParseError"
        assert entry.data["error_code"] == "unknown_key"
        assert "Unknown key 'foo'" in entry.data["error_message"]

    @given(message=message_strategy())
    @settings(max_examples=50)
    def test_plain_exception_has_no_code(self, message: str) -> None:
        logger = AuditLogger(output_stream=StringIO())

        entry = logger.log_error("component", message, ValueError("bad"))

        assert "error_code" not in entry.data
        assert entry.data["error_type"] == "ValueError"
