"""Tests for structured logging."""

import json
from io import StringIO

import pytest
import structlog

from formlogic.observability.logging import (
    ValueRedactor,
    configure_from_settings,
    get_logger,
    setup_logging,
)
from formlogic.rules import validate


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore the library's default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
    setup_logging()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self) -> None:
        """Should configure JSON format for production."""
        setup_logging(level="INFO", format="json", redact_values=True)
        get_logger("test").info("test_message")

    def test_setup_console_format(self) -> None:
        """Should configure console format for development."""
        setup_logging(level="DEBUG", format="console", redact_values=False)
        get_logger("test").debug("test_message")

    def test_unknown_level_defaults_to_info(self) -> None:
        """Unknown level names fall back to INFO."""
        setup_logging(level="LOUD", format="json")
        get_logger("test").info("test_message")

    def test_configure_from_settings(
        self, test_config_dir, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should read level and format from configuration."""
        mock_toml_files(
            {"default.toml": "[observability.logging]\nlevel = 'DEBUG'\nformat = 'console'"}
        )
        monkeypatch.setenv("FORMLOGIC_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("FORMLOGIC_ENV", "nonexistent")

        configure_from_settings()
        get_logger("test").debug("test_message")


class TestValueRedactor:
    """Tests for value redaction."""

    @pytest.fixture
    def redactor(self) -> ValueRedactor:
        """Create a ValueRedactor instance."""
        return ValueRedactor()

    def test_redacts_field_values(self, redactor: ValueRedactor) -> None:
        """Should redact form input carried under value keys."""
        event_dict = {"value": "hunter2", "param": "8", "rule": "min"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["value"] == "[REDACTED]"
        assert result["param"] == "[REDACTED]"
        assert result["rule"] == "min"

    def test_keeps_field_values_when_disabled(self) -> None:
        """Should keep value keys when redact_values is off."""
        redactor = ValueRedactor(redact_values=False)
        result = redactor(None, None, {"value": "abc", "password": "secret"})  # type: ignore
        assert result["value"] == "abc"
        assert result["password"] == "[REDACTED]"

    def test_redacts_secret_keys_case_insensitively(self, redactor: ValueRedactor) -> None:
        """Should redact secret keys regardless of case."""
        result = redactor(None, None, {"Token": "abc", "API_KEY": "k"})  # type: ignore
        assert result["Token"] == "[REDACTED]"
        assert result["API_KEY"] == "[REDACTED]"

    def test_redacts_patterns_in_strings(self, redactor: ValueRedactor) -> None:
        """Should scrub email, SSN and card patterns in string values."""
        expression = "fields.email == 'user@example.com' || value == '123-45-6789'"
        result = redactor(None, None, {"expression": expression})  # type: ignore
        assert "user@example.com" not in result["expression"]
        assert "[EMAIL]" in result["expression"]
        assert "[SSN]" in result["expression"]

    def test_redacts_card_numbers(self, redactor: ValueRedactor) -> None:
        """Should scrub card-like digit runs."""
        result = redactor(None, None, {"expression": "value === '4111 1111 1111 1111'"})  # type: ignore
        assert "4111" not in result["expression"]
        assert "[CARD]" in result["expression"]

    def test_handles_nested_structures(self, redactor: ValueRedactor) -> None:
        """Should walk nested dicts and lists."""
        event_dict = {
            "context": {"value": "x", "field": "email"},
            "unknown": ["a@b.co", "plain"],
        }
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["context"]["value"] == "[REDACTED]"
        assert result["context"]["field"] == "email"
        assert result["unknown"] == ["[EMAIL]", "plain"]

    def test_preserves_diagnostics(self, redactor: ValueRedactor) -> None:
        """Should preserve non-sensitive data."""
        event_dict = {"event": "rule_chain_failed", "rule": "email", "field": "contact", "count": 2}
        assert redactor(None, None, event_dict) == event_dict  # type: ignore


class TestJSONLogging:
    """Tests for JSON log output format."""

    def test_json_output_is_redacted(self) -> None:
        """Should produce valid JSON with values redacted."""
        output = StringIO()
        structlog.configure(
            processors=[
                structlog.processors.add_log_level,
                ValueRedactor(redact_values=True),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(0),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(output),
            cache_logger_on_first_use=False,
        )

        structlog.get_logger("test").warning("rule_chain_failed", rule="min", value="secret")

        parsed = json.loads(output.getvalue().strip())
        assert parsed["event"] == "rule_chain_failed"
        assert parsed["rule"] == "min"
        assert parsed["value"] == "[REDACTED]"
        assert parsed["level"] == "warning"


class TestLibraryDefaults:
    """Tests for logging behaviour when the host configures nothing."""

    def test_get_logger_applies_defaults(self) -> None:
        """Should configure structlog on first use when unconfigured."""
        structlog.reset_defaults()
        assert structlog.is_configured() is False

        get_logger("test")
        assert structlog.is_configured() is True

    def test_validation_diagnostics_stay_off_stdout(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Should not print debug diagnostics or raw parameters to stdout."""
        validate("hunter2secret", "min:50")
        validate("x", "min:5")
        validate("x", "nosuchrule")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "rule_chain_failed" not in captured.err
        assert "hunter2secret" not in captured.err
