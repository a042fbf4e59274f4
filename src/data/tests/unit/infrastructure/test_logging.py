"""Unit tests for structlog configuration."""

import pytest
import structlog

from infrastructure.logging import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output_without_tty(self, monkeypatch, capsys):
        """Non-interactive output is rendered as JSON."""
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("sys.stdout.isatty", lambda: False)

        configure_logging()
        structlog.get_logger().info("application_saved", entity_id="a")

        out = capsys.readouterr().out
        assert '"event": "application_saved"' in out
        assert '"entity_id": "a"' in out

    def test_console_output_when_forced(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_can_be_forced_on_a_terminal(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging(json_logs=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_service_name_stamped_on_events(self, capsys):
        configure_logging(json_logs=True, service="aroma-data")
        structlog.get_logger().info("user_saved")

        assert '"service": "aroma-data"' in capsys.readouterr().out

    def test_level_name_filters_lower_events(self, capsys):
        """Events below the configured level are dropped."""
        configure_logging("WARNING", json_logs=True)
        log = structlog.get_logger()

        log.info("message_saved")
        log.warning("message_operation_failed")

        out = capsys.readouterr().out
        assert "message_saved" not in out
        assert "message_operation_failed" in out

    def test_unknown_level_name_rejected(self):
        with pytest.raises(ValueError):
            configure_logging("chatty")
