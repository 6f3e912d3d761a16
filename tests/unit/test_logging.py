"""Unit tests for logging service."""

import json

import structlog

from src.services.logging_service import configure_logging, get_logger, redact_sensitive


class TestRedactSensitive:
    """Tests for redact_sensitive processor."""

    def test_redacts_password(self):
        event_dict = {"password": "mypassword", "event": "test"}
        result = redact_sensitive(None, None, event_dict)
        assert result["password"] == "REDACTED"
        assert result["event"] == "test"

    def test_redacts_tokens(self):
        """Test access and refresh token fields are redacted."""
        event_dict = {"refresh_token": "eyJ...", "access_token": "eyJ...", "event": "test"}
        result = redact_sensitive(None, None, event_dict)
        assert result["refresh_token"] == "REDACTED"
        assert result["access_token"] == "REDACTED"

    def test_redacts_authorization(self):
        event_dict = {"authorization": "Bearer token123", "event": "test"}
        result = redact_sensitive(None, None, event_dict)
        assert result["authorization"] == "REDACTED"

    def test_redacts_totp_material(self):
        """Test stored secrets and generated codes are redacted."""
        event_dict = {"secret": "JBSWY3DPEHPK3PXP", "otp_code": "123456", "event": "test"}
        result = redact_sensitive(None, None, event_dict)
        assert result["secret"] == "REDACTED"
        assert result["otp_code"] == "REDACTED"

    def test_event_name_is_never_redacted(self):
        event_dict = {"event": "refresh_token_rotated"}
        result = redact_sensitive(None, None, event_dict)
        assert result["event"] == "refresh_token_rotated"

    def test_preserves_non_sensitive_fields(self):
        event_dict = {
            "correlation_id": "abc-123",
            "user_id": "42",
            "message_key": "auth.invalid_token",
        }
        result = redact_sensitive(None, None, event_dict)
        assert result == {
            "correlation_id": "abc-123",
            "user_id": "42",
            "message_key": "auth.invalid_token",
        }

    def test_case_insensitive_redaction(self):
        event_dict = {
            "API_KEY": "secret1",
            "Password": "secret2",
            "JWT_REFRESH_SECRET": "secret3",
        }
        result = redact_sensitive(None, None, event_dict)
        assert result["API_KEY"] == "REDACTED"
        assert result["Password"] == "REDACTED"
        assert result["JWT_REFRESH_SECRET"] == "REDACTED"


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_get_logger_binds_name(self):
        configure_logging("DEBUG")
        logger = get_logger("test_module")
        assert logger is not None
        logger.info("test_event", data="value")

    def test_get_logger_without_name(self):
        configure_logging("INFO")
        assert get_logger() is not None

    def test_output_is_redacted_json(self, capsys):
        configure_logging("INFO")
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id="corr-1")

        get_logger("auth").info("user_logged_in", user_id="u-1", password="hunter22")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "user_logged_in"
        assert entry["correlation_id"] == "corr-1"
        assert entry["logger_name"] == "auth"
        assert entry["password"] == "REDACTED"
        assert entry["level"] == "info"
        structlog.contextvars.clear_contextvars()

    def test_level_filters_below_threshold(self, capsys):
        configure_logging("WARNING")
        get_logger().info("quiet_event")
        assert "quiet_event" not in capsys.readouterr().out


class TestCorrelationIdBinding:
    """Tests for correlation ID context binding."""

    def test_correlation_id_binds_to_context(self):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id="test-correlation-123")

        context = structlog.contextvars.get_contextvars()
        assert context.get("correlation_id") == "test-correlation-123"
        structlog.contextvars.clear_contextvars()

    def test_correlation_id_clears_correctly(self):
        structlog.contextvars.bind_contextvars(correlation_id="to-be-cleared")
        structlog.contextvars.clear_contextvars()

        assert "correlation_id" not in structlog.contextvars.get_contextvars()
