import json
import logging

from toolbox_core.infrastructure.logging.logger import JsonFormatter, redact_secrets


def _record(msg, extra=None):
    record = logging.LogRecord("toolbox_core", logging.WARNING, __file__, 1, msg, None, None)
    if extra is not None:
        record.extra = extra
    return record


def test_redact_secrets():
    text = (
        "POST https://generativelanguage.googleapis.com/v1beta/models/m:generateContent?key=AIzaSecret failed; "
        "Authorization: Bearer sk-live-123; x-api-key: sk-ant-456"
    )
    redacted = redact_secrets(text)
    assert "AIzaSecret" not in redacted
    assert "sk-live-123" not in redacted
    assert "sk-ant-456" not in redacted
    assert "?key=***" in redacted


def test_json_formatter_scrubs_message_and_extra():
    record = _record(
        "Chat request failed: https://x/y?key=AIzaSecret",
        extra={"provider": "gemini", "error": "Bearer sk-live-123", "http_status": 401},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["provider"] == "gemini"
    assert payload["http_status"] == 401
    assert "AIzaSecret" not in payload["msg"]
    assert payload["error"] == "Bearer ***"
