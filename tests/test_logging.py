from __future__ import annotations

import logging

import structlog

from synapse_moderation.logging.events import redact_personal_info, setup_logging


def test_redact_personal_info_scrubs_string_fields() -> None:
    event = {"event": "moderation_provider_failed", "error": "bad input alex@example.com", "attempt": 2}

    redacted = redact_personal_info(None, "warning", event)

    assert redacted["error"] == "bad input [EMAIL_REMOVED]"
    assert redacted["attempt"] == 2


def test_setup_logging_installs_redaction(capsys) -> None:
    setup_logging(level=logging.INFO, use_json=True)
    try:
        structlog.get_logger("test").info("user_note", note="write to a@b.io")
        output = capsys.readouterr().out
    finally:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    assert "[EMAIL_REMOVED]" in output
    assert "a@b.io" not in output
