from __future__ import annotations

import pytest
from pydantic import ValidationError

from synapse_moderation.config import ModerationSettings
from synapse_moderation.services.moderation_service import ModerationOrchestrator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OPENAI_API_KEY", "SYNAPSE_OPENAI__API_KEY", "SYNAPSE_PROVIDER_DEADLINE_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_settings_read_nested_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNAPSE_OPENAI__API_KEY", "sk-nested")
    monkeypatch.setenv("SYNAPSE_OPENAI__TIMEOUT_SECONDS", "4.5")
    monkeypatch.setenv("SYNAPSE_PROVIDER_DEADLINE_SECONDS", "8")

    settings = ModerationSettings(_env_file=None)

    assert settings.openai.api_key == "sk-nested"
    assert settings.openai.timeout_seconds == 4.5
    assert settings.provider_deadline_seconds == 8.0
    assert settings.openai.model == "omni-moderation-latest"


def test_plain_openai_key_is_used_as_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-plain")

    settings = ModerationSettings(_env_file=None)

    assert settings.openai.api_key == "sk-plain"


def test_invalid_deadline_fails_at_construction(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNAPSE_PROVIDER_DEADLINE_SECONDS", "0")

    with pytest.raises(ValidationError):
        ModerationSettings(_env_file=None)


@pytest.mark.asyncio
async def test_orchestrator_from_settings_readiness(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNAPSE_OPENAI__API_KEY", "YOUR_OPENAI_API_KEY_HERE")
    placeholder = ModerationOrchestrator.from_settings(ModerationSettings(_env_file=None))

    monkeypatch.setenv("SYNAPSE_OPENAI__API_KEY", "sk-real")
    configured = ModerationOrchestrator.from_settings(ModerationSettings(_env_file=None))

    try:
        assert not placeholder.provider_ready
        assert configured.provider_ready
    finally:
        await placeholder.close()
        await configured.close()
