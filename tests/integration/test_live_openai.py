from __future__ import annotations

import os

import pytest

from synapse_moderation.adapters.openai import OmniModerationClient
from synapse_moderation.models import ContentCategory, VerdictSource, ViolationKind
from synapse_moderation.services.moderation_service import ModerationOrchestrator

pytestmark = pytest.mark.skipif(
    not os.getenv("RUN_LIVE_TESTS"),
    reason="Set RUN_LIVE_TESTS=1 to execute tests against the real OpenAI API.",
)


def _require_api_key() -> str:
    key = os.getenv("SYNAPSE_OPENAI__API_KEY") or os.getenv("OPENAI_API_KEY")
    if not key:
        pytest.skip("SYNAPSE_OPENAI__API_KEY or OPENAI_API_KEY is required for live tests.")
    return key


@pytest.mark.asyncio
async def test_live_provider_flags_threat() -> None:
    async with ModerationOrchestrator(OmniModerationClient(_require_api_key())) as orchestrator:
        assert orchestrator.provider_ready

        clean = await orchestrator.moderate("I have a great idea for a mobile app", ContentCategory.IDEA)
        threat = await orchestrator.moderate("I will find you tonight and hurt you badly.", ContentCategory.CHAT)
        health = await orchestrator.test_services()

    assert clean.source == VerdictSource.PROVIDER
    assert clean.is_allowed
    assert threat.source == VerdictSource.PROVIDER
    assert not threat.is_allowed
    assert ViolationKind.VIOLENCE in threat.violations or ViolationKind.HARASSMENT in threat.violations
    assert health[0] == "OpenAI: ✅ OpenAI connection successful"
