from __future__ import annotations

import asyncio
import logging
from typing import Optional

import structlog

from ..adapters.base import (
    PROVIDER_CATEGORIES,
    ModerationProvider,
    ProviderCredentialMissing,
    ProviderError,
    ProviderResult,
    ProviderTimeout,
)
from ..adapters.openai import OmniModerationClient
from ..config import ModerationSettings
from ..logging.events import setup_logging
from ..models import ContentCategory, ModerationVerdict, VerdictSource, ViolationKind
from ..rules.engine import RuleEngine
from ..rules.patterns import text_length

logger = structlog.get_logger(__name__)

QUICK_CHECK_EXEMPT_LENGTH = 5

_PROVIDER_KINDS: dict[str, ViolationKind] = {
    "hate": ViolationKind.HATE,
    "harassment": ViolationKind.HARASSMENT,
    "violence": ViolationKind.VIOLENCE,
    "self-harm": ViolationKind.SELF_HARM,
    "sexual": ViolationKind.SEXUAL,
}


class ModerationOrchestrator:
    """Single entry point for content moderation.

    ``moderate`` prefers the external provider and silently falls back to the
    rule engine on any provider failure, so an outage degrades judgement but
    never blocks a submission. ``quick_check`` only ever uses the rules.
    """

    def __init__(
        self,
        provider: Optional[ModerationProvider],
        rule_engine: Optional[RuleEngine] = None,
        *,
        provider_timeout: float = 20.0,
    ) -> None:
        if provider_timeout <= 0:
            raise ValueError("provider_timeout must be positive")
        self._provider = provider
        self._rules = rule_engine or RuleEngine()
        self._provider_timeout = provider_timeout
        self._provider_ready = provider is not None and provider.is_configured
        logger.info(
            "moderation_orchestrator_initialized",
            provider_ready=self._provider_ready,
            provider_timeout=provider_timeout,
        )

    @classmethod
    def from_settings(cls, settings: ModerationSettings) -> "ModerationOrchestrator":
        log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)
        setup_logging(level=log_level, use_json=settings.logging.use_json)
        return cls(
            OmniModerationClient.from_settings(settings.openai),
            RuleEngine(),
            provider_timeout=settings.provider_deadline_seconds,
        )

    @property
    def provider_ready(self) -> bool:
        return self._provider_ready

    async def moderate(self, text: str, category: ContentCategory) -> ModerationVerdict:
        verdict: Optional[ModerationVerdict] = None
        if self._provider_ready:
            try:
                result = await self._classify_with_deadline(text)
            except ProviderError as exc:
                logger.warning(
                    "moderation_provider_failed",
                    error_type=type(exc).__name__,
                    error=str(exc),
                    category=category.value,
                )
            else:
                verdict = self._from_provider(result)

        if verdict is None:
            verdict = self._rules.evaluate(text)
        logger.info(
            "moderation_verdict",
            source=verdict.source.value,
            category=category.value,
            allowed=verdict.is_allowed,
            moderation_id=verdict.moderation_id,
        )
        return verdict

    def quick_check(self, text: str, category: ContentCategory = ContentCategory.CHAT) -> bool:
        if text_length(text) <= QUICK_CHECK_EXEMPT_LENGTH:
            return True
        allowed = self._rules.evaluate(text).is_allowed
        if not allowed:
            logger.debug("quick_check_rejected", category=category.value, text_length=text_length(text))
        return allowed

    async def test_services(self) -> list[str]:
        if self._provider is None:
            message = "❌ OpenAI API key not configured"
        else:
            _, message = await self._provider.test_connection()
        return [f"OpenAI: {message}", "Custom Rules: ✅ Ready"]

    async def close(self) -> None:
        close = getattr(self._provider, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "ModerationOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _classify_with_deadline(self, text: str) -> ProviderResult:
        provider = self._provider
        if provider is None:
            raise ProviderCredentialMissing()
        try:
            async with asyncio.timeout(self._provider_timeout):
                return await provider.classify(text)
        except TimeoutError as exc:
            raise ProviderTimeout(f"no provider answer within {self._provider_timeout}s") from exc

    @staticmethod
    def _from_provider(result: ProviderResult) -> ModerationVerdict:
        violations = frozenset(
            _PROVIDER_KINDS[name] for name in PROVIDER_CATEGORIES if result.categories.get(name)
        )
        return ModerationVerdict(
            is_allowed=not result.flagged,
            confidence=result.max_score(),
            violations=violations,
            source=VerdictSource.PROVIDER,
        )
