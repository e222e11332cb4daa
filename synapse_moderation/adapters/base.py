from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

PROVIDER_CATEGORIES: tuple[str, ...] = ("hate", "harassment", "violence", "self-harm", "sexual")


class ProviderError(Exception):
    """Base for every failure of an external moderation provider."""


class ProviderCredentialMissing(ProviderError):
    def __init__(self) -> None:
        super().__init__("moderation provider API key is not configured")


class ProviderHttpError(ProviderError):
    def __init__(self, status_code: Optional[int], detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"provider returned HTTP {status_code}" if status_code is not None else "provider request failed"
        super().__init__(f"{message}: {detail}" if detail else message)


class ProviderTimeout(ProviderHttpError):
    def __init__(self, detail: str = "") -> None:
        super().__init__(None, detail or "timed out")


class ProviderMalformedResponse(ProviderError):
    pass


@dataclass(slots=True)
class ProviderResult:
    flagged: bool
    categories: dict[str, bool]
    category_scores: dict[str, float]

    def max_score(self) -> float:
        return max((self.category_scores.get(name, 0.0) for name in PROVIDER_CATEGORIES), default=0.0)


@runtime_checkable
class ModerationProvider(Protocol):
    @property
    def is_configured(self) -> bool:
        ...

    async def classify(self, text: str) -> ProviderResult:
        ...

    async def test_connection(self) -> tuple[bool, str]:
        ...
