from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import structlog
from pydantic import BaseModel, Field, StrictBool, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import OpenAISettings
from .base import (
    ProviderCredentialMissing,
    ProviderError,
    ProviderHttpError,
    ProviderMalformedResponse,
    ProviderResult,
    ProviderTimeout,
)

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "omni-moderation-latest"
PLACEHOLDER_API_KEY = "YOUR_OPENAI_API_KEY_HERE"


class _CategoryFlags(BaseModel):
    hate: StrictBool
    harassment: StrictBool
    violence: StrictBool
    self_harm: StrictBool = Field(alias="self-harm")
    sexual: StrictBool


class _CategoryScores(BaseModel):
    hate: float = Field(ge=0.0, le=1.0)
    harassment: float = Field(ge=0.0, le=1.0)
    violence: float = Field(ge=0.0, le=1.0)
    self_harm: float = Field(alias="self-harm", ge=0.0, le=1.0)
    sexual: float = Field(ge=0.0, le=1.0)


class _ModerationEntry(BaseModel):
    flagged: StrictBool
    categories: _CategoryFlags
    category_scores: _CategoryScores


class _ModerationResponse(BaseModel):
    results: list[_ModerationEntry] = Field(min_length=1)


class OpenAIAdapter:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        retry_attempts: int = 3,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._retry_attempts = retry_attempts
        self._client = client or httpx.AsyncClient(base_url=self._base_url, timeout=timeout)
        self._owns_client = client is None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key != PLACEHOLDER_API_KEY

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        if not self.is_configured:
            raise ProviderCredentialMissing()

        retry = AsyncRetrying(
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5.0),
            stop=stop_after_attempt(self._retry_attempts),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ReadError)),
            reraise=True,
        )
        # ensure_ascii keeps lone surrogates encodable as JSON escapes
        body = json.dumps(payload)
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        try:
            async for attempt in retry:
                with attempt:
                    logger.debug(
                        "openai_request",
                        path=path,
                        attempt=attempt.retry_state.attempt_number,
                    )
                    response = await self._client.post(path, content=body, headers=headers)
        except httpx.TimeoutException as exc:
            raise ProviderTimeout(str(exc) or type(exc).__name__) from exc
        except httpx.HTTPError as exc:
            raise ProviderHttpError(None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.warning("openai_http_error", path=path, status=response.status_code)
            raise ProviderHttpError(response.status_code, response.text[:200])
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderMalformedResponse("response body is not valid JSON") from exc
        logger.debug("openai_response", path=path, status=response.status_code)
        return data

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class OmniModerationClient(OpenAIAdapter):
    """OpenAI moderation endpoint, reduced to the five categories we act on."""

    def __init__(self, api_key: str, *, model: str = DEFAULT_MODEL, **kwargs: Any) -> None:
        super().__init__(api_key, **kwargs)
        self._model = model

    @classmethod
    def from_settings(
        cls,
        settings: OpenAISettings,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "OmniModerationClient":
        return cls(
            settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            retry_attempts=settings.retry_attempts,
            client=client,
        )

    async def classify(self, text: str) -> ProviderResult:
        logger.debug("omni_api_call", model=self._model, text_length=len(text))
        data = await self.post("/moderations", {"model": self._model, "input": text})
        try:
            parsed = _ModerationResponse.model_validate(data)
        except ValidationError as exc:
            logger.error("omni_response_invalid", errors=exc.error_count())
            raise ProviderMalformedResponse(f"unexpected moderation payload: {exc.error_count()} errors") from exc
        entry = parsed.results[0]
        return ProviderResult(
            flagged=entry.flagged,
            categories=entry.categories.model_dump(by_alias=True),
            category_scores=entry.category_scores.model_dump(by_alias=True),
        )

    async def test_connection(self) -> tuple[bool, str]:
        if not self.is_configured:
            return False, "❌ OpenAI API key not configured"
        try:
            await self.classify("test")
        except ProviderError as exc:
            return False, f"❌ OpenAI connection failed: {exc}"
        return True, "✅ OpenAI connection successful"
