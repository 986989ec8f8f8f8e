"""Client for the Gemini ``generateContent`` REST endpoint."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from refactor_review.core.config import DEFAULT_API_BASE, DEFAULT_MODEL, DEFAULT_TIMEOUT
from refactor_review.core.schema import GenerateContentResponse, build_generate_request

from .transform import ConfigurationError, MalformedResponseError, TransportError

logger = logging.getLogger(__name__)


class GeminiTransformClient:
    """Single-turn text generation against the Gemini API.

    The credential travels as the ``key`` query parameter. Each call is a
    single attempt bounded by ``timeout`` seconds; failures surface
    immediately as :class:`TransformError` subclasses.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(api_base)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_base must include scheme and host")

        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._request_url = f"{api_base.rstrip('/')}/v1beta/models/{model}:generateContent"
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    @property
    def request_url(self) -> str:
        return self._request_url

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _describe_failure(response: httpx.Response) -> str:
        message = ""
        try:
            body: Any = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                message = str(error.get("message") or "")
            elif error:
                message = str(error)
        if message:
            return f"endpoint returned HTTP {response.status_code}: {message}"
        return f"endpoint returned HTTP {response.status_code}"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def submit(self, prompt: str) -> str:
        if not self._api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")

        logger.debug("submitting prompt of %d characters to %s", len(prompt), self._model)
        try:
            response = await self._client.post(
                self._request_url,
                params={"key": self._api_key},
                json=build_generate_request(prompt),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"request to {self._model} timed out after {self._timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {self._model} failed: {exc.__class__.__name__}") from exc

        if not response.is_success:
            raise TransportError(self._describe_failure(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError("response body is not valid JSON") from exc

        try:
            text = GenerateContentResponse.model_validate(payload).first_text()
        except ValidationError as exc:
            raise MalformedResponseError(
                f"response does not contain candidates[0].content.parts[0].text ({exc.error_count()} errors)"
            ) from exc

        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["GeminiTransformClient"]
