"""
Generic OpenAI-compatible provider adapter
Works with any service exposing the OpenAI Chat Completions API
(OpenAI, Azure OpenAI proxies, DeepSeek, local gateways ...)
"""

import asyncio
import logging
from typing import Optional

import httpx

from qahq.core.ai_providers.base import BaseAIProvider

logger = logging.getLogger(__name__)

# Retryable HTTP status codes (transient server-side failures)
_RETRYABLE_STATUS_CODES = {500, 502, 503, 504, 429}
_MAX_RETRIES = 5
_BASE_DELAY = 2  # seconds, exponential backoff base


class OpenAICompatibleProvider(BaseAIProvider):
    """
    OpenAI-compatible adapter
    Subclasses only need to override provider_name.
    """

    def __init__(
        self,
        *args,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 180.0,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self._transport = transport
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        raise NotImplementedError

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_chat_payload(self, system_prompt: str, user_prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout, trust_env=False, transport=self._transport
        )

    async def chat(self, system_prompt: str, user_prompt: str) -> str:
        """
        Chat completion with exponential backoff on transient failures
        """
        url = f"{self.base_url}/chat/completions"
        headers = self._build_headers()
        payload = self._build_chat_payload(system_prompt, user_prompt)

        last_exc: Exception | None = None
        for attempt in range(1, _MAX_RETRIES + 1):
            try:
                async with self._client() as client:
                    response = await client.post(url, json=payload, headers=headers)
                    response.raise_for_status()
                    data = response.json()
                content = data["choices"][0]["message"]["content"]
                if not content:
                    raise ValueError(f"[{self.provider_name}] empty completion")
                return content
            except httpx.HTTPStatusError as e:
                last_exc = e
                status = e.response.status_code
                if status in _RETRYABLE_STATUS_CODES and attempt < _MAX_RETRIES:
                    delay = _BASE_DELAY * (2 ** (attempt - 1))
                    logger.warning(
                        f"[{self.provider_name}] attempt {attempt} failed "
                        f"(HTTP {status}), retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(
                    f"[{self.provider_name}] API request failed "
                    f"(HTTP {status}): {e.response.text[:500]}"
                )
                raise
            except (httpx.ConnectError, httpx.ReadTimeout) as e:
                last_exc = e
                if attempt < _MAX_RETRIES:
                    delay = _BASE_DELAY * (2 ** (attempt - 1))
                    logger.warning(
                        f"[{self.provider_name}] attempt {attempt} connection/timeout error "
                        f"({type(e).__name__}), retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"[{self.provider_name}] call failed: {e}")
                raise
            except Exception as e:
                logger.error(f"[{self.provider_name}] call failed: {e}")
                raise
        raise last_exc  # type: ignore[misc]
