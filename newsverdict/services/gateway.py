"""
Async client for the AI gateway's chat-completions endpoint.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from newsverdict.core.config import config
from newsverdict.core.errors import (
    ConfigurationError,
    InvalidResponseError,
    QuotaExceededError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class AIGatewayClient:
    """
    Sends one system/user message pair to an OpenAI-compatible gateway and
    returns the generated message text. No retries: every failure maps to a
    distinct AnalysisError.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = config.AI_GATEWAY_URL,
        model_name: str = config.LLM_MODEL_NAME,
        timeout: int = config.API_TIMEOUT,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model_name = model_name
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> "AIGatewayClient":
        return cls(
            api_key=config.LOVABLE_API_KEY,
            base_url=config.AI_GATEWAY_URL,
            model_name=config.LLM_MODEL_NAME,
            timeout=config.API_TIMEOUT,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict, session: aiohttp.ClientSession) -> Dict[str, Any]:
        """
        POST the payload and decode the JSON body.

        Args:
            payload: Chat-completions request body
            session: aiohttp ClientSession for making requests

        Returns:
            Decoded response body
        """
        try:
            async with session.post(
                self.base_url,
                json=payload,
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status == 429:
                    logger.error("Rate limit exceeded")
                    raise RateLimitError()
                if response.status == 402:
                    logger.error("Payment required")
                    raise QuotaExceededError()
                if not 200 <= response.status < 300:
                    error_text = await response.text()
                    logger.error(f"AI gateway error: {response.status} {error_text}")
                    raise UpstreamError()

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"AI gateway returned a non-JSON body: {e}")
                    raise InvalidResponseError()

        except asyncio.TimeoutError:
            logger.error(f"AI gateway timed out after {self.timeout}s")
            raise UpstreamError()
        except aiohttp.ClientError as e:
            logger.error(f"AI gateway request failed: {e}")
            raise UpstreamError()

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        """Reads choices[0].message.content, tolerating any missing level."""
        if not isinstance(data, dict):
            return None
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, str) and content:
            return content
        return None

    async def complete(
        self,
        messages: List[Dict[str, str]],
        session: Optional[aiohttp.ClientSession] = None,
    ) -> str:
        """
        Run one chat completion (main public method).

        Args:
            messages: ``[{"role": "system", ...}, {"role": "user", ...}]``
            session: Optional shared session; a fresh one is opened otherwise

        Returns:
            The generated message text

        Raises:
            ConfigurationError: no API key, nothing is sent
            RateLimitError / QuotaExceededError: upstream 429 / 402
            UpstreamError: other non-success status or transport failure
            InvalidResponseError: success without extractable message text
        """
        if not self.is_configured:
            logger.error("LOVABLE_API_KEY is not configured")
            raise ConfigurationError()

        payload = {"model": self.model_name, "messages": messages}

        if session is None:
            async with aiohttp.ClientSession() as own_session:
                data = await self._post(payload, own_session)
        else:
            data = await self._post(payload, session)

        content = self._extract_content(data)
        if content is None:
            logger.error(f"No content in AI response: {data}")
            raise InvalidResponseError()

        return content
