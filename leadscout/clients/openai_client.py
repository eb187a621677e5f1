"""
OpenAI-compatible chat client with rate limiting using aiolimiter.
Also serves xAI's Grok through its OpenAI-compatible endpoint.
"""
from typing import Optional
from aiolimiter import AsyncLimiter
from openai import AsyncOpenAI
from loguru import logger

from leadscout.config import REQUESTS_PER_MINUTE
from leadscout.errors import ConfigurationError, ModelError


class OpenAIClient:
    """
    OpenAI client for making chat completion requests.
    Uses AsyncLimiter for rate limiting instead of semaphores.
    """

    def __init__(self, api_key: Optional[str], base_url: Optional[str] = None):
        if not api_key:
            raise ConfigurationError("API Key is missing. Please configure it in Settings.")
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.rate_limiter = AsyncLimiter(max_rate=REQUESTS_PER_MINUTE, time_period=60.0)

    async def chat_completions_create(self, **kwargs):
        """
        Create a chat completion with rate limiting.
        Accepts all arguments that AsyncOpenAI.chat.completions.create accepts.

        Returns:
            The response from the chat completions API.
        """
        async with self.rate_limiter:
            try:
                return await self.client.chat.completions.create(**kwargs)
            except Exception as e:
                logger.debug(f"⚠️ OpenAI API request failed: {e}")
                raise ModelError(str(e)) from e

    async def complete_text(self, model: str, prompt: str, temperature: float = 0.7) -> str:
        resp = await self.chat_completions_create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        return (resp.choices[0].message.content or "").strip()
