"""
Gemini client with rate limiting using aiolimiter.
"""
from typing import Optional
from aiolimiter import AsyncLimiter
from google import genai
from google.genai import types
from loguru import logger

from leadscout.config import REQUESTS_PER_MINUTE
from leadscout.errors import ConfigurationError, ModelError


def grounding_tools():
    """Google Maps pins plus Google Search for chain/site/social verification."""
    return [
        types.Tool(google_maps=types.GoogleMaps()),
        types.Tool(google_search=types.GoogleSearch()),
    ]


class GeminiClient:
    """
    Gemini client for making generate_content requests.
    One instance per operation; the API key is never stored beyond it.
    """

    def __init__(self, api_key: Optional[str]):
        if not api_key:
            raise ConfigurationError("API Key is missing. Please configure it in Settings.")
        self.client = genai.Client(api_key=api_key)
        # Token bucket: REQUESTS_PER_MINUTE calls per rolling minute
        self.rate_limiter = AsyncLimiter(max_rate=REQUESTS_PER_MINUTE, time_period=60.0)

    async def generate_content(
        self,
        model: str,
        prompt: str,
        tools: Optional[list] = None,
        temperature: Optional[float] = None,
        response_mime_type: Optional[str] = None,
    ) -> str:
        """
        Run one generate_content call and return the response text.

        Returns:
            str: Response text, empty if the model returned none.

        Raises:
            ModelError: If the request itself fails.
        """
        config = types.GenerateContentConfig(
            tools=tools,
            temperature=temperature,
            response_mime_type=response_mime_type,
        )
        async with self.rate_limiter:
            try:
                response = await self.client.aio.models.generate_content(
                    model=model,
                    contents=prompt,
                    config=config,
                )
            except Exception as e:
                logger.debug(f"⚠️ Gemini request to {model} failed: {e}")
                raise ModelError(str(e)) from e
        return response.text or ""
