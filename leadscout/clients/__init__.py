"""Clients for external model APIs."""
from leadscout.clients.gemini_client import GeminiClient, grounding_tools
from leadscout.clients.openai_client import OpenAIClient

__all__ = ["GeminiClient", "OpenAIClient", "grounding_tools"]
