# leadscout/config.py
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv
import os

load_dotenv()

# Models. Only Gemini 2.5 models accept the Google Maps tool.
MAPS_MODEL = "gemini-2.5-flash"
TEXT_MODEL = "gemini-3-flash-preview"
OPENAI_PITCH_MODEL = "gpt-4o-mini"
GROK_PITCH_MODEL = "grok-3-mini"

# URLs
GROK_BASE_URL = "https://api.x.ai/v1"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

# Runtime parameters
BATCH_SIZE = 15
BATCH_DELAY_SECONDS = 2.0
PITCH_DELAY_SECONDS = 0.3
ACQUISITION_TEMPERATURE = 0.1
REQUESTS_PER_MINUTE = int(os.getenv("REQUESTS_PER_MINUTE", "60"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# File names
LEADS_CSV = "leads"
PITCHES_CSV = "leads"

PITCH_MODELS = ("gemini", "openai", "claude", "grok")


@dataclass(frozen=True)
class Settings:
    """Credentials and provider choice, passed explicitly into every entry point."""
    gemini_key: str = ""
    openai_key: str = ""
    claude_key: str = ""
    grok_key: str = ""
    pitch_model: str = "gemini"

    @classmethod
    def from_env(cls, pitch_model: Optional[str] = None) -> "Settings":
        return cls(
            gemini_key=os.getenv("GEMINI_API_KEY", ""),
            openai_key=os.getenv("OPENAI_API_KEY", ""),
            claude_key=os.getenv("CLAUDE_API_KEY", ""),
            grok_key=os.getenv("GROK_API_KEY", ""),
            pitch_model=pitch_model or os.getenv("PITCH_MODEL", "gemini"),
        )
