import asyncio
import math
from typing import Callable, List, Optional, Set

from loguru import logger

from leadscout.clients import GeminiClient, grounding_tools
from leadscout.config import ACQUISITION_TEMPERATURE, BATCH_DELAY_SECONDS, BATCH_SIZE, MAPS_MODEL
from leadscout.errors import ConfigurationError, ModelError, NoLeadsFoundError, ParseError
from leadscout.models import Lead
from leadscout.parsing import leads_from_batch, parse_json_response

SEARCH_FAILED_MESSAGE = "Failed to search for leads."
NO_LEADS_MESSAGE = "No high-quality leads found. Try a different niche or verify the location."

PROMPT_TEMPLATE = """
TASK: Find {batch_size} distinct INDEPENDENT business leads for "{niche}" at/near "{location}".

LOCATION HANDLING:
- Resolve the location string "{location}" as written.
- If it contains "near" or a state/region name, prefer map pins inside that specific area.

QUALIFICATION RULES:
1. INDEPENDENT ONLY: no national or global chains, no franchises, no elite destination venues.
2. PHYSICAL STOREFRONT: a real street address and a visible place of business.
3. ACTIVE: currently open and trading.
4. TRUST SIGNALS (AT LEAST 2 OF):
   - 10 or more reviews
   - photos uploaded by the owner
   - recently updated opening hours
   - owner replies to reviews
5. EXCEPTION: a business with 0-9 reviews qualifies if it has its own website (early-bird target).

ENRICHMENT (REQUIRED):
- Use googleSearch to find the Instagram and LinkedIn profile URLs of each business.
- Only accept official profiles matching the business name and city.

TOOLS: use googleMaps for location pins and googleSearch for chain, website and social checks.
OUTPUT: return ONLY a raw JSON array, no commentary.
SCHEMA: [{{"name": "...", "phone": "...", "website": "...", "rating": 4.1, "reviewCount": 120, "address": "...", "email": "...", "instagram": "...", "linkedin": "...", "mobile_speed_issue": true, "mobile_speed_confidence": "Medium"}}]
"""

ProgressCallback = Callable[[str], None]


def build_batch_prompt(niche: str, location: str, batch_size: int = BATCH_SIZE) -> str:
    return PROMPT_TEMPLATE.format(batch_size=batch_size, niche=niche, location=location)


def _report(on_progress: Optional[ProgressCallback], message: str) -> None:
    logger.info(message)
    if on_progress:
        on_progress(message)


async def _request_batch(client: GeminiClient, niche: str, location: str, batch_size: int) -> str:
    try:
        return await client.generate_content(
            model=MAPS_MODEL,
            prompt=build_batch_prompt(niche, location, batch_size),
            tools=grounding_tools(),
            temperature=ACQUISITION_TEMPERATURE,
        )
    except ModelError as e:
        logger.error(f"Gemini error: {e}")
        if str(e):
            raise
        raise ModelError(SEARCH_FAILED_MESSAGE) from e


def _parse_batch(text: str, niche: str, batch_no: int) -> List[Lead]:
    """Decode one batch reply. An unreadable batch counts as empty."""
    try:
        return leads_from_batch(parse_json_response(text, "["), niche)
    except ParseError as e:
        logger.warning(f"Batch {batch_no} parse failed, skipping: {e}")
        return []


async def fetch_leads(
    api_key: str,
    niche: str,
    location: str,
    total_count: int,
    on_progress: Optional[ProgressCallback] = None,
    *,
    batch_size: int = BATCH_SIZE,
    batch_delay: float = BATCH_DELAY_SECONDS,
) -> List[Lead]:
    """
    Discover, deduplicate and score leads for a niche in a location.

    Batches are requested one after another until `total_count` leads are
    collected or ceil(total_count / batch_size) batches have been issued,
    sleeping `batch_delay` seconds between batches.

    Args:
        api_key (str): Gemini API key.
        niche (str): Business type to search for, e.g. "bakery".
        location (str): Free-form location, e.g. "Leeds".
        total_count (int): Target number of leads.
        on_progress: Optional callback receiving status messages.

    Returns:
        List[Lead]: Unique leads sorted by lead_score, highest first.

    Raises:
        ConfigurationError: Missing API key or non-positive count.
        ModelError: A Gemini call failed.
        NoLeadsFoundError: No batch produced a qualifying lead.
    """
    client = GeminiClient(api_key)
    if total_count <= 0:
        raise ConfigurationError("Lead count must be a positive number.")

    batches = math.ceil(total_count / batch_size)
    leads: List[Lead] = []
    seen: Set[str] = set()

    _report(on_progress, f'Grounding search for "{niche}" in "{location}"...')

    for i in range(batches):
        _report(on_progress, f"Batch {i + 1}/{batches}: Analyzing independent business signals...")

        text = await _request_batch(client, niche, location, batch_size)
        for lead in _parse_batch(text, niche, i + 1):
            if lead.key in seen:
                logger.debug(f"Duplicate lead skipped: {lead.name}")
                continue
            seen.add(lead.key)
            leads.append(lead)

        _report(on_progress, f"Batch {i + 1}/{batches} complete: {len(leads)} unique leads")

        if len(leads) >= total_count:
            break
        if i < batches - 1:
            await asyncio.sleep(batch_delay)

    if not leads:
        raise NoLeadsFoundError(NO_LEADS_MESSAGE)

    leads.sort(key=lambda lead: lead.lead_score, reverse=True)
    return leads
