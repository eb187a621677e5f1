"""
Per-lead generation: outreach emails, ad-hoc pitches and website audits.

Each operation has a `try_*` form returning a GenerationResult, so callers
choose their own failure policy. The public wrappers keep the established
ones: batch pitches substitute an "Error" sentinel, audits raise, and
ad-hoc pitches fall back to a fixed message.
"""
import asyncio
from dataclasses import replace
from functools import partial
from typing import Awaitable, Callable, List, Optional

from loguru import logger

from leadscout.catalog import pitch_label
from leadscout.clients import GeminiClient, OpenAIClient, grounding_tools
from leadscout.config import (
    GROK_BASE_URL,
    GROK_PITCH_MODEL,
    MAPS_MODEL,
    OPENAI_PITCH_MODEL,
    PITCH_DELAY_SECONDS,
    TEXT_MODEL,
    Settings,
)
from leadscout.errors import GenerationError, ParseError
from leadscout.models import AuditReport, GenerationResult, Lead, PitchResult
from leadscout.parsing import audit_report_from_raw, parse_json_response

PITCH_FAILED_MESSAGE = "Pitch generation failed."
ERROR_SENTINEL = "Error"

EMAIL_PROMPT = """Write a personalized cold email for "{name}" ({type}, {address}).
Service to pitch: {service}.
Their Google rating is {rating} from {reviews} reviews. Website: {website}.
Keep it under 150 words, friendly and specific to their business.
Format JSON: {{"subject": "...", "body": "..."}}"""

AUDIT_PROMPT = """Conduct a technical website audit for "{name}" at {address}.
Website: {website}.
Use googleSearch to inspect the site and googleMaps to check the business listing.
Return ONLY a JSON object with this shape:
{{"overallScore": 0-100, "summary": "...",
  "categories": [{{"name": "...", "score": 0-10, "status": "Good|Fair|Poor"}}],
  "keyFindings": [{{"type": "issue|good", "text": "..."}}],
  "roadmap": [{{"phase": "Phase 1", "title": "...", "items": ["..."]}}],
  "technicalDetails": [{{"title": "...", "value": "...", "status": "pass|fail|warning"}}]}}"""

PITCH_PROMPT = "Pitch {service} to {name} in {address}. Focus on their {rating} rating."

PitchProgress = Callable[[int, int], None]
TextWriter = Callable[[str], Awaitable[str]]


def _failure(what: str, lead: Lead, e: Exception) -> GenerationResult:
    logger.warning(f"{what} failed for '{lead.name}': {e}")
    error = e if isinstance(e, GenerationError) else GenerationError(str(e) or f"{what} failed.")
    return GenerationResult(error=error)


async def try_generate_email(client: GeminiClient, lead: Lead) -> GenerationResult[PitchResult]:
    """
    Draft one cold email for a lead with an existing Gemini client.

    Returns:
        GenerationResult[PitchResult]: The pitch, or the error that stopped it.
    """
    service = pitch_label(lead.recommended_service_id)
    prompt = EMAIL_PROMPT.format(
        name=lead.name,
        type=lead.type,
        address=lead.address,
        service=service,
        rating=lead.rating,
        reviews=lead.review_count,
        website=lead.website or "none",
    )
    try:
        text = await client.generate_content(
            model=TEXT_MODEL,
            prompt=prompt,
            response_mime_type="application/json",
        )
        data = parse_json_response(text, "{")
        subject, body = data.get("subject"), data.get("body")
        if not isinstance(subject, str) or not isinstance(body, str):
            raise ParseError("Email response is missing subject or body", raw_text=text[:200])
    except Exception as e:
        return _failure("Email generation", lead, e)

    return GenerationResult(value=PitchResult(
        lead=replace(lead),
        service_to_pitch=service,
        primary_issue=service,
        confidence_level="High",
        email_subject=subject,
        email_body=body,
    ))


def error_pitch(lead: Lead, error: Optional[Exception] = None) -> PitchResult:
    """Placeholder row for a lead whose email could not be generated."""
    service = pitch_label(lead.recommended_service_id)
    return PitchResult(
        lead=replace(lead),
        service_to_pitch=service,
        primary_issue=service,
        confidence_level="N/A",
        email_subject=ERROR_SENTINEL,
        email_body=ERROR_SENTINEL,
        error=str(error) if error else ERROR_SENTINEL,
    )


async def generate_batch_pitches(
    api_key: str,
    leads: List[Lead],
    on_progress: Optional[PitchProgress] = None,
    *,
    delay: float = PITCH_DELAY_SECONDS,
) -> List[PitchResult]:
    """
    Draft cold emails for the selected leads, one at a time.

    A failed lead yields an "Error" sentinel instead of stopping the batch.
    `on_progress(current, total)` is called after every lead.
    """
    client = GeminiClient(api_key)
    total = len(leads)
    results: List[PitchResult] = []

    for current, lead in enumerate(leads, start=1):
        result = await try_generate_email(client, lead)
        results.append(result.value if result.ok else error_pitch(lead, result.error))
        if on_progress:
            on_progress(current, total)
        if current < total:
            await asyncio.sleep(delay)

    failed = sum(1 for r in results if r.failed)
    logger.info(f"Generated {total - failed}/{total} pitches")
    return results


async def try_generate_audit(api_key: str, lead: Lead) -> GenerationResult[AuditReport]:
    client = GeminiClient(api_key)
    prompt = AUDIT_PROMPT.format(name=lead.name, address=lead.address, website=lead.website or "N/A")
    try:
        # JSON mime type is not accepted together with tools, so the shape is asked for in the prompt
        text = await client.generate_content(model=MAPS_MODEL, prompt=prompt, tools=grounding_tools())
        report = audit_report_from_raw(parse_json_response(text, "{"))
    except Exception as e:
        return _failure("Audit", lead, e)
    return GenerationResult(value=report)


async def generate_audit(api_key: str, lead: Lead) -> AuditReport:
    """
    Run a website audit for one lead.

    Raises:
        ConfigurationError: Missing API key.
        GenerationError: The model call or its parsing failed.
    """
    result = await try_generate_audit(api_key, lead)
    return result.unwrap()


def text_writer(settings: Settings) -> TextWriter:
    """
    Pick the free-text model for pitches from `settings.pitch_model`.
    Providers without a client here (claude) are served by Gemini.
    """
    provider = settings.pitch_model
    if provider == "openai":
        return partial(OpenAIClient(settings.openai_key).complete_text, OPENAI_PITCH_MODEL)
    if provider == "grok":
        return partial(OpenAIClient(settings.grok_key, base_url=GROK_BASE_URL).complete_text, GROK_PITCH_MODEL)
    if provider != "gemini":
        logger.debug(f"No client for pitch model '{provider}', using Gemini")
    return partial(GeminiClient(settings.gemini_key).generate_content, TEXT_MODEL)


async def try_generate_pitch(settings: Settings, service_name: str, lead: Lead) -> GenerationResult[str]:
    write = text_writer(settings)
    prompt = PITCH_PROMPT.format(service=service_name, name=lead.name, address=lead.address, rating=lead.rating)
    try:
        text = await write(prompt)
    except Exception as e:
        return _failure("Pitch", lead, e)
    if not text.strip():
        return GenerationResult(error=GenerationError("Model returned an empty pitch."))
    return GenerationResult(value=text)


async def generate_pitch(settings: Settings, service_name: str, lead: Lead) -> str:
    """Free-text pitch for one lead; returns a fixed message when generation fails."""
    result = await try_generate_pitch(settings, service_name, lead)
    return result.value if result.ok else PITCH_FAILED_MESSAGE
