"""
Tolerant decoding of model output.

Model replies are free text that should contain exactly one JSON value, often
wrapped in markdown code fences. The helpers here strip the fences, cut the
text down to the outermost brackets and decode it, then validate the untyped
result field by field into the pipeline's dataclasses.
"""
import json
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from loguru import logger

from leadscout.coercion import to_count, to_flag, to_number, to_rating
from leadscout.config import MAPS_SEARCH_URL
from leadscout.errors import ParseError
from leadscout.models import (
    AuditCategory,
    AuditFinding,
    AuditReport,
    Lead,
    RoadmapPhase,
    TechnicalDetail,
)
from leadscout.scoring import recommend_service, score_lead

BRACKETS = {"[": "]", "{": "}"}
SPEED_CONFIDENCE_LEVELS = ("Low", "Medium", "High")


def strip_code_fences(text: Optional[str]) -> str:
    """Remove ```json and ``` markers and surrounding whitespace."""
    return (text or "").replace("```json", "").replace("```", "").strip()


def extract_json(text: str, opening: str = "[") -> str:
    """
    Cut `text` down to the span between the first `opening` bracket and the
    last matching closing bracket.

    Raises:
        ParseError: If either bracket is missing.
    """
    closing = BRACKETS[opening]
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end == -1 or end < start:
        raise ParseError(f"No JSON {opening}{closing} found in model response", raw_text=text[:200])
    return text[start:end + 1]


def parse_json_response(text: Optional[str], opening: str = "[") -> Any:
    """
    Decode the JSON value embedded in a model reply.

    Args:
        text: Raw model text, possibly fenced.
        opening: "[" for an array reply, "{" for an object reply.

    Returns:
        The decoded list or dict.
    """
    cleaned = strip_code_fences(text)
    snippet = extract_json(cleaned, opening)
    try:
        return json.loads(snippet)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in model response: {e}", raw_text=snippet[:200]) from e


def _text(raw: Mapping[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    if value is None or value == "":
        return default
    return str(value).strip() or default


def maps_link(name: str, address: str) -> str:
    return MAPS_SEARCH_URL + quote(f"{name} {address}", safe="!*'()")


def lead_from_raw(raw: Any, niche: str) -> Lead:
    """
    Validate one raw record from a lead batch into a scored Lead.

    Missing optional fields fall back to placeholders; name and address are
    required.

    Raises:
        ParseError: If the record is not an object or lacks name/address.
    """
    if not isinstance(raw, Mapping):
        raise ParseError(f"Lead record is not an object: {raw!r}"[:200])
    name = _text(raw, "name")
    address = _text(raw, "address")
    if not name or not address:
        raise ParseError(f"Lead record missing name or address: {dict(raw)!r}"[:200])

    reviews = raw.get("reviewCount", raw.get("review_count"))
    confidence = raw.get("mobile_speed_confidence")

    fields: Dict[str, Any] = dict(
        name=name,
        address=address,
        type=_text(raw, "type", niche),
        phone=_text(raw, "phone", "N/A"),
        website=_text(raw, "website"),
        email=_text(raw, "email"),
        instagram=_text(raw, "instagram"),
        linkedin=_text(raw, "linkedin"),
        rating=to_rating(raw.get("rating")),
        review_count=to_count(reviews),
        mobile_speed_issue=to_flag(raw.get("mobile_speed_issue")),
        mobile_speed_confidence=confidence if confidence in SPEED_CONFIDENCE_LEVELS else None,
    )
    lead = Lead(**fields, google_maps_link=maps_link(name, address))
    return replace(lead, recommended_service_id=recommend_service(lead), lead_score=score_lead(lead))


def leads_from_batch(data: Any, niche: str) -> List[Lead]:
    """Validate a decoded batch, dropping records that fail validation."""
    if isinstance(data, Mapping):
        data = [data]
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of leads, got {type(data).__name__}")
    leads = []
    for raw in data:
        try:
            leads.append(lead_from_raw(raw, niche))
        except ParseError as e:
            logger.debug(f"Skipping lead record: {e}")
    return leads


def _list(raw: Mapping[str, Any], key: str) -> list:
    items = raw.get(key) or []
    if not isinstance(items, list):
        raise ParseError(f"Audit field '{key}' is not a list")
    return items


def _objects(raw: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    return [item for item in _list(raw, key) if isinstance(item, Mapping)]


def audit_report_from_raw(raw: Any) -> AuditReport:
    """Validate a decoded audit object into an AuditReport."""
    if not isinstance(raw, Mapping):
        raise ParseError("Audit response is not a JSON object")
    if "overallScore" not in raw and "summary" not in raw:
        raise ParseError("Audit response has neither overallScore nor summary")

    return AuditReport(
        overall_score=to_number(raw.get("overallScore")),
        summary=_text(raw, "summary"),
        categories=[
            AuditCategory(
                name=_text(c, "name"),
                score=min(max(to_number(c.get("score")), 0.0), 10.0),
                status=_text(c, "status", "Fair"),
            )
            for c in _objects(raw, "categories")
        ],
        key_findings=[
            AuditFinding(type=_text(f, "type", "issue"), text=_text(f, "text"))
            for f in _objects(raw, "keyFindings")
        ],
        roadmap=[
            RoadmapPhase(
                phase=_text(p, "phase"),
                title=_text(p, "title"),
                items=[str(item) for item in _list(p, "items") if item is not None],
            )
            for p in _objects(raw, "roadmap")
        ],
        technical_details=[
            TechnicalDetail(
                title=_text(d, "title"),
                value=_text(d, "value"),
                status=_text(d, "status", "warning"),
            )
            for d in _objects(raw, "technicalDetails")
        ],
    )
