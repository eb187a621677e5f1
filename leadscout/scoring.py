from typing import Any, Mapping, Tuple, Union

from leadscout.coercion import to_count, to_flag, to_rating
from leadscout.models import Lead

LeadLike = Union[Lead, Mapping[str, Any]]

URGENT = "Urgent"
NEW_BUSINESS = "New Business"
PRIME_TARGET = "Prime Target"
REPUTATION_FIX = "Reputation Fix"
ESTABLISHED = "Established/Big"
STABLE_SMB = "Stable SMB"

OPPORTUNITY_TIERS = (URGENT, NEW_BUSINESS, PRIME_TARGET, REPUTATION_FIX, ESTABLISHED, STABLE_SMB)

# Website that only points back at a map listing
MAP_LISTING_DOMAIN = "google.com"


def _signals(lead: LeadLike) -> Tuple[str, bool, float, int]:
    """Pull (website, mobile_speed_issue, rating, review_count) from a Lead or a raw record."""
    if isinstance(lead, Lead):
        return lead.website, lead.mobile_speed_issue, lead.rating, lead.review_count
    website = str(lead.get("website") or "").strip()
    reviews = lead.get("reviewCount", lead.get("review_count"))
    return website, to_flag(lead.get("mobile_speed_issue")), to_rating(lead.get("rating")), to_count(reviews)


def has_website(lead: LeadLike) -> bool:
    website = _signals(lead)[0]
    return bool(website) and website != "N/A"


def recommend_service(lead: LeadLike) -> str:
    """
    Pick the catalog service to pitch to a lead.

    Returns:
        str: One of "build", "fix", "care" or "check".
    """
    _, slow_mobile, rating, _ = _signals(lead)
    if not has_website(lead):
        return "build"
    if slow_mobile:
        return "fix"
    if rating < 4.0:
        return "care"
    return "check"


def score_lead(lead: LeadLike) -> int:
    """
    Compute the 0-100 priority score for a lead.

    Website gap is worth most (45 with no site, 25 for a slow mobile site),
    then review volume (40 for an early-bird business under 10 reviews with
    its own site, 30 for 10-300 reviews), then a middling rating (15).
    """
    website, slow_mobile, rating, reviews = _signals(lead)
    score = 0

    if not has_website(lead):
        score += 45
    elif slow_mobile:
        score += 25

    # Any non-empty website string counts here, "N/A" included
    if reviews < 10 and website and MAP_LISTING_DOMAIN not in website:
        score += 40
    elif 10 <= reviews <= 300:
        score += 30

    if 0 < rating <= 4.2:
        score += 15

    return min(score, 100)


def opportunity_tier(lead: LeadLike) -> str:
    """Label a lead with its sales tier. Rules are checked in order; the first match wins."""
    _, _, rating, reviews = _signals(lead)
    site = has_website(lead)

    if not site:
        return URGENT
    if reviews < 15:
        return NEW_BUSINESS
    if 3.8 <= rating <= 4.4 and 30 <= reviews <= 300:
        return PRIME_TARGET
    if 0 < rating < 3.8:
        return REPUTATION_FIX
    if reviews > 600:
        return ESTABLISHED
    return STABLE_SMB
