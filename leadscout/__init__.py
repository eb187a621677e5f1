"""Lead discovery, scoring and outreach drafting on top of Gemini grounded search."""
from leadscout.acquisition import fetch_leads
from leadscout.generators import generate_audit, generate_batch_pitches, generate_pitch
from leadscout.models import AuditReport, Lead, PitchResult, ServiceOffer
from leadscout.scoring import opportunity_tier, recommend_service, score_lead

__all__ = [
    "AuditReport",
    "Lead",
    "PitchResult",
    "ServiceOffer",
    "fetch_leads",
    "generate_audit",
    "generate_batch_pitches",
    "generate_pitch",
    "opportunity_tier",
    "recommend_service",
    "score_lead",
]
