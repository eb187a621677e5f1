"""
Typed data models for the lead generation pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from leadscout.errors import GenerationError

T = TypeVar("T")


@dataclass(frozen=True)
class Lead:
    """A discovered business with enrichment and scoring attached."""
    name: str
    address: str
    type: str
    phone: str = "N/A"
    website: str = ""
    email: str = ""
    instagram: str = ""
    linkedin: str = ""
    rating: float = 0.0
    review_count: int = 0
    google_maps_link: str = ""
    recommended_service_id: str = "check"
    mobile_speed_issue: bool = False
    mobile_speed_confidence: Optional[str] = None  # Low, Medium or High
    lead_score: int = 0

    @property
    def key(self) -> str:
        """Dedup/selection key: lowercased name and address."""
        return dedup_key(self.name, self.address)


def dedup_key(name: str, address: str) -> str:
    return f"{name}-{address}".lower()


@dataclass(frozen=True)
class ServiceOffer:
    """Static catalog entry for a sellable service."""
    id: str
    title: str
    price: str
    description: str
    features: List[str]
    color: str


@dataclass
class AuditCategory:
    name: str
    score: float  # 0-10
    status: str  # Good, Fair or Poor


@dataclass
class AuditFinding:
    type: str  # issue or good
    text: str


@dataclass
class RoadmapPhase:
    phase: str
    title: str
    items: List[str] = field(default_factory=list)


@dataclass
class TechnicalDetail:
    title: str
    value: str
    status: str  # pass, fail or warning


@dataclass
class AuditReport:
    """Structured website audit for one lead."""
    overall_score: float
    summary: str
    categories: List[AuditCategory] = field(default_factory=list)
    key_findings: List[AuditFinding] = field(default_factory=list)
    roadmap: List[RoadmapPhase] = field(default_factory=list)
    technical_details: List[TechnicalDetail] = field(default_factory=list)


@dataclass
class PitchResult:
    """Outreach email drafted for a lead. Holds its own copy of the lead."""
    lead: Lead
    service_to_pitch: str
    primary_issue: str
    confidence_level: str
    email_subject: str
    email_body: str
    error: Optional[str] = None

    @property
    def lead_score(self) -> int:
        return self.lead.lead_score

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class GenerationResult(Generic[T]):
    """Either a generated value or the failure that prevented it."""
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising GenerationError if generation failed."""
        if self.error is not None:
            if isinstance(self.error, GenerationError):
                raise self.error
            raise GenerationError(str(self.error) or "Generation failed.") from self.error
        return self.value
