"""
CSV export of leads and pitches, and loading a lead export back in.
"""
import csv
import io
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

import pandas as pd
from loguru import logger

from leadscout.coercion import to_count, to_rating
from leadscout.models import Lead, PitchResult
from leadscout.parsing import maps_link
from leadscout.scoring import recommend_service, score_lead

LEAD_HEADERS = [
    "Name",
    "Type",
    "Phone",
    "Email",
    "Website",
    "Instagram",
    "LinkedIn",
    "Rating",
    "Reviews",
    "Address",
    "Maps Link",
    "Lead Score",
]

PITCH_HEADERS = [
    "Lead Score",
    "Business Name",
    "Website",
    "Email",
    "Phone",
    "Confidence Level",
    "Primary Issue",
    "Service to Pitch",
    "Email Subject",
    "Email Body",
]


def _number(value: float):
    """Render 4.0 as 4, the way the rating came in."""
    return int(value) if float(value).is_integer() else value


def _render(headers: Sequence[str], rows: Iterable[list]) -> str:
    """Header line unquoted, then every string field quoted and every number bare."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    body = buf.getvalue().rstrip("\n")
    return ",".join(headers) + ("\n" + body if body else "")


def leads_to_csv(leads: List[Lead]) -> str:
    return _render(LEAD_HEADERS, (
        [
            lead.name,
            lead.type,
            lead.phone,
            lead.email,
            lead.website,
            lead.instagram,
            lead.linkedin,
            _number(lead.rating),
            lead.review_count,
            lead.address,
            lead.google_maps_link,
            lead.lead_score,
        ]
        for lead in leads
    ))


def pitches_to_csv(pitches: List[PitchResult]) -> str:
    return _render(PITCH_HEADERS, (
        [
            p.lead_score,
            p.lead.name,
            p.lead.website,
            p.lead.email,
            p.lead.phone,
            p.confidence_level,
            p.primary_issue,
            p.service_to_pitch,
            p.email_subject,
            p.email_body.replace("\n", " "),
        ]
        for p in pitches
    ))


def write_leads_csv(leads: List[Lead], filename: str) -> Optional[str]:
    """Write `<filename>.csv`. Nothing is written for an empty list."""
    if not leads:
        return None
    path = f"{filename}.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(leads_to_csv(leads))
    logger.info(f"Wrote {len(leads)} leads to {path}")
    return path


def write_pitches_csv(pitches: List[PitchResult], filename: str) -> Optional[str]:
    """Write `<filename>-pitch-export.csv`. Nothing is written for an empty list."""
    if not pitches:
        return None
    path = f"{filename}-pitch-export.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(pitches_to_csv(pitches))
    logger.info(f"Wrote {len(pitches)} pitches to {path}")
    return path


def load_leads_csv(file_path: str) -> List[Lead]:
    """
    Load a lead export back into Lead objects.

    The export has no speed columns, so service and score are re-derived from
    website, rating and reviews alone.
    """
    df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    missing = [col for col in ("Name", "Address") if col not in df.columns]
    if missing:
        raise ValueError(f"{file_path} is not a lead export, missing columns: {missing}")

    leads = []
    for _, row in df.iterrows():
        def get(col, default=""):
            return row[col].strip() if col in row.index and row[col] else default

        name, address = get("Name"), get("Address")
        if not name or not address:
            continue

        lead = Lead(
            name=name,
            address=address,
            type=get("Type"),
            phone=get("Phone", "N/A"),
            email=get("Email"),
            website=get("Website"),
            instagram=get("Instagram"),
            linkedin=get("LinkedIn"),
            rating=to_rating(get("Rating")),
            review_count=to_count(get("Reviews")),
            google_maps_link=get("Maps Link") or maps_link(name, address),
        )
        leads.append(replace(lead, recommended_service_id=recommend_service(lead), lead_score=score_lead(lead)))
    return leads
