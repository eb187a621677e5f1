import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from loguru import logger

from leadscout.acquisition import fetch_leads
from leadscout.catalog import LEAD_COUNTS, pitch_label
from leadscout.config import LEADS_CSV, LOG_LEVEL, PITCH_MODELS, PITCHES_CSV, Settings
from leadscout.errors import LeadScoutError
from leadscout.exporter import load_leads_csv, write_leads_csv, write_pitches_csv
from leadscout.generators import generate_audit, generate_batch_pitches, generate_pitch
from leadscout.models import Lead
from leadscout.scoring import opportunity_tier

RELOAD_NOTE = (
    "Leads loaded from an export have no mobile speed data, so slow-site leads "
    "are re-scored without it and pitched as care or check instead of fix."
)


def setup_logging(level: str = LOG_LEVEL) -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")


def find_lead(leads: List[Lead], name: str) -> Lead:
    """First lead whose name contains `name`, case-insensitively."""
    needle = name.lower()
    for lead in leads:
        if needle in lead.name.lower():
            return lead
    raise LeadScoutError(f"No lead matching '{name}'")


async def run_search(args, settings: Settings) -> None:
    leads = await fetch_leads(settings.gemini_key, args.niche, args.location, args.count)
    for lead in leads:
        print(f"{lead.lead_score:>3}  {opportunity_tier(lead):<16} {lead.name} ({lead.address})")
    write_leads_csv(leads, args.out)


async def run_pitch(args, settings: Settings) -> None:
    leads = load_leads_csv(args.leads_csv)
    if args.top:
        leads = sorted(leads, key=lambda lead: lead.lead_score, reverse=True)[:args.top]

    def progress(current: int, total: int) -> None:
        logger.info(f"Pitch {current}/{total}")

    pitches = await generate_batch_pitches(settings.gemini_key, leads, progress)
    write_pitches_csv(pitches, args.out)


async def run_draft(args, settings: Settings) -> None:
    lead = find_lead(load_leads_csv(args.leads_csv), args.name)
    service = args.service or pitch_label(lead.recommended_service_id)
    print(await generate_pitch(settings, service, lead))


async def run_audit(args, settings: Settings) -> None:
    lead = find_lead(load_leads_csv(args.leads_csv), args.name)
    report = await generate_audit(settings.gemini_key, lead)
    print(json.dumps(asdict(report), indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find, score and pitch local business leads.", epilog=RELOAD_NOTE)
    parser.add_argument("--log-level", default=LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="discover leads for a niche and location")
    search.add_argument("niche")
    search.add_argument("location")
    search.add_argument("--count", type=int, default=LEAD_COUNTS[0])
    search.add_argument("--out", default=LEADS_CSV, help="output file name without .csv")
    search.set_defaults(handler=run_search)

    pitch = sub.add_parser("pitch", help="draft cold emails for leads in an export", description=RELOAD_NOTE)
    pitch.add_argument("leads_csv")
    pitch.add_argument("--top", type=int, default=None, help="only the N highest scoring leads")
    pitch.add_argument("--out", default=PITCHES_CSV)
    pitch.set_defaults(handler=run_pitch)

    draft = sub.add_parser("draft", help="free-text pitch for one lead", description=RELOAD_NOTE)
    draft.add_argument("leads_csv")
    draft.add_argument("name")
    draft.add_argument("--service", default=None)
    draft.add_argument("--model", choices=PITCH_MODELS, default=None)
    draft.set_defaults(handler=run_draft)

    audit = sub.add_parser("audit", help="website audit for one lead", description=RELOAD_NOTE)
    audit.add_argument("leads_csv")
    audit.add_argument("name")
    audit.set_defaults(handler=run_audit)

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse the command line and run one operation.

    Returns:
        int: Process exit code, 1 with a single error message on failure.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    settings = Settings.from_env(pitch_model=getattr(args, "model", None))

    try:
        await args.handler(args, settings)
    except (LeadScoutError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
