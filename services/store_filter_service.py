"""
Store filter service: Derives the active store set from the plant master.

A site is active when:
    - REGION is not the excluded region (Canada)
    - ORGANIZATION_NUMBER is the active organization (9000)
    - OPEN_DATE is present and before now
    - CLOSE_DATE is empty
    - SITE_NUMBER is not on the exclusion list

The active store set is the denominator of inventory coverage.
"""

import re
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Union

import pandas as pd
import structlog

from config import settings
from config.assortment import EXCLUDED_SITE_NUMBERS, SERIAL_DATE_EPOCH
from models.plant import ActiveStore
from models.records import PlantRecord
from utils.text_utils import matches_search

logger = structlog.get_logger(__name__)

# Digits with an optional fraction, e.g. "45292" or "45292.5"
SERIAL_PATTERN = re.compile(r"^\d+(\.\d+)?$")

DATE_FORMATS = ["%m/%d/%Y", "%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y %H:%M:%S"]


def serial_to_datetime(serial: float) -> Optional[datetime]:
    """
    Convert a spreadsheet serial day count to a datetime.

    Day 0 is 1899-12-30; fractions are time of day.
    45292 → 2024-01-01
    """
    try:
        return SERIAL_DATE_EPOCH + timedelta(days=float(serial))
    except (OverflowError, ValueError):
        return None


def parse_plant_date(value: Union[datetime, date, float, str, None]) -> Optional[datetime]:
    """
    Parse an OPEN_DATE / CLOSE_DATE cell.

    Accepts:
        - numbers: serial day count from 1899-12-30
        - digit-only strings: same serial encoding
        - other strings: calendar dates (MM/DD/YYYY, YYYY-MM-DD, ISO 8601)
        - date / datetime objects

    Returns:
        Naive datetime (UTC for aware input), or None for empty or unparseable input
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, (int, float)):
        if pd.isna(value):
            return None
        return serial_to_datetime(value)

    value_str = str(value).strip()
    if not value_str:
        return None

    if SERIAL_PATTERN.match(value_str):
        return serial_to_datetime(float(value_str))

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value_str, fmt)
        except ValueError:
            continue

    # Fall back to pandas for ISO 8601 and other calendar formats
    try:
        parsed = pd.to_datetime(value_str)
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed.to_pydatetime()


def _exclusion_reason(record: PlantRecord, now: datetime) -> Optional[str]:
    """Return why a plant row is not an active store, or None if it is."""
    if record.region == settings.excluded_region:
        return "region"

    if record.organization_number != settings.active_organization_number:
        return "organization"

    open_date = parse_plant_date(record.open_date)
    if open_date is None or open_date >= now:
        return "not_open"

    if parse_plant_date(record.close_date) is not None:
        return "closed"

    if record.site_number in EXCLUDED_SITE_NUMBERS:
        return "excluded_site"

    return None


def get_active_stores(
    plant_records: Iterable[PlantRecord],
    now: Optional[datetime] = None,
) -> list[str]:
    """
    Get the active store SITE_NUMBERs.

    Sites appear once per supply channel in the plant master,
    so the result is deduplicated, keeping first-seen order.

    Args:
        plant_records: Plant master rows
        now: Reference time for OPEN_DATE (defaults to current UTC time).
            Parsed dates are naive UTC, so an aware now is converted to match.

    Returns:
        Unique active site numbers. Empty when no site qualifies.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)

    active: dict[str, None] = {}
    skipped: Counter = Counter()

    for record in plant_records:
        reason = _exclusion_reason(record, now)
        if reason:
            skipped[reason] += 1
            continue
        active.setdefault(record.site_number, None)

    logger.debug(
        "active_stores_filtered",
        active_stores=len(active),
        skipped=dict(skipped)
    )

    return list(active)


def get_active_store_count(plant_records: Iterable[PlantRecord]) -> int:
    """Get count of active stores."""
    return len(get_active_stores(plant_records))


def get_active_store_details(
    plant_records: list[PlantRecord],
    active_stores: Optional[Iterable[str]] = None,
    search: Optional[str] = None,
) -> list[ActiveStore]:
    """
    List active stores with their descriptions.

    One entry per site, preferring a row that has a SITE_DESCRIPTION,
    sorted by site number.

    Args:
        plant_records: Plant master rows
        active_stores: Precomputed active set (computed from plant_records if None)
        search: Optional case-insensitive filter on number, description, region

    Returns:
        List of ActiveStore
    """
    if active_stores is None:
        active_stores = get_active_stores(plant_records)
    active_set = set(active_stores)

    by_site: dict[str, PlantRecord] = {}
    for record in plant_records:
        if record.site_number not in active_set:
            continue
        existing = by_site.get(record.site_number)
        if existing is None or (not existing.site_description and record.site_description):
            by_site[record.site_number] = record

    stores = [
        ActiveStore(
            site_number=record.site_number,
            site_description=record.site_description or "",
            region=record.region,
            organization_number=record.organization_number,
        )
        for record in sorted(by_site.values(), key=lambda r: r.site_number)
    ]

    return [
        store for store in stores
        if matches_search(search, store.site_number, store.site_description, store.region)
    ]
