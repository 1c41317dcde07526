"""
Menu payload normalizer
Validates the raw payload and flattens it into MealRecords
"""

from typing import Dict, List

from pydantic import ValidationError

from common.errors import SchemaError
from menu_history.models import DayEntry, GroupEntry, MealRecord, MenuPayload

PRIMARY_COURSE = 1
SECONDARY_COURSE = 2


def _format_loc(loc) -> str:
    return '.'.join(str(part) for part in loc)


def parse_payload(payload: Dict) -> Dict[str, GroupEntry]:
    """
    Validate the raw payload against the expected group -> day -> item layout

    Missing or null sub-maps are accepted and treated as empty.

    Args:
        payload: Decoded JSON object from the extractor

    Returns:
        Mapping of group key to GroupEntry (null groups dropped)

    Raises:
        SchemaError: If any level has the wrong shape
    """
    try:
        groups = MenuPayload.validate_python(payload)
    except ValidationError as e:
        first = e.errors()[0]
        raise SchemaError(f"Malformed menu payload: {first['msg']}", _format_loc(first['loc'])) from e

    return {key: group for key, group in groups.items() if group is not None}


def weekday_from_label(label) -> str:
    """First word of a day label like "MONDAY 9.2.2026", or "" if there is none"""
    if not isinstance(label, str):
        return ''
    parts = label.split()
    return parts[0] if parts else ''


def _day_records(day_date: str, day: DayEntry) -> List[MealRecord]:
    weekday = weekday_from_label(day.label)
    records = []

    for order_key, item in (day.items or {}).items():
        if item is None:
            continue

        name = (item.name or '').strip()
        if not name:
            continue

        records.append(MealRecord(
            name=name,
            date=day_date,
            weekday=weekday,
            order=int(order_key),
            priority=PRIMARY_COURSE if item.is_first else SECONDARY_COURSE,
        ))

    return records


def normalize(payload: Dict) -> List[MealRecord]:
    """
    Turn the extracted payload into a flat list of meal records

    The result is neither sorted nor deduplicated; merge() does that.

    Args:
        payload: Decoded JSON object from the extractor

    Returns:
        List of MealRecords

    Raises:
        SchemaError: If the payload has the wrong shape
    """
    records = []

    for group in parse_payload(payload).values():
        for day_date, day in (group.days or {}).items():
            if day is None:
                continue
            records.extend(_day_records(day_date, day))

    return records
