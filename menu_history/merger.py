"""
Meal history merger
Combines the stored history with freshly scraped records
"""

from typing import Dict, Iterable, List, Tuple

from menu_history.models import MealRecord


def identity_key(record: MealRecord) -> Tuple[str, int, str]:
    """(date, order, name): records sharing it are the same meal slot"""
    return record.key


def merge(existing: Iterable[MealRecord], incoming: Iterable[MealRecord]) -> List[MealRecord]:
    """
    Merge incoming records into the existing history

    Records are keyed by identity. An incoming record replaces an existing
    one with the same key, and later incoming records replace earlier ones.
    Nothing is ever dropped otherwise.

    Args:
        existing: Previously persisted records
        incoming: Newly scraped records

    Returns:
        Merged records sorted by date, then order, then name
    """
    by_key: Dict[Tuple[str, int, str], MealRecord] = {}

    for record in existing:
        by_key[identity_key(record)] = record

    for record in incoming:
        by_key[identity_key(record)] = record

    return sorted(by_key.values(), key=lambda r: (r.date, r.order, r.name))
