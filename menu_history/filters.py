"""
Ignore-list filtering for meal records
"""

import unicodedata
from typing import Iterable, List

from menu_history.models import MealRecord


def fold(text: str) -> str:
    """Case- and accent-insensitive form of text used for matching"""
    decomposed = unicodedata.normalize('NFKD', text.casefold())
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def filter_ignored(records: Iterable[MealRecord], ignore: Iterable[str]) -> List[MealRecord]:
    """
    Drop records whose name contains any ignore term

    Matching is a substring test, ignoring case and accents, so "oběd"
    matches "Letní OBĖD menu".

    Args:
        records: Candidate meal records
        ignore: Ignore-list terms

    Returns:
        Records that matched no term, in their original order
    """
    terms = [fold(term) for term in ignore if term and term.strip()]
    if not terms:
        return list(records)

    kept = []
    dropped = []
    for record in records:
        name = fold(record.name)
        if any(term in name for term in terms):
            dropped.append(record)
        else:
            kept.append(record)

    if dropped:
        print(f"  Ignored {len(dropped)} entries:")
        for record in dropped:
            print(f"    - {record.date} #{record.order}: {record.name}")

    return kept
