"""
Data types for the menu pipeline

MealRecord and MealDataset are what gets persisted and rendered.
GroupEntry, DayEntry and ItemEntry describe the raw payload embedded in
the source page, one type per nesting level.
"""

import re
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter


class MealRecord(BaseModel):
    """A single meal slot on a single day"""
    model_config = ConfigDict(frozen=True)

    name: str
    date: str
    weekday: str
    order: int
    priority: int

    @property
    def key(self) -> Tuple[str, int, str]:
        """Identity key: two records with the same key are the same meal slot"""
        return (self.date, self.order, self.name)


class MealDataset(BaseModel):
    """The persisted meal history plus refresh metadata"""
    model_config = ConfigDict(populate_by_name=True)

    date: str
    generated_at: datetime = Field(alias='generatedAt')
    meals: List[MealRecord] = Field(default_factory=list)

    def to_dict(self) -> Dict:
        return self.model_dump(mode='json', by_alias=True)


def _check_iso_date(value: str) -> str:
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        raise ValueError("date key must be YYYY-MM-DD")
    date.fromisoformat(value)
    return value


DateKey = Annotated[str, AfterValidator(_check_iso_date)]


def _check_order(value: str) -> str:
    if not re.fullmatch(r"-?\d+", value.strip()):
        raise ValueError("order key must be an integer")
    return value


# Kept as text so "1" and "01" stay separate entries
OrderKey = Annotated[str, AfterValidator(_check_order)]


class ItemEntry(BaseModel):
    """menuMap value: one dish"""
    name: Optional[str] = Field(None, alias='nazev')
    is_first: Optional[bool] = Field(None, alias='isFirst')


class DayEntry(BaseModel):
    """denMap value: label like "MONDAY 9.2.2026" and the dishes keyed by order"""
    # Anything goes; a non-text label just means no weekday
    label: Any = Field(None, alias='datumden')
    items: Optional[Dict[OrderKey, Optional[ItemEntry]]] = Field(None, alias='menuMap')


class GroupEntry(BaseModel):
    """Top-level payload value"""
    days: Optional[Dict[DateKey, Optional[DayEntry]]] = Field(None, alias='denMap')


MenuPayload = TypeAdapter(Dict[str, Optional[GroupEntry]])
