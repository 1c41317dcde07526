"""
Read-side renderers for the meal history
"""

import json
from itertools import groupby
from pathlib import Path
from typing import List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from menu_history.models import MealDataset, MealRecord

TEMPLATE_DIR = Path(__file__).parent / 'templates'


def group_by_day(dataset: MealDataset) -> List[Tuple[str, str, List[MealRecord]]]:
    """
    Group meals by date

    Returns:
        List of (date, weekday, meals) in date order
    """
    days = []
    for day_date, meals in groupby(dataset.meals, key=lambda m: m.date):
        meals = list(meals)
        weekday = next((m.weekday for m in meals if m.weekday), '')
        days.append((day_date, weekday, meals))
    return days


def render_json(dataset: MealDataset) -> str:
    """The dataset exactly as it is persisted"""
    return json.dumps(dataset.to_dict(), ensure_ascii=False, indent=2)


def render_text(dataset: MealDataset) -> str:
    """Plain listing, one block per day, primary courses marked with *"""
    lines = [f"Menu history (updated {dataset.generated_at.isoformat()})"]

    for day_date, weekday, meals in group_by_day(dataset):
        lines.append('')
        lines.append(f"{day_date} {weekday}".rstrip())
        for meal in meals:
            marker = '*' if meal.priority == 1 else ' '
            lines.append(f" {marker}{meal.order}. {meal.name}")

    return '\n'.join(lines) + '\n'


def render_html(dataset: MealDataset, title: str = "Menu") -> str:
    """HTML page with the same listing as render_text"""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(['html'])
    )
    template = env.get_template('menu.html')
    return template.render(title=title, dataset=dataset, days=group_by_day(dataset))
