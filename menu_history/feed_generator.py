"""
RSS feed generator
Creates an RSS 2.0 feed with one entry per menu day
"""

from datetime import date, datetime, timezone
from html import escape
from pathlib import Path
from typing import List

from feedgen.feed import FeedGenerator

from menu_history.models import MealDataset, MealRecord
from menu_history.render import group_by_day


def generate_feed(dataset: MealDataset, output_file: str = "output/menu.rss",
                  title: str = "Menu", link: str = "") -> FeedGenerator:
    """
    Generate RSS feed from the meal history

    Args:
        dataset: Meal history to publish
        output_file: Path to save RSS feed
        title: Feed title
        link: Link to the source menu page

    Returns:
        FeedGenerator object
    """
    days = group_by_day(dataset)
    print(f"\nGenerating RSS feed with {len(days)} days...")

    fg = create_feed_metadata(title, link)

    # group_by_day is oldest first; feedgen reverses on output, so newest ends up on top
    for day_date, weekday, meals in days:
        add_day_to_feed(fg, day_date, weekday, meals, link)

    output_path = Path(output_file)
    output_path.parent.mkdir(exist_ok=True, parents=True)

    fg.rss_file(str(output_path))
    print(f"RSS feed saved to {output_file}")

    return fg


def create_feed_metadata(title: str = "Menu", link: str = "") -> FeedGenerator:
    """Create feed with basic metadata"""
    fg = FeedGenerator()
    fg.title(title)
    fg.description(f'Daily meals from {title}')
    fg.link(href=link or 'https://example.invalid/', rel='alternate')
    fg.language('cs')
    fg.generator('Menu History')

    return fg


def add_day_to_feed(fg: FeedGenerator, day_date: str, weekday: str,
                    meals: List[MealRecord], link: str = ""):
    """
    Add one day's menu to the feed

    Args:
        fg: FeedGenerator object
        day_date: Date in YYYY-MM-DD format
        weekday: Weekday label from the menu page (may be empty)
        meals: Meals served that day
    """
    fe = fg.add_entry()
    fe.title(f"{weekday} {day_date}".strip())

    content_html = '<ol>'
    for meal in meals:
        name = escape(meal.name)
        if meal.priority == 1:
            name = f'<strong>{name}</strong>'
        content_html += f'<li value="{meal.order}">{name}</li>'
    content_html += '</ol>'
    fe.description(content_html)

    if link:
        fe.link(href=link)

    fe.guid(f"menu-{day_date}", permalink=False)

    day = date.fromisoformat(day_date)
    fe.pubDate(datetime(day.year, day.month, day.day, tzinfo=timezone.utc))
