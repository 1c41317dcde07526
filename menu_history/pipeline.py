"""
Menu history pipeline
load -> fetch -> extract -> normalize -> filter -> merge -> save
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from common.config import MenuConfig
from common.scraper import fetch_page
from menu_history.extractor import extract
from menu_history.filters import filter_ignored
from menu_history.merger import merge
from menu_history.models import MealDataset
from menu_history.normalizer import normalize
from menu_history.store import MealStore

Fetcher = Callable[[str, float], str]


def _step(number: int, message: str):
    print(f"\n[{number}/7] {message}")


def _elapsed(label: str, start_time: float):
    print(f"  ⏱️  {label} took {time.time() - start_time:.2f}s")


def load_dataset(store: MealStore) -> Optional[MealDataset]:
    """Return the stored dataset, or None if there is none yet. Never fetches."""
    return store.load()


def refresh_and_persist(
    config: MenuConfig,
    store: MealStore,
    fetch: Optional[Fetcher] = None,
    now: Optional[datetime] = None
) -> MealDataset:
    """
    Run the pipeline once and persist the merged history

    Every step must succeed before anything is saved; any error propagates
    and the stored dataset stays as it was.

    Args:
        config: Source and filtering configuration
        store: Where the history lives
        fetch: Page fetcher, called as fetch(url, timeout) (default: fetch_page)
        now: Refresh timestamp (default: current UTC time)

    Returns:
        The dataset that was saved

    Raises:
        FetchError, ExtractionError, SchemaError, StorageError
    """
    fetch = fetch or fetch_page
    now = now or datetime.now(timezone.utc)

    _step(1, "Loading stored history...")
    existing = store.load()
    existing_meals = existing.meals if existing else []
    print(f"  {len(existing_meals)} meals in {store.path}" if existing else "  Nothing stored yet")

    _step(2, f"Fetching menu page for {config.name}...")
    start_time = time.time()
    page_text = fetch(config.source_url, config.timeout)
    _elapsed("Fetching", start_time)

    _step(3, "Extracting menu payload...")
    payload = extract(page_text, config.payload_call)
    print(f"  Found {len(payload)} group(s)")

    _step(4, "Normalizing meals...")
    candidates = normalize(payload)
    print(f"  {len(candidates)} candidate meals")

    _step(5, "Filtering ignored entries...")
    incoming = filter_ignored(candidates, config.ignore)
    print(f"  {len(incoming)} meals kept")

    _step(6, "Merging with history...")
    meals = merge(existing_meals, incoming)
    print(f"  {len(meals)} meals total ({len(meals) - len(existing_meals)} new)")

    dataset = MealDataset(
        date=now.astimezone(timezone.utc).date().isoformat(),
        generated_at=now,
        meals=meals,
    )

    _step(7, "Saving history...")
    store.save(dataset)
    print(f"  Saved to {store.path}")

    return dataset


def read_or_refresh(config: MenuConfig, store: MealStore, fetch: Optional[Fetcher] = None) -> MealDataset:
    """
    Return the stored dataset, running the pipeline first if nothing is stored

    This is the only read path with a side effect: the first read on an
    empty store fetches and saves.
    """
    dataset = load_dataset(store)
    if dataset is not None:
        return dataset

    print("No stored menu yet, refreshing first")
    return refresh_and_persist(config, store, fetch=fetch)
