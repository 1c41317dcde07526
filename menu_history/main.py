#!/usr/bin/env python3
"""
Menu History
Entry point for the scheduled refresh and for reading the stored menu
"""

import argparse
import sys
import time
from pathlib import Path

from common.config import MenuConfig, load_config
from common.errors import MenuHistoryError
from menu_history.feed_generator import generate_feed
from menu_history.pipeline import read_or_refresh, refresh_and_persist
from menu_history.render import render_html, render_json, render_text
from menu_history.store import MealStore

FORMATS = ('json', 'text', 'html', 'rss')


def open_store(config: MenuConfig) -> MealStore:
    return MealStore(config.data_dir, config.storage_key)


def run_refresh(config: MenuConfig) -> int:
    """
    Run the pipeline once (the scheduled trigger)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    print(f"\n{'=' * 70}")
    print(f"Refreshing: {config.name}")
    print(f"{'=' * 70}")

    start_time = time.time()
    dataset = refresh_and_persist(config, open_store(config))

    print("\n" + "=" * 50)
    print("Success!")
    print(f"  Total meals: {len(dataset.meals)}")
    print(f"  Refresh date: {dataset.date}")
    print(f"  ⏱️  Run took {time.time() - start_time:.2f}s")
    print("=" * 50)
    return 0


def run_show(config: MenuConfig, output_format: str, output: str = None) -> int:
    """
    Render the stored menu, refreshing first if nothing is stored

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    dataset = read_or_refresh(config, open_store(config))

    if output_format == 'rss':
        if not output:
            print("Error: --output is required for rss")
            return 2
        generate_feed(dataset, output, title=config.name, link=config.source_url)
        return 0

    if output_format == 'json':
        rendered = render_json(dataset)
    elif output_format == 'html':
        rendered = render_html(dataset, title=config.name)
    else:
        rendered = render_text(dataset)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(rendered)
        print(f"Saved to {output_path}")
    else:
        sys.stdout.write(rendered)

    return 0


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description='Keep a history of a published meal menu')
    parser.add_argument('--config', type=str, help='Config file (default: menu.json)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('refresh', help='Fetch the menu page and merge it into the history')

    show_parser = subparsers.add_parser('show', help='Print the stored menu history')
    show_parser.add_argument('--format', choices=FORMATS, default='text', help='Output format (default: text)')
    show_parser.add_argument('--output', type=str, help='Write to this file instead of stdout')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"\n\nConfiguration Error: {e}")
        return 1

    try:
        if args.command == 'refresh':
            return run_refresh(config)
        return run_show(config, args.format, args.output)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except MenuHistoryError as e:
        print(f"\n\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
