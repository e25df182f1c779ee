#!/usr/bin/env python3
"""
Run one catalog operation through the synchronization store and print the
resulting state snapshot to the terminal.

Uses the local mock catalog unless INTEGRATIONS_MODE=real (or CATALOG_API_URL)
is set.

Usage (from repo root):
  python scripts/run_catalog_demo.py list --limit 5 --skip 0
  python scripts/run_catalog_demo.py get 3
  python scripts/run_catalog_demo.py search phone
  python scripts/run_catalog_demo.py dashboard
  python scripts/run_catalog_demo.py delete 3
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.api.dependencies import build_catalog_store
from src.catalog.insights import DASHBOARD_PAGE_SIZE, summarize_products
from src.utils.config_loader import load_catalog_config


def setup_logging(level: str):
    """Log to terminal so every stage is visible."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a catalog store operation")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Fetch a page of products")
    list_cmd.add_argument("--limit", type=int, default=None)
    list_cmd.add_argument("--skip", type=int, default=None)

    get_cmd = sub.add_parser("get", help="Fetch one product into the detail slot")
    get_cmd.add_argument("product_id", type=int)

    search_cmd = sub.add_parser("search", help="Search products")
    search_cmd.add_argument("query")

    sub.add_parser("dashboard", help="List the first 100 products and print their aggregates")

    delete_cmd = sub.add_parser("delete", help="Soft-delete a product (after listing the first page)")
    delete_cmd.add_argument("product_id", type=int)

    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_catalog_config()
    setup_logging(config.log_level)
    store = build_catalog_store(config)

    if args.command == "list":
        await store.list_products(limit=args.limit, skip=args.skip)
    elif args.command == "get":
        await store.get_product(args.product_id)
    elif args.command == "search":
        if args.query.strip():
            await store.search_products(args.query)
        else:
            await store.list_products(limit=store.state.limit, skip=0)
    elif args.command == "dashboard":
        await store.list_products(limit=DASHBOARD_PAGE_SIZE)
        print_stage("DASHBOARD", summarize_products(store.state.products).to_dict())
    elif args.command == "delete":
        await store.list_products(limit=config.default_page_size, skip=0)
        print_stage("BEFORE DELETE", store.state.to_dict())
        await store.delete_product(args.product_id)

    print_stage(f"STATE AFTER {args.command.upper()}", store.state.to_dict())
    return 1 if store.state.error else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
