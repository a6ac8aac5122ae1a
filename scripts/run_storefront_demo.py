#!/usr/bin/env python3
"""
Walk through a storefront session and print each stage to the terminal:
catalog load, optional search/category filter, register + login, add to cart.

Usage (from repo root):
  python scripts/run_storefront_demo.py --mock
  python scripts/run_storefront_demo.py --api-url http://localhost:8000 --term Ryzen --category cpu
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from techcart.dependencies import build_storefront
from techcart.integrations.contracts.catalog import AuthForm
from techcart.storefront.auth import AuthMode
from techcart.storefront.notifications import describe
from techcart.utils.config_loader import load_storefront_config


def setup_logging(verbose: bool):
    """Log to terminal so every stage is visible."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
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


def catalog_summary(state) -> dict:
    return {
        "status": state.status.value,
        "query": {"term": state.query.term, "category": state.query.category_slug},
        "error": state.error_detail if state.error else None,
        "categories": [c.slug for c in state.categories],
        "products": [f"{p.display_brand} {p.name} ({p.category}) {p.price_label}" for p in state.products],
    }


async def main(args: argparse.Namespace) -> int:
    setup_logging(args.verbose)
    config = load_storefront_config()
    updates = {}
    if args.mock:
        updates["use_mock_backend"] = True
    if args.api_url:
        updates["api_base_url"] = args.api_url.rstrip("/")
    if updates:
        config = config.model_copy(update=updates)

    shop = build_storefront(config)

    state = await shop.catalog.initialize()
    print_stage("CATALOG: initial load", catalog_summary(state))

    if args.term:
        state = await shop.catalog.set_term(args.term)
        print_stage(f"CATALOG: search {args.term!r}", catalog_summary(state))
    if args.category:
        state = await shop.catalog.set_category(args.category)
        print_stage(f"CATALOG: category {args.category!r}", catalog_summary(state))

    if not state.products:
        print_stage("CART", "No products to add.")
        return 1

    product = state.products[0]
    result = await shop.cart.add_to_cart(product)
    print_stage("CART: before login", describe("add_to_cart", result).message)

    form = AuthForm(username=args.username, email=args.email, password=args.password)
    if args.register:
        shop.auth.switch_mode(AuthMode.REGISTER)
        result = await shop.auth.submit(form)
        print_stage("AUTH: register", describe("register", result).message)

    result = await shop.auth.submit(form)
    print_stage("AUTH: login", describe("login", result).message)

    result = await shop.cart.add_to_cart(product)
    print_stage(f"CART: add {product.name}", describe("add_to_cart", result).message)
    return 0 if result.ok else 1


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a storefront session against the API or the mock backend")
    parser.add_argument("--mock", action="store_true", help="Use the in-process mock backend")
    parser.add_argument("--api-url", help="Override the storefront API base URL")
    parser.add_argument("--term", help="Search term to apply after the initial load")
    parser.add_argument("--category", help="Category slug to filter by")
    parser.add_argument("--username", default="demo")
    parser.add_argument("--email", default="demo@example.com")
    parser.add_argument("--password", default="demo-password")
    parser.add_argument("--no-register", dest="register", action="store_false", help="Skip the registration step")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(asyncio.run(main(parse_args())))
