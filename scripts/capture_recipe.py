#!/usr/bin/env python3
"""
Capture a recipe from a web page and save it through the MealMinder API.

Usage:
    python scripts/capture_recipe.py https://example.com/some-recipe
    python scripts/capture_recipe.py URL --api-url http://localhost:5000/api
"""

import argparse
import logging
import os
import sys

import requests

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.config import settings  # noqa: E402
from services.scraper import capture_recipe  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("mealminder.scripts.capture_recipe")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract a recipe from a web page and post it to the recipe endpoint"
    )
    parser.add_argument("url", help="Page to capture the recipe from")
    parser.add_argument(
        "--api-url",
        default=settings.scraper_api_url,
        help=f"API base URL (default: {settings.scraper_api_url})",
    )
    args = parser.parse_args(argv)

    try:
        created = capture_recipe(args.url, api_url=args.api_url)
    except requests.RequestException as e:
        logger.error(f"✗ Failed to capture recipe: {e}")
        return 1

    logger.info(f"✓ Recipe captured: {created.get('name')!r} (id={created.get('id')})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
