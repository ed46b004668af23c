#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the MealMinder tables in the database named by DATABASE_URL
"""

import logging
import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.config import settings  # noqa: E402
from domain.models import init_database  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("mealminder.scripts.init_db")


def main() -> int:
    logger.info("=" * 60)
    logger.info("MEALMINDER DATABASE INITIALIZATION")
    logger.info("=" * 60)
    try:
        init_database()
    except Exception as e:
        logger.error(f"✗ Database initialization failed: {e}")
        return 1
    logger.info(f"✓ Tables ready at {settings.database_url.rsplit('@', 1)[-1]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
