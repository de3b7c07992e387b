#!/usr/bin/env python
"""Create the payroll portal tables.

Usage:
    python scripts/migrate.py
    python scripts/migrate.py --database-url postgresql+asyncpg://...
    python scripts/migrate.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio

from payroll_portal.config import get_settings
from payroll_portal.database import create_engine, create_schema
from payroll_portal.models import Base


def redact(database_url: str) -> str:
    """Hide credentials when echoing the target database."""
    return database_url.split("@")[1] if "@" in database_url else database_url


async def migrate(database_url: str, dry_run: bool) -> None:
    """Create every table that does not exist yet."""
    print(f"Target database: {redact(database_url)}")
    tables = sorted(Base.metadata.tables)
    if dry_run:
        print(f"[DRY RUN] Would create if missing: {', '.join(tables)}")
        return

    engine = create_engine(database_url)
    try:
        await create_schema(engine)
    finally:
        await engine.dispose()
    print(f"Schema ready: {', '.join(tables)}")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create payroll portal tables")
    parser.add_argument(
        "--database-url",
        type=str,
        default=get_settings().database_url,
        help="Database URL (default: from settings)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be created")

    args = parser.parse_args()
    asyncio.run(migrate(args.database_url, args.dry_run))


if __name__ == "__main__":
    main()
