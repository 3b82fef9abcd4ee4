#!/usr/bin/env python
"""Script to create the PollDesk database tables."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import inspect

from polldesk.core.schema_registry import get_default_registry
from polldesk.db.base import Base, get_database_url, get_engine

# Import ALL models so their tables are registered with Base.metadata
from polldesk.db.models import MODELS  # noqa: F401


def create_tables(drop_existing: bool = False, seed: bool = False):
    """Create all database tables."""
    # Validate the declaration before touching the database
    registry = get_default_registry()
    print(f"✓ Schema loaded: {', '.join(registry.list_keys())}")

    engine = get_engine()

    if drop_existing:
        print("Dropping existing tables...")
        Base.metadata.drop_all(engine)
        print("✓ Existing tables dropped")

    Base.metadata.create_all(engine)
    print("✓ All tables created successfully")

    if seed:
        from polldesk.db.seed import main as seed_main

        seed_main()
        print("✓ Sample data seeded")

    # Print created tables
    tables = sorted(inspect(engine).get_table_names())
    print(f"\nTables in {get_database_url()}: {', '.join(tables)}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create PollDesk database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Fill the tables with fake sample data",
    )
    args = parser.parse_args()

    create_tables(drop_existing=args.drop, seed=args.seed)
