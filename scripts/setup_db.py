"""
Create the SQLite tables and load demo data (john-doe + two bookings,
accommodation catalog). Safe to run more than once.

    python scripts/setup_db.py [--db-path data.sqlite3]
"""

import argparse

from stars.core.config_loader import settings
from stars.db.seed import seed_demo_data
from stars.db.sqlite_storage import SQLiteStorage


def main():
    parser = argparse.ArgumentParser(description="Set up the Dubai to the Stars database")
    parser.add_argument("--db-path", default=settings.db_path, help="SQLite file (default: %(default)s)")
    args = parser.parse_args()

    storage = SQLiteStorage(args.db_path)
    try:
        summary = seed_demo_data(storage)
    finally:
        storage.close()

    print(f"Database ready at {args.db_path}: {summary}")


if __name__ == "__main__":
    main()
