"""CarGo database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create database tables for every aggregate and entity."""
    from cargo.domain import cargo
    from cargo.utils.db import setup_db

    print("Initializing cargo domain...")
    cargo.init()
    print("Creating cargo database schema...")
    setup_db(cargo)
    print("Done.")


def drop_database():
    """Drop every database table."""
    from cargo.domain import cargo
    from cargo.utils.db import drop_db

    print("Initializing cargo domain...")
    cargo.init()
    print("Dropping cargo database schema...")
    drop_db(cargo)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="CarGo database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
