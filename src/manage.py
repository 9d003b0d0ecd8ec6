"""OrderFlow database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py flush-cache  # Evict every catalogue cache entry
"""

import argparse
import sys


def _domain():
    from orderflow.domain import orderflow

    orderflow.init()
    return orderflow


def setup_database():
    from orderflow.utils.db import setup_db

    domain = _domain()
    print("Creating orderflow database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from orderflow.utils.db import drop_db

    domain = _domain()
    print("Dropping orderflow database schema...")
    drop_db(domain)
    print("Done.")


def flush_cache():
    from orderflow.catalogue.catalog_cache import CatalogCache

    domain = _domain()
    with domain.domain_context():
        CatalogCache().invalidate_all()
    print("Catalogue cache flushed.")


def main():
    parser = argparse.ArgumentParser(description="OrderFlow management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("flush-cache", help="Evict all catalogue cache entries")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "flush-cache":
        flush_cache()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
