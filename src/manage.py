"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                               # Create tables
    python src/manage.py drop-db                                # Drop tables
    python src/manage.py sync-products                          # data/products.json
    python src/manage.py sync-products --file path/to/products.json
"""

import argparse
import json
import sys
from pathlib import Path

DEFAULT_PRODUCTS_FILE = Path(__file__).resolve().parent.parent / "data" / "products.json"


def setup_database():
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating database schema...")
    setup_db(ordering)
    print("Done.")


def drop_database():
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping database schema...")
    drop_db(ordering)
    print("Done.")


def sync_products(path) -> dict:
    """Upsert every product in ``path`` into the configured store."""
    from ordering.catalogue.sync import SyncCatalogue, load_catalogue_file
    from ordering.domain import ordering

    records = load_catalogue_file(path)
    print(f"Syncing {len(records)} products from {path}...")

    ordering.init()
    with ordering.domain_context():
        stats = ordering.process(SyncCatalogue(products=json.dumps(records)), asynchronous=False)

    print(f"  added:   {stats['added']}")
    print(f"  updated: {stats['updated']}")
    print(f"  errors:  {stats['errors']}")
    return stats


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    sync_parser = subparsers.add_parser("sync-products", help="Upsert products from a JSON file")
    sync_parser.add_argument(
        "--file",
        default=str(DEFAULT_PRODUCTS_FILE),
        help="Product file to sync (default: data/products.json)",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "sync-products":
        stats = sync_products(args.file)
        if stats["errors"]:
            sys.exit(1)


if __name__ == "__main__":
    main()
