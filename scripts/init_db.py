#!/usr/bin/env python3
"""Initialize the database and optionally seed it with users and items from YAML."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from wishlist.config import configure_logging
from wishlist.db.database import Database
from wishlist.db.errors import StoreError
from wishlist.db.item_repo import ItemRepository
from wishlist.db.user_repo import UserRepository

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--seed", type=str, help="YAML file with users and their items")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    configure_logging()
    db_path = Path(args.db_path) if args.db_path else None
    db = Database(path=db_path)
    db.init()
    print(f"Database initialized at: {db.path}")

    if args.seed:
        seed(db, Path(args.seed))

    db.close()
    print("Done.")


def seed(db: Database, path: Path) -> dict[str, int]:
    """
    Load users and items from a YAML file of the form::

        users:
          - name: alice
            email: alice@example.com
            items:
              - name: Kettle
                link: https://example.com/kettle

    Users that already exist (by email) are reused.  Returns the number of
    users and items created.
    """
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    users = UserRepository(db)
    items = ItemRepository(db)
    created = {"users": 0, "items": 0}
    for u in data.get("users", []):
        existing = users.get_by_email(u["email"])
        if existing is not None:
            user_id = existing.id
        else:
            try:
                user_id = users.add(u["name"], u["email"])
            except StoreError as e:
                logger.warning(f"Skipping user {u.get('name', '?')}: {e}")
                continue
            created["users"] += 1
            print(f"  Created user: {u['name']} ({u['email']})")

        for i in u.get("items", []):
            items.add(i["name"], i.get("link"), user_id)
            created["items"] += 1
            print(f"    Added item: {i['name']}")
    return created


if __name__ == "__main__":
    main()
