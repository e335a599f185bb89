"""Quick check of database state."""
import argparse
from pathlib import Path

from wishlist.db.database import Database
from wishlist.models.item import Item


def main():
    parser = argparse.ArgumentParser(description="Print users and items")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    db = Database(path=Path(args.db_path) if args.db_path else None)
    db.init()

    print("=== Users ===")
    users = db.fetchall("SELECT id, name, email FROM users ORDER BY id")
    print(f"Total: {len(users)}")
    names = {u["id"]: u["name"] for u in users}
    for u in users:
        print(f"  {u['id']:>4} | {u['name'][:20]:<20} | {u['email']}")

    # Only whether an item is reserved is shown, never by whom.
    print("\n=== Items ===")
    rows = db.fetchall("SELECT * FROM items ORDER BY id")
    print(f"Total: {len(rows)}")
    for item in (Item.from_row(r) for r in rows):
        owner = names.get(item.created_by, "?")
        status = "reserved" if item.is_reserved else "free"
        print(f"  {item.id:>4} | {item.name[:40]:<40} | {owner:<12} | {status}")

    db.close()


if __name__ == "__main__":
    main()
