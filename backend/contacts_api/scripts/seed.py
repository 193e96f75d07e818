"""
Bulk-insert contacts from a JSON file, bypassing the HTTP layer.

Usage:
    contacts-seed                          # reads data/contacts.json
    contacts-seed --file other.json

Reads MONGODB_URI from the environment (or .env); DB_NAME defaults to
`contactsdb`. Documents are inserted as-is, without validation.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from contacts_api.database import CONTACTS_COLLECTION, Database
from contacts_api.exceptions import ContactsAPIError
from contacts_api.scripts import DEFAULT_DB_NAME, resolve_connection


def load_contacts(path: Path) -> List[Dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of contacts")
    return data


async def seed(database: Database, uri: str, db_name: str, contacts: List[Dict[str, Any]]) -> int:
    """Insert `contacts` and return how many were written. Always closes the client."""
    try:
        await database.connect(uri, db_name)
        if not contacts:
            return 0
        result = await database.collection(CONTACTS_COLLECTION).insert_many(contacts)
        return len(result.inserted_ids)
    finally:
        await database.close()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the contacts collection")
    parser.add_argument(
        "--file",
        default="data/contacts.json",
        help="JSON array of contacts (default: data/contacts.json)",
    )
    parser.add_argument(
        "--db-name", default=None, help=f"Database name (default: DB_NAME or {DEFAULT_DB_NAME})"
    )
    args = parser.parse_args(argv)

    try:
        contacts = load_contacts(Path(args.file))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    uri, db_name = resolve_connection(args.db_name)
    try:
        inserted = asyncio.run(seed(Database(), uri, db_name, contacts))
    except ContactsAPIError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    print(f"Inserted {inserted} contacts")


if __name__ == "__main__":
    main()
