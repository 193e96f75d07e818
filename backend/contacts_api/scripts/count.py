"""
Print the number of documents in the contacts collection.

Usage:
    contacts-count [--db-name NAME]
"""

import argparse
import asyncio
import sys
from typing import Optional

from contacts_api.database import CONTACTS_COLLECTION, Database
from contacts_api.exceptions import ContactsAPIError
from contacts_api.scripts import DEFAULT_DB_NAME, resolve_connection


async def count(database: Database, uri: str, db_name: str) -> int:
    try:
        await database.connect(uri, db_name)
        return await database.collection(CONTACTS_COLLECTION).count_documents({})
    finally:
        await database.close()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Count stored contacts")
    parser.add_argument(
        "--db-name", default=None, help=f"Database name (default: DB_NAME or {DEFAULT_DB_NAME})"
    )
    args = parser.parse_args(argv)

    uri, db_name = resolve_connection(args.db_name)
    try:
        total = asyncio.run(count(Database(), uri, db_name))
    except ContactsAPIError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    print(f"contacts count = {total}")


if __name__ == "__main__":
    main()
