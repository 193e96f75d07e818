"""
One-shot maintenance scripts that talk to MongoDB directly.

    seed.py   bulk-insert contacts from a JSON file
    count.py  print the number of stored contacts
"""

from typing import Optional, Tuple

from contacts_api.config import settings

DEFAULT_DB_NAME = "contactsdb"


def resolve_connection(db_name: Optional[str] = None) -> Tuple[str, str]:
    """URI from settings; database from the flag, then DB_NAME, then the default."""
    return settings.mongodb_uri, db_name or settings.db_name or DEFAULT_DB_NAME
