"""
Contacts API - OpenAPI Document
================================

What:  Builds the OpenAPI description of the route table.
How:   Starts from FastAPI's generated schema, then adds the API metadata
       (servers, tag descriptions) and the ContactInput component that the
       POST/PUT request bodies reference.
Who:   Installed as `app.openapi` by create_app(); also used by the
       `contacts-export-openapi` command to write a static file.

The route layer does not depend on this module; it only references
`#/components/schemas/ContactInput` by name.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from contacts_api.schemas.contact import Contact, ContactInput

logger = logging.getLogger(__name__)

API_TITLE = "Contacts API"
API_DESCRIPTION = "API for storing and retrieving contacts"
SERVERS = [
    {"url": "/", "description": "Relative base"},
    {"url": "http://localhost:8080", "description": "Local dev"},
]
TAGS = [
    {"name": "Contacts", "description": "CRUD for contacts"},
    {"name": "Health", "description": "Service health"},
]


def build_openapi(app: FastAPI) -> Dict[str, Any]:
    """Generate the OpenAPI document once and cache it on the app."""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=API_TITLE,
        version=app.version,
        description=API_DESCRIPTION,
        routes=app.routes,
        servers=SERVERS,
        tags=TAGS,
    )

    components = schema.setdefault("components", {}).setdefault("schemas", {})
    ref_template = "#/components/schemas/{model}"
    for model in (ContactInput, Contact):
        components[model.__name__] = model.model_json_schema(
            by_alias=True, ref_template=ref_template
        )

    app.openapi_schema = schema
    return schema


def export_openapi(app: FastAPI, output: Path) -> Path:
    """Write the OpenAPI document of `app` to `output` as JSON."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(app.openapi(), indent=2), encoding="utf-8")
    logger.info("OpenAPI document written to %s", output)
    return output


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Export the Contacts API OpenAPI document")
    parser.add_argument(
        "-o", "--output", default="openapi.json", help="Destination file (default: openapi.json)"
    )
    args = parser.parse_args(argv)

    from contacts_api.main import create_app

    path = export_openapi(create_app(), Path(args.output))
    print(f"Wrote {path}")


if __name__ == "__main__":
    main()
