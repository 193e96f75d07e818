"""Run the Contacts API with uvicorn: `python -m contacts_api`."""

import uvicorn

from contacts_api.config import settings


def main() -> None:
    uvicorn.run(
        "contacts_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
