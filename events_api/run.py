"""Run the API with uvicorn: ``python -m events_api`` or ``events-api``.

Host and port come from ``HOST`` and ``PORT`` (default ``0.0.0.0:3000``).
"""

import logging

import uvicorn

from events_api.core.config import settings
from events_api.main import app


def main() -> None:
    logging.getLogger(__name__).info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
