"""Run the backend with uvicorn.

Example:
    PORT=8080 python run.py
"""

import logging

import uvicorn

from config import Settings, configure_logging
from main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
