"""Server entry point: `python -m outliner` or the `outliner` console script."""

import logging

import uvicorn

from outliner.config import settings
from outliner.main import setup_logging

logger = logging.getLogger(__name__)


def run() -> None:
    setup_logging(settings.log_level)
    logger.info("Server running on port %d", settings.port)

    uvicorn.run(
        "outliner.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the logging configured above
    )


if __name__ == "__main__":
    run()
