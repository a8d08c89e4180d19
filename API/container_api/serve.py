"""
Production entrypoint.

``uvicorn container_api.main:app`` would install uvicorn's own logging
config over ours; ``log_config=None`` keeps the handlers from setup_logging.
"""

import uvicorn

from container_api.core.config import get_settings
from container_api.core.logging_setup import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "container_api.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_config=None,
        access_log=True,
    )


if __name__ == "__main__":
    main()
