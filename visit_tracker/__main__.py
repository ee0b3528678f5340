"""
Run the service with uvicorn: python -m visit_tracker

Host, port and log level come from the environment (see core.setting).
"""

import logging

import uvicorn

from visit_tracker.core.setting import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "visit_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
