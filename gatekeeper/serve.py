"""
CLI entrypoint for the HTTP server. Run from project root:

  python -m gatekeeper.serve

Listens on HOST:PORT from the environment (default 0.0.0.0:5000).
"""

import logging
import sys

import uvicorn

from gatekeeper.core.config import get_settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logging.getLogger(__name__).info(
        "Starting Gatekeeper on %s:%s (env=%s)", settings.HOST, settings.PORT, settings.APP_ENV
    )
    uvicorn.run(
        "gatekeeper.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
