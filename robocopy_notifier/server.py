from __future__ import annotations
import logging
import uvicorn
from .web import app, settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("server_starting", extra={"host": settings.host, "port": settings.port})
    # Keep our JSON root handler instead of uvicorn's default log config
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
