import logging
from typing import Union

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
SERVICE_NAME = "robocopy-notifier"

# uvicorn installs its own handlers on these unless told otherwise
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_json_logging(level: Union[int, str] = logging.INFO) -> None:
    """Send every log record, uvicorn's included, through one JSON handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers
    while root.handlers:
        root.handlers.pop()

    handler = logging.StreamHandler()
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT, static_fields={"service": SERVICE_NAME}))
    root.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
