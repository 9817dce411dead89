from __future__ import annotations

import logging
import sys

APP_LOGGER_NAME = "archaeolog"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_HANDLER_NAME = "archaeolog-stdout"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the ``archaeolog`` logger tree.

    Safe to call once per app instance: the handler is only added the first
    time, later calls just change the level. Unknown level names fall back
    to INFO.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(numeric_level)
    if not any(h.get_name() == _HANDLER_NAME for h in app_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)

    # Request lines from the NAS deployment stay at INFO even when debugging the app
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.INFO))

    app_logger.info("Logging configured", extra={"level": logging.getLevelName(numeric_level)})
    return app_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger inside the ``archaeolog`` tree; modules pass ``__name__``."""
    if not name:
        return logging.getLogger(APP_LOGGER_NAME)
    return logging.getLogger(name)
