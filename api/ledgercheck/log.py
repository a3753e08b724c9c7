import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
HANDLER_NAME = "ledgercheck"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("ledgercheck")
    logger.setLevel(level.upper())
    if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
