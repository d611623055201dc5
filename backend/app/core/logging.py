import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_HANDLER_NAME = "gringotts-stdout"
_QUIET_LOGGERS = ("httpx", "httpcore", "opentelemetry")


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Send service logs to stdout; repeated calls only adjust the level."""
    root_logger = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    # Outbound store and price-feed calls log every request at INFO
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root_logger
