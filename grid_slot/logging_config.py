import logging
import sys

from pythonjsonlogger.json import JsonFormatter

JSON_LOG_FORMAT = '%(asctime)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'
TEXT_LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level=logging.WARNING, json_logs=False, stream=None):
    """
    Installs a single stderr handler on the ``grid_slot`` logger.

    The game screen is written to stdout, so log records never interleave
    with the grid unless both streams point at the same terminal.
    """
    logger = logging.getLogger('grid_slot')
    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
