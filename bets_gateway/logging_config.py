import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-5s [%(name)s] %(message)s'


def configure_logging(level: str = 'INFO') -> logging.Logger:
    """Attach a console handler to the package logger (once) and set its level."""
    logger = logging.getLogger('bets_gateway')
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
