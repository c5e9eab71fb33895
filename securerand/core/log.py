"""
securerand logging.

All modules log under the 'securerand' namespace. Generated values are never
logged, only sizes, modes and failures.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under 'securerand'."""
    return logging.getLogger(f'securerand.{name}')


def setup_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None):
    """
    Configure the securerand root logger.

    Handlers added by a previous call are replaced, so calling this twice
    does not duplicate output.

    Args:
        level: Logging level, as an int or a name such as "DEBUG"
        log_file: Optional file path for file logging
    """
    logger = logging.getLogger('securerand')
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(fmt)
    logger.addHandler(handler)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
