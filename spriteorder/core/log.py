"""Console logging for the package.

One `spriteorder` logger with a rich console handler; modules log through
children of it obtained from get_logger().
"""

import logging

from rich.logging import RichHandler

LOGGER_NAME = 'spriteorder'


def setup_logging(level='INFO') -> logging.Logger:
    """Attach the console handler once and set the package log level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(
                markup=False,
                show_path=False,
                rich_tracebacks=True,
                log_time_format='[%X]',
                omit_repeated_times=False,
            )
        )
    logger.setLevel(level if isinstance(level, int) else str(level).upper())
    return logger


def get_logger(name=None) -> logging.Logger:
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
