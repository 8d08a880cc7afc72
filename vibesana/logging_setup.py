import logging
import sys
from typing import Optional


def setup_logging(verbose: bool = False, level: Optional[str] = None):
    """Setup logging configuration"""
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    # Configure root logger, replacing handlers from a previous call
    logger = logging.getLogger()
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        if getattr(handler, "_vibesana", False):
            logger.removeHandler(handler)
    console_handler._vibesana = True
    logger.addHandler(console_handler)

    # Reduce noise from external libraries
    for noisy in ('httpx', 'httpcore', 'openai', 'urllib3'):
        logging.getLogger(noisy).setLevel(logging.WARNING)
