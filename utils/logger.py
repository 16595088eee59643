# utils/logger.py
# Small logging front for the app; messages starting with "ERROR" go out at error level

import logging

LOGGER_NAME = "pokemon_lineage"

ENABLE_VERBOSE_LOGGING = False

logger = logging.getLogger(LOGGER_NAME)
if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)


def set_verbose(on: bool):
    """Enable/disable hop-by-hop request logs."""
    global ENABLE_VERBOSE_LOGGING
    ENABLE_VERBOSE_LOGGING = bool(on)


def log_action(message: str):
    if message.startswith("ERROR"):
        logger.error(message)
    else:
        logger.info(message)


def log_verbose(message: str):
    """log only when verbose logging is on"""
    if ENABLE_VERBOSE_LOGGING:
        log_action(message)
