# core/logger.py
import logging

from app.core.config import settings

# Create logger
logger = logging.getLogger("travel_companion")
logger.setLevel(settings.LOG_LEVEL.upper())

# Console Handler
if not logger.handlers:
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s")
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
