# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = None):
    """Configure root logging once for the whole process"""
    log_level = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # httpx logs every request at INFO, which drowns the app logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
