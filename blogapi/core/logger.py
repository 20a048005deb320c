# blogapi/core/logger.py
import logging

from blogapi.core.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

logger = logging.getLogger("blogapi")
