from loguru import logger
import sys

from code_explainer.core.config import settings

def setup_logging():
    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL)
    return logger
