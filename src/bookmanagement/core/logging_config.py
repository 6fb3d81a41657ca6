"""
Logging setup for the Book Management service.

Modules log through `logging.getLogger(__name__)`; this module only configures
the root logger once, at application start-up.
"""

import logging
import sys
from typing import Optional

from bookmanagement.core.config import settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configures the root logger.

    Args:
        level (Optional[str]): Logging level name. Defaults to `settings.LOG_LEVEL`.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    # Engine echo is too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger(__name__).info(f"Logging initialized at level {level_name}")
