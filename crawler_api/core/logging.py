import logging
from typing import Optional

from crawler_api.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: Optional[str] = None) -> None:
    """Install a stream handler on the root logger at LOG_LEVEL."""
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("crawler_api").setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
