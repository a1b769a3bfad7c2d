import os
import sys
from pathlib import Path

from loguru import logger

log_dir = Path(os.getenv("CATALOG_ROUTES_LOG_DIR", "logs"))
log_file = log_dir / "{time}.log"
console_level = os.getenv("CATALOG_ROUTES_LOG_LEVEL", "INFO").upper()

logger.remove()
logger.add(
    sys.stderr,
    level=console_level,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
)
if os.getenv("CATALOG_ROUTES_LOG_FILE", "1") != "0":
    logger.add(
        log_file,
        rotation="256 MB",  # split once a file reaches 256MB
        retention="10 days",
        compression="zip",
        encoding="utf-8",
        level="DEBUG",
    )
