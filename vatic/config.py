import os
import logging
from datetime import tzinfo
from dotenv import load_dotenv
from dateutil import tz

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Config:
    # Clock used by date, datetime and datetimeiso tags (empty = local zone)
    TIMEZONE = os.getenv('VATIC_TIMEZONE', '')

    # Pipes
    SUMMARY_PREFIX = os.getenv('VATIC_SUMMARY_PREFIX', 'Summary of: ')

    # Logging
    LOG_LEVEL = os.getenv('VATIC_LOG_LEVEL', 'INFO')


def get_timezone(name: str = None) -> tzinfo:
    """Resolve the configured timezone, falling back to the local zone."""
    name = Config.TIMEZONE if name is None else name
    if not name:
        return tz.tzlocal()

    zone = tz.gettz(name)
    if zone is None:
        logger.warning(f"Unknown timezone '{name}', using local time")
        return tz.tzlocal()
    return zone


def configure_logging(level: str = None):
    """Configure root logging for scripts."""
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )
