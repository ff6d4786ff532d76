from datetime import date, datetime

import pytz

from hometail.core.config import settings


def local_tz():
    return pytz.timezone(settings.TIMEZONE)


def now_utc() -> datetime:
    """Naive UTC timestamp, the format stored in DateTime columns."""
    return datetime.utcnow()


def today() -> date:
    """Calendar date in the configured service timezone."""
    return datetime.now(pytz.UTC).astimezone(local_tz()).date()
