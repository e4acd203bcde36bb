# medtrack/utils/timeutils.py
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context

DEFAULT_TZ = "UTC"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def server_tz(name: str = None):
    """Resolve the configured server zone (APP_TIMEZONE), UTC outside an app."""
    if name is None:
        name = current_app.config.get("APP_TIMEZONE", DEFAULT_TZ) if has_app_context() else DEFAULT_TZ
    return ZoneInfo(name)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_date(value: datetime, tz=None) -> date:
    tz = tz or server_tz()
    return as_utc(value).astimezone(tz).date()


def local_today(now: datetime = None, tz=None) -> date:
    return local_date(now or utcnow(), tz)


def naive_utc(value: datetime = None) -> datetime:
    """UTC wall time without tzinfo, the form timestamps are stored in."""
    return as_utc(value or utcnow()).replace(tzinfo=None)
