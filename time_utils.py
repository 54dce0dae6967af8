from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER = logging.getLogger(__name__)

DEFAULT_TZ_NAME = "Europe/Moscow"


def get_tz(name: str = DEFAULT_TZ_NAME) -> tzinfo:
    """Return the named timezone with a safe fallback to UTC+3."""

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        LOGGER.warning("Falling back to fixed UTC+3 timezone: %s", exc)
    return timezone(timedelta(hours=3))


def now_local(name: str = DEFAULT_TZ_NAME) -> datetime:
    """Return current datetime in the configured timezone."""

    return datetime.now(tz=get_tz(name))


def current_hour(name: str = DEFAULT_TZ_NAME) -> int:
    return now_local(name).hour


__all__ = ["get_tz", "now_local", "current_hour", "DEFAULT_TZ_NAME"]
