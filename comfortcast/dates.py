"""Helpers for the ``YYYYMMDD`` day keys used by NASA POWER."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable

DAY_FORMAT = "%Y%m%d"


def normalize_day(value: str) -> str:
    """Strip hyphens so ``2023-09-01`` and ``20230901`` are the same key.

    Raises :class:`ValueError` when the result is not a real calendar date.
    """
    compact = str(value).strip().replace("-", "")
    if len(compact) != 8 or not compact.isdigit():
        raise ValueError(f"invalid date {value!r}, expected YYYYMMDD or YYYY-MM-DD")
    parse_day(compact)
    return compact


def parse_day(value: str) -> date:
    return datetime.strptime(value, DAY_FORMAT).date()


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)


def iso_day(value: str) -> str:
    return parse_day(value).isoformat()


def shift_day(value: str, delta: int) -> str:
    return format_day(parse_day(value) + timedelta(days=delta))


def utc_today(now: Callable[[], datetime] = lambda: datetime.now(timezone.utc)) -> str:
    return format_day(now().astimezone(timezone.utc).date())


__all__ = ["format_day", "iso_day", "normalize_day", "parse_day", "shift_day", "utc_today"]
