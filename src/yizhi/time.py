# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum

DATE_KEY_FORMAT = "DD-MM-YYYY"


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today() -> pendulum.DateTime:
    return pendulum.today("local")


def start_of_day(day: pendulum.DateTime) -> pendulum.DateTime:
    return day.in_tz("local").start_of("day")


def start_of_year(year: int) -> pendulum.DateTime:
    return pendulum.datetime(year, 1, 1, tz="local")


def add_days(day: pendulum.DateTime, days: int) -> pendulum.DateTime:
    return start_of_day(day).add(days=days)


def days_in_year(year: int) -> int:
    return 366 if start_of_year(year).is_leap_year() else 365


def day_of_year_offset(day: pendulum.DateTime) -> int:
    """Zero-based day of the year, Jan 1 is 0."""
    return start_of_day(day).day_of_year - 1


def day_to_ordinal(day: pendulum.DateTime) -> int:
    local_day = start_of_day(day)
    return datetime.date(local_day.year, local_day.month, local_day.day).toordinal()


def day_from_ordinal(ordinal: int) -> pendulum.DateTime:
    date = datetime.date.fromordinal(ordinal)
    return pendulum.datetime(date.year, date.month, date.day, tz="local")


def day_to_date_key(day: pendulum.DateTime) -> str:
    return start_of_day(day).format(DATE_KEY_FORMAT)


def day_from_date_key(date_key: str) -> pendulum.DateTime:
    """Parse a 'DD-MM-YYYY' key into local midnight. Raises ValueError on bad keys."""
    return cast(
        pendulum.DateTime,
        pendulum.from_format(date_key, DATE_KEY_FORMAT, tz="local"),
    )


def ordinal_to_date_key(ordinal: int) -> str:
    return day_to_date_key(day_from_ordinal(ordinal))


def ordinal_from_date_key(date_key: str) -> int:
    return day_to_ordinal(day_from_date_key(date_key))


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a datetime: {datetime!r}")
    return parsed


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def datetime_to_display_local_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_date_str(datetime)
