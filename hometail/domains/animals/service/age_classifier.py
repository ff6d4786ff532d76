"""
Age classification for animals.

Turns a birth date into an ``AgeGroup`` bucket and a short human readable
age ("3 years", "5 months", "2 weeks", "Less than a day old"). Pure
functions: "today" is always passed in by the caller.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from hometail.core.result import ErrorKind
from hometail.models.animal import AgeGroup

BABY_MAX_MONTHS = 6
YOUNG_MAX_MONTHS = 24
ADULT_MAX_MONTHS = 84


class InvalidBirthDate(ValueError):
    kind = ErrorKind.INVALID_INPUT


@dataclass(frozen=True)
class AgeInfo:
    age_group: AgeGroup
    description: str
    years: int


def whole_months_between(birth_date: date, today: date) -> int:
    delta = relativedelta(today, birth_date)
    return delta.years * 12 + delta.months


def age_group_for_months(months: int) -> AgeGroup:
    if months < BABY_MAX_MONTHS:
        return AgeGroup.BABY
    if months < YOUNG_MAX_MONTHS:
        return AgeGroup.YOUNG
    if months < ADULT_MAX_MONTHS:
        return AgeGroup.ADULT
    return AgeGroup.SENIOR


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def describe_age(birth_date: date, today: date) -> str:
    delta = relativedelta(today, birth_date)
    if delta.years > 0:
        return _plural(delta.years, "year")
    if delta.months > 0:
        return _plural(delta.months, "month")

    days = (today - birth_date).days
    if days == 0:
        return "Less than a day old"
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(days // 7, "week")
    # 30 days inside a 31-day month is still under one calendar month
    return _plural(days, "day")


def classify_age(birth_date: date, today: date) -> AgeInfo:
    if birth_date > today:
        raise InvalidBirthDate(f"Birth date {birth_date.isoformat()} is in the future.")

    months = whole_months_between(birth_date, today)
    return AgeInfo(
        age_group=age_group_for_months(months),
        description=describe_age(birth_date, today),
        years=months // 12,
    )


def classify_optional(birth_date: Optional[date], today: date) -> Optional[AgeInfo]:
    """Display helper: unknown or future birthdays yield no age info."""
    if birth_date is None or birth_date > today:
        return None
    return classify_age(birth_date, today)
