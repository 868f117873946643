"""Month index for jumping through a chat by date.

Date tokens are kept exactly as exported. Day/month order is guessed with a
fixed rule: a first group above 12 can only be a day (D/M/Y); anything else is
read month-first (M/D/Y), so ``3/4/24`` is March 4th.
"""

import re
from dataclasses import dataclass, field

DATE_SPLIT_RE = re.compile(r"[/.\-]")

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


@dataclass(frozen=True, slots=True)
class DateParts:
    year: int
    month: int
    day: int


@dataclass(slots=True)
class MonthBucket:
    key: str
    label: str
    dates: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DateIndex:
    dates: list[str]
    months: list[MonthBucket]
    unparsed: list[str]


def expand_year(year: int) -> int:
    if year < 100:
        return year + (2000 if year < 50 else 1900)
    return year


def parse_date_token(token: str) -> DateParts | None:
    parts = DATE_SPLIT_RE.split(token.strip())
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        return None
    first, second, third = (int(part) for part in parts)
    if first > 12:
        day, month = first, second
    else:
        month, day = first, second
    if not 1 <= month <= 12:
        return None
    return DateParts(year=expand_year(third), month=month, day=day)


def month_key(parts: DateParts) -> str:
    return f"{parts.year:04d}-{parts.month:02d}"


def month_label(parts: DateParts) -> str:
    return f"{MONTH_NAMES[parts.month - 1]} {parts.year}"


def group_dates_by_month(dates: list[str]) -> DateIndex:
    buckets: dict[str, MonthBucket] = {}
    unparsed: list[str] = []
    for token in dates:
        parts = parse_date_token(token)
        if parts is None:
            unparsed.append(token)
            continue
        key = month_key(parts)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthBucket(key=key, label=month_label(parts))
        bucket.dates.append(token)
    return DateIndex(
        dates=list(dates),
        months=[buckets[key] for key in sorted(buckets)],
        unparsed=unparsed,
    )
