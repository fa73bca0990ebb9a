# classbook/core/schedule.py
"""
Расписание класса: разбор сохранённого правила повторения и
вычисление дат занятий внутри месяца.

Правило хранится в classes.default_schedule как JSON-текст и может быть
битым, устаревшим ({"dayOfWeek": "Monday"}) или отсутствовать. Всё, что
не удалось разобрать, превращается в пустое правило, исключений наружу нет.
"""
import json
import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Порядок совпадает с date.isoweekday() % 7: воскресенье = 0
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DEFAULT_DURATION_MINUTES = 60

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


class RecurrenceDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days: List[str] = Field(default_factory=list)
    time: Optional[str] = None
    duration_minutes: int = Field(default=DEFAULT_DURATION_MINUTES, alias="durationMinutes")

    def is_empty(self) -> bool:
        return not self.days

    def to_storage(self) -> str:
        """Сериализует правило в текст для колонки classes.default_schedule."""
        return self.model_dump_json(by_alias=True)


def _clean_days(value: Any) -> List[str]:
    days = []
    for day in value:
        if not isinstance(day, str):
            continue
        day = day.strip()
        if day in WEEKDAYS and day not in days:
            days.append(day)
    return days


def _clean_duration(value: Any) -> int:
    # bool является подклассом int, числом его не считаем
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_DURATION_MINUTES
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # целое, не влезающее во float
        return DEFAULT_DURATION_MINUTES
    if not finite or value < 0:
        return DEFAULT_DURATION_MINUTES
    return int(value)


def normalize_schedule(raw: Any) -> RecurrenceDescriptor:
    if isinstance(raw, RecurrenceDescriptor):
        return raw.model_copy(deep=True)

    value = raw
    if isinstance(raw, (str, bytes)):
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError):
            value = None

    if not isinstance(value, dict):
        return RecurrenceDescriptor()

    raw_days = value.get("days")
    if isinstance(raw_days, (list, tuple)):
        days = _clean_days(raw_days)
    elif isinstance(value.get("dayOfWeek"), str):
        # Старый формат: один день недели строкой
        days = _clean_days([value["dayOfWeek"]])
    else:
        days = []

    time = value.get("time")
    time = time.strip() if isinstance(time, str) and time.strip() else None

    return RecurrenceDescriptor(
        days=days,
        time=time,
        duration_minutes=_clean_duration(value.get("durationMinutes")),
    )


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.isoweekday() % 7]


def add_months(year: int, month: int, count: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + count
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    first = date(year, month, 1)
    next_year, next_month = add_months(year, month, 1)
    # последний день = первое число следующего месяца минус день
    last = date(next_year, next_month, 1) - timedelta(days=1)
    return first, last


def occurrences_in_month(descriptor: RecurrenceDescriptor, year: int, month: int) -> List[date]:
    if not descriptor.days:
        return []

    wanted = set(descriptor.days)
    first, last = month_bounds(year, month)
    result = []
    day = first
    while day <= last:
        if weekday_name(day) in wanted:
            result.append(day)
        day += timedelta(days=1)
    return result


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_month(value: str) -> Tuple[int, int]:
    """Разбирает "YYYY-MM". ValueError при неверном формате или месяце вне 1..12."""
    match = _MONTH_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid month format: {value!r}, expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {value!r}")
    return year, month


def reference_month(reference: datetime | date) -> Tuple[int, int]:
    if isinstance(reference, datetime) and reference.tzinfo is not None:
        reference = reference.astimezone(timezone.utc)
    return reference.year, reference.month
