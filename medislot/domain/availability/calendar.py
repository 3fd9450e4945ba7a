"""
Calendar projection - pure functions shared by the booking calendar and
the doctor availability editor.

Nothing here touches the database or the clock; callers pass "today" in,
so the same inputs always yield the same grid.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Mapping

WEEKS_PER_GRID = 6
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class CalendarCell:
    date: date
    day: int
    date_key: str
    is_current_month: bool
    is_past: bool
    is_today: bool
    is_selected: bool
    has_availability: bool
    available: bool
    total_slots: int

    def to_dict(self) -> dict:
        return {
            "date": self.date_key,
            "day": self.day,
            "isCurrentMonth": self.is_current_month,
            "isPast": self.is_past,
            "isToday": self.is_today,
            "isSelected": self.is_selected,
            "hasAvailability": self.has_availability,
            "available": self.available,
            "totalSlots": self.total_slots,
        }


def to_availability_map(days: Iterable[dict]) -> dict[str, dict[str, int]]:
    """Convert [{date, slots:[{slotKey, count}]}] into {date: {slotKey: count}}"""
    return {d["date"]: {s["slotKey"]: s["count"] for s in d.get("slots", [])} for d in days}


def grid_start(year: int, month: int) -> date:
    """Sunday on or before the first day of the month"""
    first = date(year, month, 1)
    # date.weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def project_month(
    year: int,
    month: int,
    availability_by_date: Mapping[str, Mapping[str, int]],
    today: date,
    selected_dates: Iterable[str] = (),
) -> list[list[CalendarCell]]:
    """
    Build a 6x7 month grid padded with adjacent-month days.

    A day is available when at least one slot has a positive count and
    the day is not before today.
    """
    selected = frozenset(selected_dates)
    start = grid_start(year, month)
    weeks = []
    for week in range(WEEKS_PER_GRID):
        row = []
        for offset in range(DAYS_PER_WEEK):
            current = start + timedelta(days=week * DAYS_PER_WEEK + offset)
            key = current.isoformat()
            counts = availability_by_date.get(key) or {}
            total = sum(counts.values())
            has_availability = any(c > 0 for c in counts.values())
            is_past = current < today
            row.append(
                CalendarCell(
                    date=current,
                    day=current.day,
                    date_key=key,
                    is_current_month=current.month == month,
                    is_past=is_past,
                    is_today=current == today,
                    is_selected=key in selected,
                    has_availability=has_availability,
                    available=has_availability and not is_past,
                    total_slots=total,
                )
            )
        weeks.append(row)
    return weeks


def upcoming_dates(
    availability_by_date: Mapping[str, Mapping[str, int]], today: date, horizon: int = 30
) -> list[dict]:
    """Rolling strip of dates starting today, as shown on the patient booking screen"""
    strip = []
    for i in range(horizon):
        current = today + timedelta(days=i)
        counts = availability_by_date.get(current.isoformat()) or {}
        strip.append(
            {
                "date": current.isoformat(),
                "weekday": current.strftime("%a"),
                "available": any(c > 0 for c in counts.values()),
            }
        )
    return strip
