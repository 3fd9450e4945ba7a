"""
Static slot catalog.

Every bookable slot is a half-hour start inside one of three periods.
The keys are shared with the mobile app and the doctor portal, so the
format "{period}-{HH:MM}" must not change.
"""

from enum import Enum
from typing import Iterable, Optional

SLOTS_PER_PERIOD = 6
SLOT_MINUTES = 30


class Period(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


PERIOD_START_HOURS = {
    Period.MORNING: 9,
    Period.AFTERNOON: 14,
    Period.EVENING: 18,
}

# Consultation fee per period; display only, never validated on booking
PERIOD_PRICES = {
    Period.MORNING: 500,
    Period.AFTERNOON: 600,
    Period.EVENING: 700,
}


def period_times(period: Period) -> list[str]:
    """Six zero-padded 24h start times for a period, e.g. 09:00 .. 11:30"""
    start = PERIOD_START_HOURS[Period(period)] * 60
    times = []
    for i in range(SLOTS_PER_PERIOD):
        minutes = start + i * SLOT_MINUTES
        times.append(f"{minutes // 60:02d}:{minutes % 60:02d}")
    return times


def slot_key(period: Period, time: str) -> str:
    return f"{Period(period).value}-{time}"


def all_slot_keys() -> list[str]:
    return [slot_key(p, t) for p in Period for t in period_times(p)]


_VALID_KEYS = frozenset(all_slot_keys())


def is_valid_slot_key(key: str) -> bool:
    return key in _VALID_KEYS


def parse_slot_key(key: str) -> tuple[Period, str]:
    """Split "evening-18:30" into (Period.EVENING, "18:30")"""
    if not is_valid_slot_key(key):
        raise ValueError(f"Unknown slot key: {key}")
    period, time = key.split("-", 1)
    return Period(period), time


def price_for(key: str) -> int:
    period, _ = parse_slot_key(key)
    return PERIOD_PRICES[period]


def booking_quote(key: str, platform_fee: int) -> dict:
    """Fee breakdown shown on the payment screen"""
    fee = price_for(key)
    return {"consultationFee": fee, "platformFee": platform_fee, "total": fee + platform_fee}


def day_slot_board(day_slots: Optional[Iterable[dict]]) -> list[dict]:
    """
    Lay one day's stored slots over the full catalog.

    Args:
        day_slots: stored entries for the day, each {"slotKey": str, "count": int}

    Returns:
        All catalog slots in catalog order; slots that are not stored get count 0
    """
    counts = {s["slotKey"]: s["count"] for s in (day_slots or [])}
    board = []
    for period in Period:
        for time in period_times(period):
            key = slot_key(period, time)
            count = counts.get(key, 0)
            board.append(
                {
                    "slotKey": key,
                    "period": period.value,
                    "time": time,
                    "price": PERIOD_PRICES[period],
                    "count": count,
                    "available": count > 0,
                }
            )
    return board


def catalog_summary() -> list[dict]:
    return [
        {"period": p.value, "times": period_times(p), "price": PERIOD_PRICES[p]} for p in Period
    ]
