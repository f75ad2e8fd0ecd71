from __future__ import annotations

from typing import Any

from mockprep.core.errors import InvalidSlotError


# Bookable time-of-day slots, 24-hour "HH:MM", in display order.
SLOT_0900 = "09:00"
SLOT_1100 = "11:00"
SLOT_1300 = "13:00"
SLOT_1500 = "15:00"
SLOT_1700 = "17:00"


SLOT_LABELS: tuple[str, ...] = (
    SLOT_0900,
    SLOT_1100,
    SLOT_1300,
    SLOT_1500,
    SLOT_1700,
)


_SLOT_SET: frozenset[str] = frozenset(SLOT_LABELS)


def list_slot_labels() -> tuple[str, ...]:
    return SLOT_LABELS


def is_slot_label(value: Any) -> bool:
    return isinstance(value, str) and value in _SLOT_SET


def require_slot_label(value: Any) -> str:
    if not is_slot_label(value):
        raise InvalidSlotError(value)
    return value
