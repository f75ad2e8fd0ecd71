"""
Scheduling errors.

Each error carries a stable ``code`` and a ``details`` mapping (offending field,
requested slot) so the API layer can tell invalid input, a taken slot and an
unavailable store apart.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from fastapi import status


class SchedulingError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "scheduling_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(SchedulingError):
    """Missing or malformed input. Not retriable without changing the input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required", {"field": field})


class InvalidSlotError(SchedulingError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_slot"

    def __init__(self, time: Any) -> None:
        self.time = time
        super().__init__(f"Invalid time slot: {time}", {"time": time})


class SlotConflictError(SchedulingError):
    """The slot was taken between enumeration and commit. Pick another slot."""

    status_code = status.HTTP_409_CONFLICT
    code = "slot_conflict"

    def __init__(self, slot_date: date | str, time: str) -> None:
        self.slot_date = slot_date if isinstance(slot_date, str) else slot_date.isoformat()
        self.time = time
        super().__init__(
            "This time slot is no longer available",
            {"date": self.slot_date, "time": time},
        )


class StoreUnavailableError(SchedulingError):
    """Booking store transport or infrastructure failure. Retriable with backoff."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "store_unavailable"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("Booking store is temporarily unavailable", {"operation": operation})


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, interview_id: str) -> None:
        self.interview_id = interview_id
        super().__init__("Interview not found", {"interview_id": interview_id})
