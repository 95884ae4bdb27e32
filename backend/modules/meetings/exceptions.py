"""
Meetings module exceptions.
"""

from shared.exceptions import ConflictError, ValidationError


class SlotAlreadyBookedError(ConflictError):
    """Raised when booking a slot that is already taken."""

    def __init__(self, slot_id: str):
        super().__init__(
            f"Availability slot already booked: {slot_id}",
            code="SLOT_ALREADY_BOOKED",
            details={"slot_id": slot_id},
        )


class InvalidSlotTimesError(ValidationError):
    """Raised when a slot does not end after it starts."""

    def __init__(self, start_time: str, end_time: str):
        super().__init__(
            f"Slot must end after it starts ({start_time} - {end_time})",
            code="INVALID_SLOT_TIMES",
            details={"start_time": start_time, "end_time": end_time},
        )
