"""
Completion calculation.

The 7 required fields decide how "done" a wedding form is. Section
progress is display-only and does not feed into the percentage.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from .sections import SECTIONS


REQUIRED_FIELDS: tuple[str, ...] = (
    "bride_name",
    "groom_name",
    "wedding_date",
    "venue_name",
    "ceremony_time",
    "reception_time",
    "contact_phone",
)


def is_filled(value: Any) -> bool:
    """A value counts when it is truthy and not blank once stringified."""
    return bool(value) and str(value).strip() != ""


def calculate_completion_percentage(form_data: Optional[Mapping[str, Any]]) -> int:
    """
    Percentage of required fields that are filled, 0 to 100.

    Rounds half up, so 2 of 7 gives 29 and 5 of 7 gives 71.
    """
    if not form_data:
        return 0
    filled = sum(1 for name in REQUIRED_FIELDS if is_filled(form_data.get(name)))
    ratio = Decimal(100 * filled) / Decimal(len(REQUIRED_FIELDS))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def section_progress(form_data: Optional[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Per-section fill counts for the wizard badges.

    A section is "started" when any field it owns is filled and
    "complete" when all of them are.
    """
    form_data = form_data or {}
    progress = []
    for section in SECTIONS:
        filled = sum(1 for name in section.fields if is_filled(form_data.get(name)))
        progress.append(
            {
                "id": section.id,
                "title": section.title,
                "filled": filled,
                "total": len(section.fields),
                "started": filled > 0,
                "complete": filled == len(section.fields),
            }
        )
    return progress
