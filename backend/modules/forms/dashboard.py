"""
Client dashboard helpers.
"""

from datetime import date, datetime
from typing import Any, Mapping, Optional

from dateutil import parser as date_parser


def get_motivational_message(completion: int) -> str:
    if completion == 100:
        return "🎉 Perfect! Your wedding details are complete. We're ready to capture your special day!"
    if completion >= 75:
        return "✨ Almost there! Just a few more details and we'll have everything we need."
    if completion >= 50:
        return "💫 Great progress! You're halfway through sharing your wedding vision with us."
    if completion >= 25:
        return "🌟 Nice start! Keep going - each detail helps us capture your perfect day."
    return "💑 Welcome! Let's start gathering the details to make your wedding photography perfect."


def parse_wedding_date(value: Any) -> Optional[date]:
    """Parse a stored wedding date, returning None when it isn't a date."""
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError):
        return None


def days_until_wedding(wedding_date: Any, today: Optional[date] = None) -> Optional[int]:
    """
    Whole days from today until the wedding (negative once it has passed).

    Returns:
        None when the date is missing or unparseable
    """
    parsed = parse_wedding_date(wedding_date)
    if parsed is None:
        return None
    today = today or datetime.now().date()
    return (parsed - today).days


def generate_wedding_timeline(form_data: Mapping[str, Any]) -> list[dict[str, Any]]:
    """
    Build the day's photography timeline from whichever times are known.

    Entries are sorted by their time string ("HH:MM").
    """
    venue = form_data.get("venue_name") or ""
    candidates = [
        ("bride_getting_ready_time", "Bride getting ready photos",
         form_data.get("bride_getting_ready_location") or ""),
        ("groom_getting_ready_time", "Groom getting ready photos",
         form_data.get("groom_getting_ready_location") or ""),
        ("ceremony_time", "Ceremony", venue),
        ("reception_time", "Reception", venue),
        ("cake_cutting_time", "Cake cutting", venue),
    ]

    timeline = [
        {"time": str(form_data[key]), "event": event, "location": location}
        for key, event, location in candidates
        if form_data.get(key)
    ]
    return sorted(timeline, key=lambda entry: entry["time"])
