"""
Video meeting links.

No calendar or video provider is called. Google Meet style ids are
generated locally and Zoom links are whatever the admin stored.
"""

import random
import string
from typing import Optional

from modules.persistence.models import IntegrationSettings, Meeting

MEET_BASE_URL = "https://meet.google.com"


def generate_meet_id(rng: Optional[random.Random] = None) -> str:
    """Three dash-separated groups of four lowercase letters."""
    rng = rng or random.Random()
    return "-".join(
        "".join(rng.choice(string.ascii_lowercase) for _ in range(4))
        for _ in range(3)
    )


def meeting_link(meeting: Meeting, settings: IntegrationSettings) -> str:
    """
    Join link for a meeting.

    The stored Zoom link wins when Zoom is enabled; otherwise a Meet URL
    is built from the meeting's id ("new" when it has none).
    """
    if settings.zoom_enabled and meeting.zoom_link:
        return meeting.zoom_link
    return f"{MEET_BASE_URL}/{meeting.meet_id or 'new'}"
