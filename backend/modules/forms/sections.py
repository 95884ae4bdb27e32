"""
Wedding form schema and section catalog.

FIELD_DEFAULTS is the fixed schema: every field the wedding form knows
about, with the value a brand new form starts from. SECTIONS groups a
subset of those fields for the form wizard and the progress badges.
"""

from dataclasses import dataclass
from typing import Optional

from modules.persistence.models import FieldMap, FieldValue


FIELD_DEFAULTS: dict[str, FieldValue] = {
    # Basic information
    "bride_name": "",
    "groom_name": "",
    "wedding_date": "",
    "venue_name": "",
    "venue_address": "",
    "ceremony_time": "",
    "reception_time": "",
    "contact_phone": "",
    "contact_email": "",
    # Getting ready
    "bride_getting_ready_location": "",
    "bride_getting_ready_time": "",
    "groom_getting_ready_location": "",
    "groom_getting_ready_time": "",
    "getting_ready_photos": False,
    # Ceremony
    "ceremony_style": "",
    "ceremony_duration": "",
    "special_traditions": "",
    "ring_bearer": False,
    "flower_girl": False,
    # Reception
    "first_dance_song": "",
    "special_dances": "",
    "cake_cutting_time": "",
    "bouquet_toss": False,
    "confetti_shot": False,
    "confetti_type": "",
    # Group photos
    "family_photos": False,
    "bridal_party_count": 0,
    "family_photo_list": "",
    "special_group_requests": "",
    # Special requests
    "must_have_shots": "",
    "do_not_photograph": "",
    "surprise_plans": "",
    "special_considerations": "",
    "custom_timeline": "",
    "timeline_notes": "",
    # Package interest
    "engagement_photos": False,
    "bridal_portraits": False,
    "album_interest": False,
    "print_packages": False,
}

FIELD_NAMES = frozenset(FIELD_DEFAULTS)


def default_form_data() -> FieldMap:
    """Fresh copy of the schema defaults."""
    return dict(FIELD_DEFAULTS)


@dataclass(frozen=True)
class Section:
    """One step of the form wizard."""

    id: str
    title: str
    description: str
    icon: str
    fields: tuple[str, ...]


SECTIONS: tuple[Section, ...] = (
    Section(
        id="basic",
        title="Basic Information",
        description="Essential details about your wedding day",
        icon="💑",
        fields=("bride_name", "groom_name", "wedding_date", "venue_name", "contact_phone"),
    ),
    Section(
        id="getting-ready",
        title="Getting Ready",
        description="Where and when you'll be preparing",
        icon="✨",
        fields=("bride_getting_ready_location", "groom_getting_ready_location"),
    ),
    Section(
        id="ceremony",
        title="Ceremony Details",
        description="Your ceremony preferences and traditions",
        icon="💒",
        fields=("ceremony_style", "ceremony_time", "special_traditions"),
    ),
    Section(
        id="reception",
        title="Reception Details",
        description="Reception timeline and special moments",
        icon="🎉",
        fields=("reception_time", "first_dance_song", "cake_cutting_time"),
    ),
    Section(
        id="groups",
        title="Group Photos",
        description="Family and group photo requirements",
        icon="👨‍👩‍👧‍👦",
        fields=("family_photos", "bridal_party_count", "family_photo_list"),
    ),
    Section(
        id="special",
        title="Special Requests",
        description="Must-have shots and special considerations",
        icon="📸",
        fields=("must_have_shots", "special_considerations"),
    ),
)

SECTION_IDS: tuple[str, ...] = tuple(section.id for section in SECTIONS)


def get_section(section_id: str) -> Optional[Section]:
    """Look up a section by id."""
    for section in SECTIONS:
        if section.id == section_id:
            return section
    return None


def resolve_section_index(section_id: Optional[str]) -> int:
    """
    Index of a deep-linked section.

    Unknown or missing ids fall back to the first section.
    """
    if section_id and section_id in SECTION_IDS:
        return SECTION_IDS.index(section_id)
    return 0


def get_adjacent_sections(section_id: Optional[str]) -> tuple[Optional[Section], Optional[Section]]:
    """Return the (previous, next) sections around the given one."""
    index = resolve_section_index(section_id)
    previous = SECTIONS[index - 1] if index > 0 else None
    following = SECTIONS[index + 1] if index < len(SECTIONS) - 1 else None
    return previous, following
