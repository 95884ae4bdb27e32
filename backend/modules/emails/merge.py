"""
Merge-field substitution for email templates.

Tokens are replaced globally with plain string replacement. Values are
not escaped, and text that already contains a token is substituted too.
"""

from typing import Any, Mapping, Optional

from dateutil import parser as date_parser

from shared.config import get_settings

CLIENT_MERGE_FIELDS = (
    "bride_name",
    "groom_name",
    "wedding_date",
    "venue_name",
    "contact_phone",
)
MERGE_FIELDS = CLIENT_MERGE_FIELDS + ("photographer_name", "company_name")


def token(name: str) -> str:
    return "{{" + name + "}}"


def format_wedding_date(value: Any) -> str:
    """DD/MM/YYYY when the value parses as a date, the raw value otherwise."""
    if not value:
        return ""
    try:
        return date_parser.parse(str(value)).strftime("%d/%m/%Y")
    except (ValueError, OverflowError):
        return str(value)


def build_merge_values(
    client_data: Mapping[str, Any],
    photographer_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> dict[str, str]:
    """Token to replacement text for one client."""
    settings = get_settings()
    values = {name: str(client_data.get(name) or "") for name in CLIENT_MERGE_FIELDS}
    values["wedding_date"] = format_wedding_date(client_data.get("wedding_date"))
    values["photographer_name"] = photographer_name or settings.photographer_name
    values["company_name"] = company_name or settings.company_name
    return {token(name): value for name, value in values.items()}


def merge_placeholders(
    template: str,
    client_data: Mapping[str, Any],
    photographer_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> str:
    """Replace every merge token in `template`."""
    merged = template
    for placeholder, value in build_merge_values(
        client_data, photographer_name, company_name
    ).items():
        merged = merged.replace(placeholder, value)
    return merged
