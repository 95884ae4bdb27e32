"""
CSV export of the client list.
"""

import csv
import io
from typing import Any, Iterable, Mapping, Optional, Sequence

from .models import ClientSummary

CLIENT_EXPORT_COLUMNS = (
    "full_name",
    "email",
    "phone",
    "bride_name",
    "groom_name",
    "wedding_date",
    "venue_name",
    "completion",
)


def generate_csv(rows: Sequence[Mapping[str, Any]], columns: Optional[Sequence[str]] = None) -> str:
    """
    Render rows as CSV with every cell quoted.

    Columns default to the keys of the first row. Missing or empty values
    become empty strings; embedded quotes are doubled.
    """
    if columns is None:
        columns = list(rows[0].keys()) if rows else []

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow(_cell(row.get(column)) for column in columns)
    return buffer.getvalue()


def _cell(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value)


def clients_to_csv(clients: Iterable[ClientSummary]) -> str:
    rows = [client.model_dump() for client in clients]
    return generate_csv(rows, CLIENT_EXPORT_COLUMNS)
