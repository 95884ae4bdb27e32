"""
Base repository class for database access.

Wraps a Supabase client and the handful of helpers every table reader
needs for PostgREST responses.
"""

from typing import Any, Generic, Optional, TypeVar

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase-backed repositories.

    Subclasses query through `self._db` and map rows to Pydantic models
    themselves.

    Example:
        class WeddingFormRepository(BaseRepository[WeddingForm]):
            def get_for_user(self, user_id: str) -> Optional[WeddingForm]:
                result = self._db.table("wedding_forms").select("*").eq("user_id", user_id).execute()
                row = self._first_row(result)
                return WeddingForm(**row) if row else None
    """

    def __init__(self, db: Client) -> None:
        self._db = db

    @staticmethod
    def _rows(result: Any) -> list[dict[str, Any]]:
        """Rows of an executed query; a null payload reads as no rows."""
        return list(result.data or [])

    @classmethod
    def _first_row(cls, result: Any) -> Optional[dict[str, Any]]:
        rows = cls._rows(result)
        return rows[0] if rows else None

    @staticmethod
    def _embedded(value: Any) -> Optional[dict[str, Any]]:
        """PostgREST embeds to-one relations as objects and to-many as lists."""
        if isinstance(value, list):
            return value[0] if value else None
        return value or None
