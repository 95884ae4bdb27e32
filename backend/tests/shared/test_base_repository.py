"""Tests for shared/repository.py."""

from unittest.mock import MagicMock

from shared.repository import BaseRepository


def executed(data):
    result = MagicMock()
    result.data = data
    return result


class TestBaseRepository:
    def test_init_stores_db_client(self):
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_reads_through_db(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            {"user_id": "user-1", "form_data": {"bride_name": "Sarah"}}
        ]

        class WeddingFormRepository(BaseRepository[dict]):
            def get_for_user(self, user_id: str):
                result = self._db.table("wedding_forms").select("*").eq("user_id", user_id).execute()
                return self._first_row(result)

        row = WeddingFormRepository(mock_db).get_for_user("user-1")

        assert row["form_data"] == {"bride_name": "Sarah"}
        mock_db.table.assert_called_once_with("wedding_forms")


class TestRowHelpers:
    def test_rows_treats_null_payload_as_empty(self):
        assert BaseRepository._rows(executed(None)) == []
        assert BaseRepository._rows(executed([{"id": 1}])) == [{"id": 1}]

    def test_first_row(self):
        assert BaseRepository._first_row(executed([])) is None
        assert BaseRepository._first_row(executed([{"id": 1}, {"id": 2}])) == {"id": 1}

    def test_embedded_to_one_and_to_many(self):
        assert BaseRepository._embedded({"id": "f1"}) == {"id": "f1"}
        assert BaseRepository._embedded([{"id": "f1"}, {"id": "f2"}]) == {"id": "f1"}
        assert BaseRepository._embedded([]) is None
        assert BaseRepository._embedded(None) is None
