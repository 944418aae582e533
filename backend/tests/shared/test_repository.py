"""Tests for shared/repository.py."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._db.table("test").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)

        assert repo.get_all() == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")

    def test_timestamp_is_iso_format(self):
        """Timestamps should serialize with their UTC offset."""
        value = datetime(2026, 1, 1, 12, 30, tzinfo=timezone.utc)
        assert BaseRepository._timestamp(value) == "2026-01-01T12:30:00+00:00"

    def test_first_row(self):
        """_first should return the first row or None."""
        assert BaseRepository._first([{"id": 1}, {"id": 2}]) == {"id": 1}
        assert BaseRepository._first([]) is None
        assert BaseRepository._first(None) is None
