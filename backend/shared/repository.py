"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime
from typing import Any, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class AccountRepository(BaseRepository[Account]):
            def get_by_id(self, account_id: str) -> Optional[Account]:
                result = self._db.table("accounts").select("*").eq("id", account_id).execute()
                if not result.data:
                    return None
                return self._map_to_account(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _timestamp(value: datetime) -> str:
        """Serialize a datetime the way PostgREST expects it."""
        return value.isoformat()

    @staticmethod
    def _first(rows: list[dict[str, Any]] | None) -> dict[str, Any] | None:
        """Return the first row of a result set, or None when empty."""
        if not rows:
            return None
        return rows[0]
