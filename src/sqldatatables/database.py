# sqldatatables/database.py
from typing import Any, Dict, Sequence

from sqlalchemy import text


class DatabaseBackend:
    def __init__(self, db_session: Any):
        self.db_session = db_session  # AsyncSession, AsyncConnection, or anything a subclass knows

    async def count(self, statement: str, params: Dict[str, Any]) -> int:
        """Run a COUNT(*) statement and return its single value"""
        raise NotImplementedError

    async def fetch(self, statement: str, params: Dict[str, Any]) -> Sequence[Sequence[Any]]:
        """Run the page statement and return its rows"""
        raise NotImplementedError


class SQLAlchemyBackend(DatabaseBackend):
    """Runs the raw statements through SQLAlchemy with named bind parameters."""

    async def count(self, statement: str, params: Dict[str, Any]) -> int:
        result = await self.db_session.execute(text(statement), params)
        return result.scalar_one()

    async def fetch(self, statement: str, params: Dict[str, Any]) -> Sequence[Sequence[Any]]:
        result = await self.db_session.execute(text(statement), params)
        return result.all()
