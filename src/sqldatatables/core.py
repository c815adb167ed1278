import logging
from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from .database import DatabaseBackend, SQLAlchemyBackend
from .enum import UnknownValuePolicy
from .exceptions import StructuralQueryError
from .projection import project_rows
from .schema import Column, DataTablesRequest, DataTablesResponse, QuerySet
from .utils import build_queries

logger = logging.getLogger(__name__)


class DataTables:
    def __init__(
        self,
        db_session: Any,
        table: str,
        columns: Sequence[Column],
        where: Optional[str] = None,
        group_by: Optional[str] = None,
        db_backend: Optional[DatabaseBackend] = None,
        unknown_values: UnknownValuePolicy = UnknownValuePolicy.DROP,
    ):
        """
        Initializes the DataTables processor.

        Args:
            db_session: SQLAlchemy AsyncSession or AsyncConnection
            table: Table (or join expression) the rows come from
            columns: Ordered columns; the client sorts by index into this list
            where: Additional trusted filter applied to every query
            group_by: GROUP BY expression; counts then count groups
            db_backend: Backend used instead of SQLAlchemyBackend(db_session)
            unknown_values: How to project values of unsupported types
        """
        self.table = table
        self.columns = tuple(columns)
        self.where = where
        self.group_by = group_by
        self.unknown_values = unknown_values
        if db_backend is None:
            self.db_backend = SQLAlchemyBackend(db_session)
        else:
            self.db_backend = db_backend

    def queries(self, request_data: DataTablesRequest) -> QuerySet:
        return build_queries(
            self.table, self.columns, request_data, self.where, self.group_by
        )

    async def _count(self, label: str, statement: str, params: dict) -> int:
        try:
            return await self.db_backend.count(statement, params)
        except SQLAlchemyError as e:
            logger.error(f"{label} count query failed on {self.table}: {e}")
            raise StructuralQueryError(f"{label} count query failed: {e}") from e

    async def process(self, request_data: DataTablesRequest) -> DataTablesResponse:
        """
        Processes the DataTables request and returns the response.

        Raises StructuralQueryError when either count cannot be obtained and
        InvalidColumnError when the order column index is out of range.
        """
        queries = self.queries(request_data)

        # -- Total Records (Unfiltered) --
        records_total = await self._count("Total", queries.total, {})

        # -- Count After Filtering --
        records_filtered = await self._count("Filtered", queries.filtered, queries.params)

        # -- Page --
        try:
            rows = await self.db_backend.fetch(queries.data, queries.params)
        except SQLAlchemyError:
            logger.exception(f"Data query failed on {self.table}, returning no rows")
            rows = []

        data = project_rows(rows, self.unknown_values)

        return DataTablesResponse.assemble(
            request_data.draw, records_total, records_filtered, data
        )
