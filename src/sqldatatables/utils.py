import logging
from typing import List, Optional, Sequence

from .exceptions import ConfigurationError, InvalidColumnError
from .schema import Column, DataTablesRequest, QuerySet

logger = logging.getLogger(__name__)

SEARCH_MATCH = "LIKE CONCAT('%', :search, '%')"


def search_columns(columns: Sequence[Column], group_by: Optional[str]) -> List[Column]:
    """
    Columns the search term may be matched against.

    Once rows are collapsed by GROUP BY only the grouping keys can still be
    filtered with LIKE, so a column qualifies when its name, or its search
    override, appears in the grouping expression.
    """
    if not group_by:
        return list(columns)
    return [
        col
        for col in columns
        if col.name in group_by or (col.search and col.search in group_by)
    ]


def select_list(columns: Sequence[Column], group_by: Optional[str]) -> str:
    if group_by:
        return ", ".join(col.display_expr for col in columns)
    # NULL renders as an empty string
    return ", ".join(
        f"IF(ISNULL({col.display_expr}), '', {col.display_expr})" for col in columns
    )


def search_clause(columns: Sequence[Column], group_by: Optional[str]) -> str:
    terms = [
        f"{col.search_expr} {SEARCH_MATCH}" for col in search_columns(columns, group_by)
    ]
    if not terms:
        return ""
    return "(" + " OR ".join(terms) + ")"


def where_clause(
    where: Optional[str],
    columns: Sequence[Column],
    group_by: Optional[str],
    search: bool = True,
) -> str:
    """AND-join the additional filter and the search disjunction into a WHERE clause."""
    conditions = []
    if where:
        conditions.append(f"({where})")
    if search:
        disjunction = search_clause(columns, group_by)
        if disjunction:
            conditions.append(disjunction)
    if not conditions:
        return ""
    return " WHERE " + " AND ".join(conditions)


def count_statement(table: str, where_sql: str, group_by: Optional[str]) -> str:
    """Count rows, or groups when a grouping expression is given."""
    if group_by:
        return (
            f"SELECT COUNT(*) FROM (SELECT COUNT(*) FROM {table}{where_sql}"
            f" GROUP BY {group_by}) AS count_table"
        )
    return f"SELECT COUNT(*) FROM {table}{where_sql}"


def order_clause(columns: Sequence[Column], request_data: DataTablesRequest) -> str:
    index = request_data.order_column
    if index < 0 or index >= len(columns):
        raise InvalidColumnError(
            f"Invalid column for ordering: {index} ({len(columns)} columns configured)"
        )
    return f" ORDER BY {columns[index].order_expr} {request_data.order_dir.value}"


def limit_clause(request_data: DataTablesRequest) -> str:
    if request_data.no_limit:
        return ""
    return " LIMIT :length OFFSET :start"


def _statement(
    table: str,
    columns: Sequence[Column],
    request_data: DataTablesRequest,
    where: Optional[str],
    group_by: Optional[str],
    counting: bool,
    search: bool,
) -> str:
    where_sql = where_clause(where, columns, group_by, search=search)
    if counting:
        return count_statement(table, where_sql, group_by)

    stmt = f"SELECT {select_list(columns, group_by)} FROM {table}{where_sql}"
    if group_by:
        stmt += f" GROUP BY {group_by}"
    stmt += order_clause(columns, request_data)
    stmt += limit_clause(request_data)
    return stmt


def build_queries(
    table: str,
    columns: Sequence[Column],
    request_data: DataTablesRequest,
    where: Optional[str] = None,
    group_by: Optional[str] = None,
) -> QuerySet:
    """
    Build the total count, filtered count and page statements.

    Table, column, filter and grouping expressions are trusted and written
    into the SQL text. search, length and start are only ever bound.
    """
    if not table:
        raise ConfigurationError("Table name must not be empty")
    if not columns:
        raise ConfigurationError("At least one column is required")

    params = {"search": request_data.search}
    if not request_data.no_limit:
        params["length"] = request_data.length
        params["start"] = request_data.start

    queries = QuerySet(
        total=_statement(table, columns, request_data, where, group_by, True, False),
        filtered=_statement(table, columns, request_data, where, group_by, True, True),
        data=_statement(table, columns, request_data, where, group_by, False, True),
        params=params,
    )
    logger.debug("DataTables queries for %s: %s", table, queries.model_dump())
    return queries
