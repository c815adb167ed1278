# sqldatatables/__init__.py
from .core import DataTables
from .database import DatabaseBackend, SQLAlchemyBackend
from .schema import Column, DataTablesRequest, DataTablesResponse, QuerySet
from .exceptions import (
    ConfigurationError,
    DataTablesError,
    InvalidColumnError,
    StructuralQueryError,
)
from .enum import OrderDirection, UnknownValuePolicy
from .projection import project_row, project_rows
from .utils import build_queries
from .endpoint import datatables_request, respond

__version__ = "0.1.0"

__all__ = [
    "DataTables",
    "DatabaseBackend",
    "SQLAlchemyBackend",
    "Column",
    "DataTablesRequest",
    "DataTablesResponse",
    "QuerySet",
    "DataTablesError",
    "ConfigurationError",
    "InvalidColumnError",
    "StructuralQueryError",
    "OrderDirection",
    "UnknownValuePolicy",
    "project_row",
    "project_rows",
    "build_queries",
    "datatables_request",
    "respond",
]
