# sqldatatables/schema.py
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .config import get_settings
from .enum import OrderDirection

NO_LIMIT = -1


def _to_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


class Column(BaseModel):
    """
    One column of the table.

    name is the column (or grouping key) in the table. search, display and
    order are the SQL expressions used to match the search term, to render
    the value and to sort; each falls back to name when left blank.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    search: str = ""
    display: str = ""
    order: str = ""

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Column name must not be empty")
        return value

    @property
    def search_expr(self) -> str:
        return self.search or self.name

    @property
    def display_expr(self) -> str:
        return self.display or self.name

    @property
    def order_expr(self) -> str:
        return self.order or self.name


class DataTablesRequest(BaseModel):
    draw: int = 0
    start: int = 0
    length: int = 10  # NO_LIMIT for every row
    search: str = ""
    order_column: int = 0
    order_dir: OrderDirection = OrderDirection.ASC

    @property
    def no_limit(self) -> bool:
        return self.length == NO_LIMIT

    @classmethod
    def from_form(
        cls, form: Mapping[str, Any], default_length: Optional[int] = None
    ) -> "DataTablesRequest":
        """
        Read the DataTables form fields, falling back to safe defaults for
        anything missing or malformed.
        """
        if default_length is None:
            default_length = get_settings().default_length

        start = _to_int(form.get("start"), 0)
        length = _to_int(form.get("length"), default_length)
        if length < 0 and length != NO_LIMIT:
            length = default_length

        direction = str(form.get("order[0][dir]") or "").strip().lower()
        try:
            order_dir = OrderDirection(direction)
        except ValueError:
            order_dir = OrderDirection.ASC

        return cls(
            draw=_to_int(form.get("draw"), 0),
            start=max(start, 0),
            length=length,
            search=str(form.get("search[value]") or ""),
            order_column=_to_int(form.get("order[0][column]"), 0),
            order_dir=order_dir,
        )


class QuerySet(BaseModel):
    """The three statements of one request and the values bound to them."""

    total: str
    filtered: str
    data: str
    params: Dict[str, Any] = {}


class DataTablesResponse(BaseModel):
    draw: int
    recordsTotal: int
    recordsFiltered: int
    data: Union[List[List[Any]], int] = 0  # 0 when no row matched
    error: Optional[str] = None

    @classmethod
    def assemble(
        cls, draw: int, total: int, filtered: int, rows: List[List[Any]]
    ) -> "DataTablesResponse":
        return cls(
            draw=draw,
            recordsTotal=total,
            recordsFiltered=filtered,
            data=rows if rows else 0,
        )
