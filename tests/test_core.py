"""
Tests for the DataTables request processor
"""
import pytest
from sqlalchemy.exc import OperationalError

from sqldatatables import (
    DataTables,
    DataTablesRequest,
    InvalidColumnError,
    StructuralQueryError,
)

from conftest import RecordingBackend


def db_error():
    return OperationalError("SELECT", {}, Exception("server has gone away"))


async def test_process_runs_queries_in_order(people_columns):
    backend = RecordingBackend(total=100, filtered=2, rows=[(1, b"alice", "alice@example.com"), (7, b"al", "")])
    datatable = DataTables(None, "users", people_columns, db_backend=backend)
    request_data = DataTablesRequest(draw=5, search="al", order_column=1, order_dir="desc")

    response = await datatable.process(request_data)

    assert [call[0] for call in backend.calls] == ["count", "count", "fetch"]
    assert backend.calls[0][1:] == ("SELECT COUNT(*) FROM users", {})
    assert "LIKE" in backend.calls[1][1]
    assert "ORDER BY name desc" in backend.calls[2][1]
    assert backend.calls[2][2] == {"search": "al", "length": 10, "start": 0}
    assert response.draw == 5
    assert response.recordsTotal == 100
    assert response.recordsFiltered == 2
    assert response.data == [[1, "alice", "alice@example.com"], [7, "al", ""]]


async def test_process_empty_page(people_columns):
    backend = RecordingBackend(total=3, filtered=0, rows=[])
    datatable = DataTables(None, "users", people_columns, db_backend=backend)

    response = await datatable.process(DataTablesRequest(draw=2, search="zzz"))

    assert response.data == 0
    assert response.recordsFiltered == 0


async def test_total_count_failure_is_fatal(people_columns):
    backend = RecordingBackend(fail_on={1: db_error()})
    datatable = DataTables(None, "users", people_columns, db_backend=backend)

    with pytest.raises(StructuralQueryError):
        await datatable.process(DataTablesRequest())

    assert len(backend.calls) == 1


async def test_filtered_count_failure_is_fatal(people_columns):
    backend = RecordingBackend(total=5, fail_on={2: db_error()})
    datatable = DataTables(None, "users", people_columns, db_backend=backend)

    with pytest.raises(StructuralQueryError):
        await datatable.process(DataTablesRequest())

    assert [call[0] for call in backend.calls] == ["count", "count"]


async def test_data_query_failure_returns_no_rows(people_columns, caplog):
    backend = RecordingBackend(total=5, filtered=4, fail_on={"fetch": db_error()})
    datatable = DataTables(None, "users", people_columns, db_backend=backend)

    response = await datatable.process(DataTablesRequest(draw=9))

    assert response.draw == 9
    assert response.recordsTotal == 5
    assert response.recordsFiltered == 4
    assert response.data == 0
    assert "Data query failed" in caplog.text


async def test_order_index_out_of_range_runs_no_query(people_columns):
    backend = RecordingBackend(total=1, filtered=1)
    datatable = DataTables(None, "users", people_columns, db_backend=backend)

    with pytest.raises(InvalidColumnError):
        await datatable.process(DataTablesRequest(order_column=3))

    assert backend.calls == []


def test_queries_apply_where_and_group_by(staff_columns):
    datatable = DataTables(
        None, "staff", staff_columns, where="active = 1", group_by="department",
        db_backend=RecordingBackend(),
    )

    queries = datatable.queries(DataTablesRequest(search="ops"))

    assert queries.total.endswith("GROUP BY department) AS count_table")
    assert "department LIKE" in queries.filtered
    assert "salary LIKE" not in queries.filtered
    assert "(active = 1)" in queries.data
