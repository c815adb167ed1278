import pytest

from sqldatatables import Column, DatabaseBackend


class RecordingBackend(DatabaseBackend):
    """Answers counts and pages from canned values and records every statement."""

    def __init__(self, total=0, filtered=0, rows=None, fail_on=None):
        super().__init__(None)
        self.counts = [total, filtered]
        self.rows = rows or []
        self.fail_on = fail_on or {}
        self.calls = []

    async def count(self, statement, params):
        self.calls.append(("count", statement, dict(params)))
        number = len([c for c in self.calls if c[0] == "count"])
        if number in self.fail_on:
            raise self.fail_on[number]
        return self.counts[number - 1]

    async def fetch(self, statement, params):
        self.calls.append(("fetch", statement, dict(params)))
        if "fetch" in self.fail_on:
            raise self.fail_on["fetch"]
        return self.rows


@pytest.fixture
def people_columns():
    return [Column(name="id"), Column(name="name"), Column(name="email")]


@pytest.fixture
def staff_columns():
    return [Column(name="id"), Column(name="department"), Column(name="salary")]
