import copy

import pytest

from db.connection import ExecuteResult


class FakeDatabase:
    """
    Stand-in for db.connection.Database.

    Responses are scripted by SQL substring; the first registered needle
    found in a statement wins. Every call is recorded as (sql, params).
    """

    def __init__(self):
        self.calls = []
        self._queries = []
        self._executes = []

    def on_query(self, needle, rows):
        self._queries.append((needle, rows))

    def on_execute(self, needle, outcome):
        """`outcome` is an ExecuteResult or an exception to raise."""
        self._executes.append((needle, outcome))

    def query(self, sql, params=()):
        self.calls.append((sql, tuple(params)))
        for needle, rows in self._queries:
            if needle in sql:
                return copy.deepcopy(rows)
        return []

    def query_one(self, sql, params=()):
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def execute(self, sql, params=()):
        self.calls.append((sql, tuple(params)))
        for needle, outcome in self._executes:
            if needle in sql:
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return ExecuteResult(rowcount=0)


@pytest.fixture
def fake_db():
    return FakeDatabase()
