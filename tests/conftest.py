"""Shared fixtures and in-test stores."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from cashbook.exceptions import PersistenceError
from cashbook.models import Transaction
from cashbook.storage import JSONTransactionStore, TransactionStore


CASHBOOK_ENV_VARS = (
    "CASHBOOK_SUPABASE_URL",
    "CASHBOOK_SUPABASE_KEY",
    "CASHBOOK_TABLE",
    "CASHBOOK_DATA_DIR",
    "CASHBOOK_REQUEST_TIMEOUT",
    "CASHBOOK_ENV",
    "CASHBOOK_ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own configuration out of the tests."""
    for name in CASHBOOK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class MemoryStore(TransactionStore):
    """Store double that keeps rows in a list and counts calls."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None) -> None:
        self.rows: List[Dict[str, Any]] = list(rows or [])
        self.inserted: List[Dict[str, Any]] = []
        self.list_calls = 0

    def list_all(self) -> List[Transaction]:
        self.list_calls += 1
        rows = sorted(self.rows, key=lambda row: row["created_at"], reverse=True)
        return [Transaction.from_dict(row) for row in rows]

    def insert(self, record: Dict[str, Any]) -> Transaction:
        self.inserted.append(record)
        row = {"id": len(self.rows) + 1, **record}
        self.rows.append(row)
        return Transaction.from_dict(row)


class FailingStore(TransactionStore):
    """Store double whose every call fails like an unreachable backend."""

    def __init__(self) -> None:
        self.insert_attempts = 0

    def list_all(self) -> List[Transaction]:
        raise PersistenceError("store unreachable")

    def insert(self, record: Dict[str, Any]) -> Transaction:
        self.insert_attempts += 1
        raise PersistenceError("store unreachable")


def make_tx(id, amount, type, created_at, description=None):
    return Transaction(
        id=id,
        amount=Decimal(str(amount)),
        description=description or f"entry {id}",
        type=type,
        created_at=created_at,
    )


def fixed_clock():
    return datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def json_store(tmp_path):
    return JSONTransactionStore(tmp_path / "data")
