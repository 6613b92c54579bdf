"""Data models for the cashbook domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Union

from .exceptions import PersistenceError

__all__ = [
    "TRANSACTION_TYPES",
    "GroupedTransactions",
    "NewTransaction",
    "Transaction",
    "isoformat_utc",
    "json_number",
]

TRANSACTION_TYPES = ("income", "expense")


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with millisecond precision and trailing Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def json_number(amount: Decimal) -> Union[int, float]:
    """Convert a Decimal amount into the JSON number the store expects."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def _parse_amount(raw: Any) -> Decimal:
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PersistenceError(f"Stored amount {raw!r} is not numeric") from exc
    if not amount.is_finite():
        raise PersistenceError(f"Stored amount {raw!r} is not a finite number")
    return amount


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: Decimal
    description: str
    type: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the transaction to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": json_number(self.amount),
            "description": self.description,
            "type": self.type,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Hydrate a Transaction from a store row."""
        try:
            return cls(
                id=int(data["id"]),
                amount=_parse_amount(data["amount"]),
                description=str(data["description"]),
                type=str(data["type"]),
                created_at=str(data["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Malformed transaction row: {data!r}") from exc


@dataclass(frozen=True)
class NewTransaction:
    """A validated form submission that has not been stored yet."""

    amount: Decimal
    description: str
    type: str

    def to_record(self, created_at: str) -> Dict[str, Any]:
        return {
            "amount": json_number(self.amount),
            "description": self.description,
            "type": self.type,
            "created_at": created_at,
        }


@dataclass
class GroupedTransactions:
    date: str
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    transactions: List[Transaction] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expense

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "totalIncome": json_number(self.total_income),
            "totalExpense": json_number(self.total_expense),
            "total": json_number(self.net),
            "transactions": [tx.to_dict() for tx in self.transactions],
        }
