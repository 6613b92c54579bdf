"""Framework-agnostic business services for the cashbook."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .models import GroupedTransactions, Transaction, isoformat_utc
from .storage import TransactionStore
from .validators import validate_transaction_form

logger = logging.getLogger(__name__)


def date_key(created_at: str) -> str:
    """Return the calendar date part of an ISO timestamp.

    No timezone conversion happens; a value without a ``T`` is its own key.
    """
    return created_at.split("T", 1)[0]


def group_transactions(transactions: Iterable[Transaction]) -> List[GroupedTransactions]:
    """Group transactions by date and total income and expense per day.

    Groups come out in the order their date was first seen and each keeps
    its transactions in input order.
    """
    grouped: Dict[str, GroupedTransactions] = {}
    for tx in transactions:
        key = date_key(tx.created_at)
        group = grouped.get(key)
        if group is None:
            group = grouped[key] = GroupedTransactions(date=key)

        group.transactions.append(tx)
        if tx.type == "income":
            group.total_income += tx.amount
        else:
            group.total_expense += tx.amount
    return list(grouped.values())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionService:
    """Validates submissions and mediates reads and writes to the store."""

    def __init__(
        self,
        store: TransactionStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utc_now

    def history(self) -> List[GroupedTransactions]:
        """Fetch every transaction and group it by day."""
        transactions = self._store.list_all()
        logger.debug("Fetched %d transactions", len(transactions))
        return group_transactions(transactions)

    def add(self, amount: object, description: object, type: object) -> Transaction:
        """Validate raw form values and insert a single new row.

        ValidationError is raised before the store is touched.
        """
        entry = validate_transaction_form(amount, description, type)
        record = entry.to_record(isoformat_utc(self._clock()))
        transaction = self._store.insert(record)
        logger.info(
            "Recorded %s %s (%s) as #%d",
            transaction.type,
            transaction.amount,
            transaction.description,
            transaction.id,
        )
        return transaction
