"""Core business logic package for the cashbook expense tracker."""

from .config import Settings
from .exceptions import ConfigurationError, PersistenceError, ValidationError
from .formatting import format_currency
from .models import GroupedTransactions, NewTransaction, Transaction
from .services import TransactionService, group_transactions
from .session import TrackerSession
from .storage import JSONTransactionStore, RestTransactionStore, TransactionStore, build_store

__all__ = [
    "Settings",
    "ConfigurationError",
    "PersistenceError",
    "ValidationError",
    "format_currency",
    "GroupedTransactions",
    "NewTransaction",
    "Transaction",
    "TransactionService",
    "group_transactions",
    "TrackerSession",
    "JSONTransactionStore",
    "RestTransactionStore",
    "TransactionStore",
    "build_store",
]
