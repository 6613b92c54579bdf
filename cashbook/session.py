"""Form and history state behind the single tracker page."""

from __future__ import annotations

import logging
from typing import Dict, List

from .exceptions import PersistenceError, ValidationError
from .models import GroupedTransactions
from .services import TransactionService

logger = logging.getLogger(__name__)


class TrackerSession:
    """Pending form fields plus the last grouped history that was fetched.

    Store failures are logged and otherwise ignored: the previous history and
    whatever the user typed stay in place.
    """

    def __init__(
        self,
        service: TransactionService,
        *,
        amount: str = "",
        description: str = "",
        type: str = "income",
    ) -> None:
        self.service = service
        self.amount = amount
        self.description = description
        self.type = type
        self.errors: Dict[str, str] = {}
        self.is_loading = False
        self.grouped: List[GroupedTransactions] = []

    def refresh(self) -> None:
        try:
            self.grouped = self.service.history()
        except PersistenceError as exc:
            logger.error("Fetching transactions failed: %s", exc)

    def submit(self) -> bool:
        """Validate and store the pending entry, then reload the history.

        Returns True when a row was stored.
        """
        self.errors = {}
        self.is_loading = True
        try:
            self.service.add(self.amount, self.description, self.type)
            self.refresh()
        except ValidationError as exc:
            self.errors = exc.errors
        except PersistenceError as exc:
            logger.error("Saving transaction failed: %s", exc)
        else:
            self.amount = ""
            self.description = ""
            return True
        finally:
            self.is_loading = False
        return False
