"""Persistence clients for transaction rows."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .config import Settings
from .exceptions import PersistenceError
from .models import Transaction

logger = logging.getLogger(__name__)


class TransactionStore(ABC):
    """The two operations the tracker needs from a backing store."""

    @abstractmethod
    def list_all(self) -> List[Transaction]:
        """Return every stored transaction, newest ``created_at`` first."""

    @abstractmethod
    def insert(self, record: Dict[str, Any]) -> Transaction:
        """Store exactly one row and return it as the store saw it."""


class RestTransactionStore(TransactionStore):
    """Client for a hosted table exposed through a PostgREST-style API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "transactions",
        *,
        timeout: Optional[float] = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def list_all(self) -> List[Transaction]:
        payload = self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        return [Transaction.from_dict(row) for row in payload]

    def insert(self, record: Dict[str, Any]) -> Transaction:
        payload = self._request(
            "POST",
            params={"select": "*"},
            json=[record],
            headers={"Prefer": "return=representation"},
        )
        if not payload:
            raise PersistenceError(f"Insert into {self._endpoint} returned no rows")
        return Transaction.from_dict(payload[0])

    def _request(self, method: str, **kwargs: Any) -> List[Dict[str, Any]]:
        try:
            response = self._session.request(
                method, self._endpoint, timeout=self._timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise PersistenceError(f"{method} {self._endpoint} failed: {exc}") from exc

        if response.status_code >= 400:
            raise PersistenceError(
                f"{method} {self._endpoint} returned {response.status_code}: {_error_detail(response)}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise PersistenceError(f"Malformed JSON from {self._endpoint}") from exc

        if not isinstance(payload, list):
            raise PersistenceError(f"Expected list payload from {self._endpoint}")
        logger.debug("%s %s -> %d rows", method, self._endpoint, len(payload))
        return payload


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "no detail"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class JSONTransactionStore(TransactionStore):
    """Simple file-based JSON store with crash-safe writes."""

    def __init__(self, base_path: Path, resource: str = "transactions.json") -> None:
        self._base_path = base_path
        self._base_path.mkdir(parents=True, exist_ok=True)
        self._path = self._base_path / resource

    def list_all(self) -> List[Transaction]:
        rows = [Transaction.from_dict(row) for row in self._load()]
        return sorted(rows, key=lambda tx: tx.created_at, reverse=True)

    def insert(self, record: Dict[str, Any]) -> Transaction:
        rows = self._load()
        next_id = max((Transaction.from_dict(row).id for row in rows), default=0) + 1
        row = {"id": next_id, **record}
        transaction = Transaction.from_dict(row)
        rows.append(transaction.to_dict())
        self._save(rows)
        return transaction

    def _load(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {self._path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {self._path}") from exc

        if not isinstance(payload, list):
            raise PersistenceError(f"Expected list payload in {self._path}")
        return payload

    def _save(self, rows: List[Dict[str, Any]]) -> None:
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(rows, handle, indent=2)
                handle.flush()
            # replace() is an atomic rename on POSIX.
            temp_path.replace(self._path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {self._path}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path


def build_store(settings: Settings) -> TransactionStore:
    """Create the process-wide store described by ``settings``."""
    if settings.uses_remote:
        logger.info("Using remote transaction table at %s", settings.supabase_url)
        return RestTransactionStore(
            settings.supabase_url,  # type: ignore[arg-type]
            settings.supabase_key,  # type: ignore[arg-type]
            settings.table,
            timeout=settings.request_timeout,
        )
    logger.info("Using local JSON transaction store in %s", settings.data_dir)
    return JSONTransactionStore(settings.data_dir)
