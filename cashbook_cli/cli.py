"""Console interface for the cashbook."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cashbook.config import Settings
from cashbook.exceptions import ConfigurationError, PersistenceError, ValidationError
from cashbook.formatting import format_currency
from cashbook.models import TRANSACTION_TYPES, GroupedTransactions, Transaction
from cashbook.services import TransactionService
from cashbook.storage import build_store


def _format_transaction(tx: Transaction) -> str:
    return f"  [{tx.id}] {tx.description} - {format_currency(tx.amount)} ({tx.type})"


def _format_group(group: GroupedTransactions) -> str:
    lines = [
        group.date,
        f"  Total Income: {format_currency(group.total_income)}",
        f"  Total Expense: {format_currency(group.total_expense)}",
        f"  Total: {format_currency(group.net)}",
    ]
    lines.extend(_format_transaction(tx) for tx in group.transactions)
    return "\n".join(lines)


def handle_add(args: argparse.Namespace, service: TransactionService) -> None:
    transaction = service.add(args.amount, args.description, args.type)
    print(f"Transaction added:\n{_format_transaction(transaction)}")
    # Show the fresh history, as the page does after every insert.
    try:
        handle_history(args, service)
    except PersistenceError as exc:
        # The row is already stored; only the re-fetch failed.
        print(f"Warning: could not reload history: {exc}", file=sys.stderr)


def handle_history(args: argparse.Namespace, service: TransactionService) -> None:
    grouped = service.history()
    if not grouped:
        print("No transactions found.")
        return
    print("\n\n".join(_format_group(group) for group in grouped))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cashbook expense tracker")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory for the local JSON store (default: $CASHBOOK_DATA_DIR or ./data)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Record an income or expense")
    add_parser.add_argument("amount", help="Whole amount in rupiah, digits only")
    add_parser.add_argument("description")
    add_parser.add_argument("--type", choices=TRANSACTION_TYPES, default="income")

    subparsers.add_parser("history", help="Show transactions grouped by day")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
        if args.data_dir is not None:
            settings = dataclasses.replace(settings, data_dir=args.data_dir)
        service = TransactionService(build_store(settings))

        if args.command == "add":
            handle_add(args, service)
        elif args.command == "history":
            handle_history(args, service)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
    except ValidationError as exc:
        for field, message in exc.errors.items():
            print(f"Validation error: {field}: {message}", file=sys.stderr)
        return 1
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
