"""Logging for ledger building.

Keeps logging calls out of the classification and balance arithmetic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import loguru
from loguru import logger

if TYPE_CHECKING:
    from erp_ledger.ledger.entities import LedgerEntry, RecordKind


class LedgerLogger:
    """Handles all logging for ledger building."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        """Initialize logger.

        Args:
            logger_instance: Logger instance to use (defaults to loguru.logger)
        """
        self._logger = logger_instance

    def build_start(self, orders: int, returns: int, payments: int) -> None:
        """Log the size of the incoming snapshot."""
        self._logger.bind(orders=orders, returns=returns, payments=payments).debug(
            "Building ledger from {} orders, {} returns, {} payments",
            orders,
            returns,
            payments,
        )

    def amount_coerced(self, kind: RecordKind, record_id: Any, raw: Any) -> None:
        """Log an amount that could not be read and was treated as zero."""
        self._logger.bind(kind=kind.value, record_id=record_id, raw=raw).debug(
            "Non-numeric amount {!r} on {} {} treated as 0",
            raw,
            kind.value,
            record_id,
        )

    def date_unparseable(self, kind: RecordKind, record_id: Any, raw: Any) -> None:
        """Log a date that could not be parsed; the entry sorts last."""
        self._logger.bind(kind=kind.value, record_id=record_id, raw=raw).debug(
            "Unparseable date {!r} on {} {}; sorting last",
            raw,
            kind.value,
            record_id,
        )

    def drafts_excluded(self, count: int) -> None:
        """Log how many draft records were dropped."""
        if count:
            self._logger.bind(drafts=count).debug(
                "Excluded {} draft records", count
            )

    def inverted_range(self, date_from: Any, date_to: Any) -> None:
        """Log a date range whose start is after its end."""
        self._logger.bind(date_from=str(date_from), date_to=str(date_to)).info(
            "Date range {} > {}; ledger is empty", date_from, date_to
        )

    def build_complete(self, entries: list[LedgerEntry]) -> None:
        """Log ledger size and closing balance."""
        closing = entries[-1].running_balance if entries else 0.0
        self._logger.bind(entries=len(entries), closing_balance=closing).debug(
            "Ledger built: {} entries, closing balance {:.2f}",
            len(entries),
            closing,
        )
