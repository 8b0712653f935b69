"""Ledger domain entities used by the builder and summary logic."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import enum
from typing import Any


class RecordKind(enum.Enum):
    """Kind of source record feeding a counterparty ledger."""

    ORDER = "order"
    RETURN = "return"
    PAYMENT = "payment"


@dataclass(frozen=True, slots=True)
class LedgerSourceRecord:
    """One order, return or payment as handed over by the data layer.

    ``date`` and ``amount`` are kept raw; the builder normalizes them so
    dirty upstream values never raise.
    """

    kind: RecordKind
    id: str | int | None
    date: datetime | date | str | None
    status: str | None
    amount: Any


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """A classified, signed ledger row."""

    id: str | int | None
    kind: RecordKind
    date: datetime | None
    status: str
    display_amount: float
    signed_amount: float
    running_balance: float = 0.0


@dataclass(frozen=True, slots=True)
class LedgerFilters:
    """Caller-side narrowing of a ledger.

    String bounds in ``yyyy-mm-dd`` form cover the whole day: ``date_from``
    starts at midnight and ``date_to`` runs to the last microsecond.
    ``kind`` also accepts the plain values ``"order"``, ``"return"`` and
    ``"payment"``.
    """

    date_from: datetime | date | str | None = None
    date_to: datetime | date | str | None = None
    kind: RecordKind | str | None = None
    search_text: str | None = None


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Totals over a built ledger."""

    count: int
    orders_total: float
    returns_total: float
    payments_total: float
    debit_total: float
    credit_total: float
    net: float
