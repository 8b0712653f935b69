"""Counterparty ledger reconciliation and return proration engine."""

from erp_ledger.ledger import (
    LedgerEntry,
    LedgerFilters,
    LedgerSourceRecord,
    LedgerSummary,
    RecordKind,
    build_ledger,
    summarize_ledger,
)
from erp_ledger.proration import (
    OrderLineItem,
    ReturnLine,
    ReturnTotals,
    compute_return_totals,
    prorate_header_discount,
    prorate_line,
)

__all__ = [
    "LedgerEntry",
    "LedgerFilters",
    "LedgerSourceRecord",
    "LedgerSummary",
    "OrderLineItem",
    "RecordKind",
    "ReturnLine",
    "ReturnTotals",
    "build_ledger",
    "compute_return_totals",
    "prorate_header_discount",
    "prorate_line",
    "summarize_ledger",
]
