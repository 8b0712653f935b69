"""Ledger builder: unified, signed, balance-annotated counterparty history."""

from erp_ledger.ledger.builder import (
    DEFAULT_FULFILLED_STATUSES,
    accumulate_balance,
    build_ledger,
    classify_record,
    normalize_status,
    sort_chronologically,
)
from erp_ledger.ledger.dates import normalize_record_date, parse_filter_date
from erp_ledger.ledger.entities import (
    LedgerEntry,
    LedgerFilters,
    LedgerSourceRecord,
    LedgerSummary,
    RecordKind,
)
from erp_ledger.ledger.logger import LedgerLogger
from erp_ledger.ledger.summary import summarize_ledger

__all__ = [
    "DEFAULT_FULFILLED_STATUSES",
    "LedgerEntry",
    "LedgerFilters",
    "LedgerLogger",
    "LedgerSourceRecord",
    "LedgerSummary",
    "RecordKind",
    "accumulate_balance",
    "build_ledger",
    "classify_record",
    "normalize_record_date",
    "normalize_status",
    "parse_filter_date",
    "sort_chronologically",
    "summarize_ledger",
]
