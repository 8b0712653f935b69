"""Unified counterparty ledger: classify, filter, sort and accumulate."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import replace
from datetime import datetime

from erp_ledger.core.clock import Clock
from erp_ledger.core.config import (
    DEFAULT_PURCHASE_FULFILLED_STATUSES,
    DEFAULT_SALES_FULFILLED_STATUSES,
)
from erp_ledger.core.numbers import is_number_like, to_number
from erp_ledger.ledger.dates import is_absent, normalize_record_date, parse_filter_date
from erp_ledger.ledger.entities import (
    LedgerEntry,
    LedgerFilters,
    LedgerSourceRecord,
    RecordKind,
)
from erp_ledger.ledger.logger import LedgerLogger

DEFAULT_FULFILLED_STATUSES = frozenset(
    DEFAULT_PURCHASE_FULFILLED_STATUSES + DEFAULT_SALES_FULFILLED_STATUSES
)

_default_logger = LedgerLogger()


def normalize_status(status: str | None) -> str:
    """Lowercase and strip a status; None becomes an empty string."""
    return (status or "").strip().lower()


def classify_record(
    record: LedgerSourceRecord,
    fulfilled_statuses: Collection[str] = DEFAULT_FULFILLED_STATUSES,
    *,
    clock: Clock | None = None,
    ledger_logger: LedgerLogger = _default_logger,
) -> LedgerEntry:
    """Sign a single source record.

    Orders count at full value only in a fulfilled status and at zero
    otherwise. Returns and payments always reduce the balance.

    Args:
        record: Raw order, return or payment
        fulfilled_statuses: Order statuses that affect the balance, compared
            after strip and lowercase
        clock: Fills in records that carry no date at all
        ledger_logger: Receives coercion notices

    Returns:
        LedgerEntry with ``running_balance`` still at 0.0
    """
    amount = to_number(record.amount)
    if record.amount is not None and not is_number_like(record.amount):
        ledger_logger.amount_coerced(record.kind, record.id, record.amount)
    magnitude = abs(amount)

    if record.kind is RecordKind.ORDER:
        statuses = {normalize_status(s) for s in fulfilled_statuses}
        fulfilled = normalize_status(record.status) in statuses
        signed = magnitude if fulfilled else 0.0
    else:
        signed = -magnitude

    if clock is not None and is_absent(record.date):
        entry_date: datetime | None = clock.now()
    else:
        entry_date = normalize_record_date(record.date)
        if entry_date is None and not is_absent(record.date):
            ledger_logger.date_unparseable(record.kind, record.id, record.date)

    return LedgerEntry(
        id=record.id,
        kind=record.kind,
        date=entry_date,
        status=(record.status or "").strip(),
        display_amount=magnitude,
        signed_amount=signed,
    )


def _format_amount(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def _search_text(entry: LedgerEntry, raw_date: object) -> str:
    if isinstance(raw_date, str):
        date_text = raw_date
    elif entry.date is not None:
        date_text = entry.date.isoformat()
    else:
        date_text = ""
    parts = [
        "" if entry.id is None else str(entry.id),
        entry.status,
        entry.kind.value,
        _format_amount(entry.display_amount),
        _format_amount(entry.signed_amount),
        date_text,
    ]
    return " ".join(parts).lower()


def _matches(
    entry: LedgerEntry,
    raw_date: object,
    date_from: datetime | None,
    date_to: datetime | None,
    kind: RecordKind | None,
    filters: LedgerFilters,
) -> bool:
    # Undated entries cannot be placed outside the range, so they stay.
    if entry.date is not None:
        if date_from is not None and entry.date < date_from:
            return False
        if date_to is not None and entry.date > date_to:
            return False
    if kind is not None and entry.kind is not kind:
        return False
    needle = (filters.search_text or "").strip().lower()
    return not needle or needle in _search_text(entry, raw_date)


def _filter_kind(value: RecordKind | str | None) -> RecordKind | None:
    if value is None or isinstance(value, RecordKind):
        return value
    return RecordKind(value.strip().lower())


def sort_chronologically(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Stable ascending date sort; undated entries go last in input order."""
    return sorted(
        entries,
        key=lambda entry: (entry.date is None, entry.date or datetime.min),
    )


def accumulate_balance(entries: Sequence[LedgerEntry]) -> list[LedgerEntry]:
    """Attach a left-to-right running balance to already ordered entries."""
    balance = 0.0
    out: list[LedgerEntry] = []
    for entry in entries:
        balance += entry.signed_amount
        out.append(replace(entry, running_balance=balance))
    return out


def build_ledger(
    orders: Iterable[LedgerSourceRecord],
    returns: Iterable[LedgerSourceRecord],
    payments: Iterable[LedgerSourceRecord],
    filters: LedgerFilters | None = None,
    *,
    fulfilled_statuses: Collection[str] | None = None,
    draft_status: str = "draft",
    clock: Clock | None = None,
    ledger_logger: LedgerLogger = _default_logger,
) -> list[LedgerEntry]:
    """Merge one counterparty's records into a balance-annotated ledger.

    Draft records are dropped before anything else. The remaining entries
    are filtered, sorted by date and folded into a running balance, so the
    last entry's balance equals the sum of the included signed amounts.

    Args:
        orders: Order records (``kind`` is forced to ORDER)
        returns: Return records (``kind`` is forced to RETURN)
        payments: Payment records (``kind`` is forced to PAYMENT)
        filters: Optional date range, kind and free-text filters
        fulfilled_statuses: Order statuses that count; defaults to the
            purchase and sales fulfilled statuses combined
        draft_status: Normalized status that excludes a record entirely
        clock: Supplies a date for records that have none
        ledger_logger: Logging collaborator

    Returns:
        New list of LedgerEntry in chronological order

    Raises:
        ValueError: If ``filters.kind`` is a string that names no record kind
    """
    filters = filters or LedgerFilters()
    statuses = (
        DEFAULT_FULFILLED_STATUSES
        if fulfilled_statuses is None
        else frozenset(normalize_status(s) for s in fulfilled_statuses)
    )
    draft = normalize_status(draft_status)

    tagged: list[LedgerSourceRecord] = []
    groups = (
        (RecordKind.ORDER, orders),
        (RecordKind.RETURN, returns),
        (RecordKind.PAYMENT, payments),
    )
    counts: dict[RecordKind, int] = {}
    for kind, records in groups:
        group = [r if r.kind is kind else replace(r, kind=kind) for r in records]
        counts[kind] = len(group)
        tagged.extend(group)
    ledger_logger.build_start(
        counts[RecordKind.ORDER], counts[RecordKind.RETURN], counts[RecordKind.PAYMENT]
    )

    live = [r for r in tagged if normalize_status(r.status) != draft]
    ledger_logger.drafts_excluded(len(tagged) - len(live))

    date_from = parse_filter_date(filters.date_from)
    date_to = parse_filter_date(filters.date_to, end_of_day=True)
    kind_filter = _filter_kind(filters.kind)
    if date_from is not None and date_to is not None and date_from > date_to:
        ledger_logger.inverted_range(date_from, date_to)
        return []

    selected: list[LedgerEntry] = []
    for record in live:
        entry = classify_record(
            record, statuses, clock=clock, ledger_logger=ledger_logger
        )
        if _matches(entry, record.date, date_from, date_to, kind_filter, filters):
            selected.append(entry)

    entries = accumulate_balance(sort_chronologically(selected))
    ledger_logger.build_complete(entries)
    return entries
