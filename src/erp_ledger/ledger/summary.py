"""Statement totals over a built ledger."""

from __future__ import annotations

from collections.abc import Iterable

from erp_ledger.ledger.entities import LedgerEntry, LedgerSummary, RecordKind


def summarize_ledger(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """Compute per-kind and debit/credit totals.

    Per-kind totals use the unsigned display amount; debit and credit split
    the signed amounts by sign; ``net`` is their sum and matches the closing
    running balance.
    """
    count = 0
    by_kind = {kind: 0.0 for kind in RecordKind}
    debit = 0.0
    credit = 0.0
    net = 0.0

    for entry in entries:
        count += 1
        by_kind[entry.kind] += entry.display_amount
        if entry.signed_amount > 0:
            debit += entry.signed_amount
        elif entry.signed_amount < 0:
            credit += -entry.signed_amount
        net += entry.signed_amount

    return LedgerSummary(
        count=count,
        orders_total=by_kind[RecordKind.ORDER],
        returns_total=by_kind[RecordKind.RETURN],
        payments_total=by_kind[RecordKind.PAYMENT],
        debit_total=debit,
        credit_total=credit,
        net=net,
    )
