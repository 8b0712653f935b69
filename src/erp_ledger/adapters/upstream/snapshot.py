"""Load statement and return snapshots exported from the ERP backend."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Literal

from erp_ledger.adapters.upstream.payloads import (
    ClientPaymentPayload,
    LedgerRecordPayload,
    PurchaseOrderPayload,
    PurchaseReturnPayload,
    ReturnDocumentPayload,
    SalesOrderPayload,
    SalesReturnPayload,
    SupplierPaymentPayload,
)
from erp_ledger.core.errors import SnapshotLoadError
from erp_ledger.ledger.entities import LedgerSourceRecord

Party = Literal["supplier", "client"]

_PAYLOAD_TYPES: dict[Party, tuple[type[LedgerRecordPayload], ...]] = {
    "supplier": (PurchaseOrderPayload, PurchaseReturnPayload, SupplierPaymentPayload),
    "client": (SalesOrderPayload, SalesReturnPayload, ClientPaymentPayload),
}

_WRAPPED_PAYMENT_KEYS: dict[Party, str] = {
    "supplier": "supplier_payments",
    "client": "client_payments",
}


@dataclass(frozen=True, slots=True)
class StatementSnapshot:
    """Normalized records for one counterparty statement."""

    orders: tuple[LedgerSourceRecord, ...]
    returns: tuple[LedgerSourceRecord, ...]
    payments: tuple[LedgerSourceRecord, ...]


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise SnapshotLoadError(f"Snapshot not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotLoadError(f"Could not read snapshot {path}: {e}") from e


def _unwrap_payments(raw: Any, party: Party) -> Any:
    # Payment endpoints sometimes wrap the list in an object.
    if isinstance(raw, dict):
        return raw.get(_WRAPPED_PAYMENT_KEYS[party], [])
    return raw


def statement_from_mapping(
    data: Any,
    party: Party = "supplier",
    counterparty_id: str | int | None = None,
) -> StatementSnapshot:
    """Normalize a ``{"orders", "returns", "payments"}`` document.

    Args:
        data: Parsed JSON document
        party: ``supplier`` for purchase records, ``client`` for sales
        counterparty_id: Keep only records for this supplier/client

    Returns:
        StatementSnapshot with engine records
    """
    if not isinstance(data, dict):
        raise SnapshotLoadError("Statement snapshot must be a JSON object")
    if party not in _PAYLOAD_TYPES:
        raise SnapshotLoadError(f"Unknown party: {party}")

    order_type, return_type, payment_type = _PAYLOAD_TYPES[party]
    groups = (
        (order_type, data.get("orders")),
        (return_type, data.get("returns")),
        (payment_type, _unwrap_payments(data.get("payments"), party)),
    )

    records: list[tuple[LedgerSourceRecord, ...]] = []
    for payload_type, raw_items in groups:
        payloads = payload_type.parse_many(raw_items)
        records.append(
            tuple(p.to_record() for p in payloads if p.belongs_to(counterparty_id))
        )

    orders, returns, payments = records
    return StatementSnapshot(orders=orders, returns=returns, payments=payments)


def load_statement_snapshot(
    path: Path,
    party: Party = "supplier",
    counterparty_id: str | int | None = None,
) -> StatementSnapshot:
    """Read a statement snapshot file; see ``statement_from_mapping``."""
    return statement_from_mapping(_read_json(path), party, counterparty_id)


def load_return_document(path: Path) -> ReturnDocumentPayload:
    """Read one return document (header plus ``items``) from a JSON file."""
    return ReturnDocumentPayload.parse(_read_json(path))
