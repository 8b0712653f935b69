"""Upstream adapters: backend field-name variants to engine records."""

from erp_ledger.adapters.upstream.payloads import (
    ClientPaymentPayload,
    LedgerRecordPayload,
    PurchaseOrderPayload,
    PurchaseReturnPayload,
    ReturnDocumentPayload,
    ReturnItemPayload,
    SalesOrderPayload,
    SalesReturnPayload,
    SupplierPaymentPayload,
)
from erp_ledger.adapters.upstream.snapshot import (
    StatementSnapshot,
    load_return_document,
    load_statement_snapshot,
    statement_from_mapping,
)

__all__ = [
    "ClientPaymentPayload",
    "LedgerRecordPayload",
    "PurchaseOrderPayload",
    "PurchaseReturnPayload",
    "ReturnDocumentPayload",
    "ReturnItemPayload",
    "SalesOrderPayload",
    "SalesReturnPayload",
    "StatementSnapshot",
    "SupplierPaymentPayload",
    "load_return_document",
    "load_statement_snapshot",
    "statement_from_mapping",
]
