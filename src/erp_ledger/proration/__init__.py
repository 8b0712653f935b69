"""Line proration: valuing partially returned order lines."""

from erp_ledger.proration.allocation import allocate_header_discount
from erp_ledger.proration.calculator import (
    compute_return_totals,
    header_total_mismatch,
    prorate_header_discount,
    prorate_header_discount_by_value,
    prorate_line,
    resolve_header_discount,
    returnable_quantity,
)
from erp_ledger.proration.entities import (
    OrderLineItem,
    ReturnLine,
    ReturnTotals,
    TaxStrategy,
)
from erp_ledger.proration.logger import ProrationLogger
from erp_ledger.proration.tax import resolve_tax
from erp_ledger.proration.valuation import (
    ReturnLineInput,
    ReturnValuation,
    value_return,
)

__all__ = [
    "OrderLineItem",
    "ProrationLogger",
    "ReturnLine",
    "ReturnLineInput",
    "ReturnTotals",
    "ReturnValuation",
    "TaxStrategy",
    "allocate_header_discount",
    "compute_return_totals",
    "header_total_mismatch",
    "prorate_header_discount",
    "prorate_header_discount_by_value",
    "prorate_line",
    "resolve_header_discount",
    "resolve_tax",
    "returnable_quantity",
    "value_return",
]
