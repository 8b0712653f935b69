"""Proration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
import enum


class TaxStrategy(enum.Enum):
    """Which source produced the tax on a returned line."""

    EXPLICIT = "explicit"
    PRORATED_ORDER_TAX = "prorated_order_tax"
    RATE = "rate"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class OrderLineItem:
    """An order line as originally sold or purchased."""

    ordered_quantity: float
    unit_price: float
    total_discount: float = 0.0
    total_tax: float = 0.0
    has_tax: bool = False
    tax_rate: float = 0.0  # Percent, e.g. 14 for 14%


@dataclass(frozen=True, slots=True)
class ReturnLine:
    """Monetary values attributable to the returned part of a line."""

    returned_quantity: float
    unit_price: float
    discount_for_returned_qty: float
    tax_for_returned_qty: float
    net_line_total: float  # unit_price * qty - line discount
    gross_line_total: float  # net + tax
    tax_strategy: TaxStrategy = TaxStrategy.NONE


@dataclass(frozen=True, slots=True)
class ReturnTotals:
    """Return document totals."""

    subtotal: float
    discount: float
    tax: float
    total: float
