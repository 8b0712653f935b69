"""Valuation of partially returned order lines."""

from __future__ import annotations

from collections.abc import Iterable

from erp_ledger.core.errors import ProrationInputError
from erp_ledger.proration.entities import OrderLineItem, ReturnLine, ReturnTotals
from erp_ledger.proration.logger import ProrationLogger
from erp_ledger.proration.tax import resolve_tax

_default_logger = ProrationLogger()


def returnable_quantity(ordered_quantity: float, already_returned: float = 0.0) -> float:
    """Quantity still available for return, never below zero."""
    return max(0.0, ordered_quantity - max(0.0, already_returned))


def prorate_line(
    line: OrderLineItem,
    returned_quantity: float,
    *,
    return_tax_amount: float | None = None,
    already_returned: float = 0.0,
    proration_logger: ProrationLogger = _default_logger,
) -> ReturnLine:
    """Compute discount, tax and totals for the returned part of a line.

    Args:
        line: Original order line
        returned_quantity: Quantity being returned now
        return_tax_amount: Tax already stored on the return line, if any
        already_returned: Quantity returned by earlier documents
        proration_logger: Logging collaborator

    Returns:
        ReturnLine with prorated values

    Raises:
        ProrationInputError: If ``line`` is None
    """
    if line is None:
        raise ProrationInputError("prorate_line requires an order line")

    ordered = line.ordered_quantity
    quantity = max(0.0, returned_quantity)
    if ordered > 0:
        limit = returnable_quantity(ordered, already_returned)
        if quantity > limit:
            quantity = limit
        if quantity != returned_quantity:
            proration_logger.quantity_clamped(returned_quantity, quantity, limit)
        discount_per_unit = line.total_discount / ordered
    else:
        proration_logger.unknown_ordered_quantity(ordered)
        discount_per_unit = 0.0

    discount = discount_per_unit * quantity
    strategy, tax = resolve_tax(line, quantity, discount, return_tax_amount)
    proration_logger.tax_resolved(strategy, tax)

    net = line.unit_price * quantity - discount
    return ReturnLine(
        returned_quantity=quantity,
        unit_price=line.unit_price,
        discount_for_returned_qty=discount,
        tax_for_returned_qty=tax,
        net_line_total=net,
        gross_line_total=net + tax,
        tax_strategy=strategy,
    )


def prorate_header_discount(
    header_discount: float,
    ordered_qty_total: float,
    returned_qty_total: float,
) -> float:
    """Share of an order-level discount for the returned quantity."""
    if ordered_qty_total > 0:
        return header_discount * (returned_qty_total / ordered_qty_total)
    return 0.0


def prorate_header_discount_by_value(
    header_discount: float,
    order_subtotal: float,
    returned_gross: float,
) -> float:
    """Share of an order-level discount for the returned gross value."""
    if order_subtotal > 0:
        return header_discount * (returned_gross / order_subtotal)
    return 0.0


def resolve_header_discount(
    header_discount: float,
    ordered_qty_total: float,
    returned_qty_total: float,
    *,
    manual_override: float | None = None,
) -> float:
    """Quantity-prorated header discount unless an operator override is set."""
    if manual_override is not None:
        return max(0.0, manual_override)
    return prorate_header_discount(header_discount, ordered_qty_total, returned_qty_total)


def compute_return_totals(
    lines: Iterable[ReturnLine],
    header_discount_prorated: float,
) -> ReturnTotals:
    """Roll return lines up into document totals.

    Line discounts are already netted into ``net_line_total``; only the
    header share is subtracted from the total.
    """
    subtotal = 0.0
    line_discount = 0.0
    tax = 0.0
    for line in lines:
        subtotal += line.net_line_total
        line_discount += line.discount_for_returned_qty
        tax += line.tax_for_returned_qty

    return ReturnTotals(
        subtotal=subtotal,
        discount=line_discount + header_discount_prorated,
        tax=tax,
        total=subtotal + tax - header_discount_prorated,
    )


def header_total_mismatch(
    reported_total: float,
    computed_total: float,
    tolerance: float = 0.01,
    *,
    proration_logger: ProrationLogger = _default_logger,
) -> bool:
    """Flag a stored, non-zero return total that differs from the computed one."""
    if reported_total <= 0:
        return False
    mismatch = abs(reported_total - computed_total) > tolerance
    if mismatch:
        proration_logger.header_mismatch(reported_total, computed_total)
    return mismatch
