"""Tax resolution for returned quantities.

Upstream return lines store tax inconsistently: some carry a pre-computed
return tax, some only the order line's total tax, some only a rate. The
resolver walks those sources in a fixed order and reports which one it used.
"""

from __future__ import annotations

from collections.abc import Callable

from erp_ledger.proration.entities import OrderLineItem, TaxStrategy

TaxTier = Callable[[OrderLineItem, float, float, float | None], float | None]


def _explicit(
    line: OrderLineItem,
    returned_quantity: float,
    discount_for_returned: float,
    return_tax_amount: float | None,
) -> float | None:
    if return_tax_amount:
        return return_tax_amount
    return None


def _prorated_order_tax(
    line: OrderLineItem,
    returned_quantity: float,
    discount_for_returned: float,
    return_tax_amount: float | None,
) -> float | None:
    if line.total_tax > 0 and line.ordered_quantity > 0:
        return line.total_tax * (returned_quantity / line.ordered_quantity)
    return None


def _rate(
    line: OrderLineItem,
    returned_quantity: float,
    discount_for_returned: float,
    return_tax_amount: float | None,
) -> float | None:
    if line.ordered_quantity <= 0:
        return None
    if line.has_tax or line.tax_rate > 0:
        taxable = line.unit_price * returned_quantity - discount_for_returned
        return taxable * line.tax_rate / 100
    return None


TAX_TIERS: tuple[tuple[TaxStrategy, TaxTier], ...] = (
    (TaxStrategy.EXPLICIT, _explicit),
    (TaxStrategy.PRORATED_ORDER_TAX, _prorated_order_tax),
    (TaxStrategy.RATE, _rate),
)


def resolve_tax(
    line: OrderLineItem,
    returned_quantity: float,
    discount_for_returned: float,
    return_tax_amount: float | None = None,
) -> tuple[TaxStrategy, float]:
    """Resolve the tax for a returned quantity.

    Order: explicit non-zero return tax, then the order line's tax prorated
    by quantity, then the rate applied to the discounted returned value.
    The proportional and rate tiers need a known ordered quantity.

    Args:
        line: Original order line
        returned_quantity: Already-clamped returned quantity
        discount_for_returned: Line discount attributable to that quantity
        return_tax_amount: Tax stored on the return line, if any

    Returns:
        Tuple of (strategy used, tax amount)
    """
    for strategy, tier in TAX_TIERS:
        amount = tier(line, returned_quantity, discount_for_returned, return_tax_amount)
        if amount is not None:
            return strategy, amount
    return TaxStrategy.NONE, 0.0
