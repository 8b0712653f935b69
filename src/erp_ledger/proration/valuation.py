"""Whole-document valuation of a return."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from erp_ledger.proration.allocation import allocate_header_discount
from erp_ledger.proration.calculator import (
    compute_return_totals,
    header_total_mismatch,
    prorate_line,
    resolve_header_discount,
)
from erp_ledger.proration.entities import OrderLineItem, ReturnLine, ReturnTotals
from erp_ledger.proration.logger import ProrationLogger

_default_logger = ProrationLogger()


@dataclass(frozen=True, slots=True)
class ReturnLineInput:
    """One line of a return document, paired with its order line."""

    line: OrderLineItem
    returned_quantity: float
    return_tax_amount: float | None = None
    already_returned: float = 0.0


@dataclass(frozen=True, slots=True)
class ReturnValuation:
    """Prorated lines, header discount and totals for one return."""

    lines: tuple[ReturnLine, ...]
    header_discount: float
    header_shares: tuple[float, ...]
    totals: ReturnTotals
    reported_total: float
    mismatch: bool


def value_return(
    inputs: Iterable[ReturnLineInput],
    header_discount: float = 0.0,
    *,
    manual_discount: float | None = None,
    reported_total: float = 0.0,
    tolerance: float = 0.01,
    proration_logger: ProrationLogger = _default_logger,
) -> ReturnValuation:
    """Value a return document end to end.

    The header discount is prorated once for the document, by the returned
    share of the ordered quantity across its lines, unless a manual override
    is given. The prorated share never exceeds ``header_discount``.

    Args:
        inputs: Return lines with their order lines
        header_discount: Order-level discount of the linked order
        manual_discount: Operator override for the header share
        reported_total: Total stored on the return header, 0 if none
        tolerance: Allowed gap between stored and computed totals
        proration_logger: Logging collaborator

    Returns:
        ReturnValuation
    """
    items = list(inputs)
    lines = tuple(
        prorate_line(
            item.line,
            item.returned_quantity,
            return_tax_amount=item.return_tax_amount,
            already_returned=item.already_returned,
            proration_logger=proration_logger,
        )
        for item in items
    )

    ordered_total = sum(max(0.0, item.line.ordered_quantity) for item in items)
    returned_total = sum(line.returned_quantity for line in lines)
    header = resolve_header_discount(
        header_discount,
        ordered_total,
        returned_total,
        manual_override=manual_discount,
    )
    if manual_discount is None:
        # Lines with an unknown ordered quantity add to the returned total only
        header = min(header, max(0.0, header_discount))

    totals = compute_return_totals(lines, header)
    return ReturnValuation(
        lines=lines,
        header_discount=header,
        header_shares=tuple(allocate_header_discount(lines, header)),
        totals=totals,
        reported_total=reported_total,
        mismatch=header_total_mismatch(
            reported_total,
            totals.total,
            tolerance,
            proration_logger=proration_logger,
        ),
    )
