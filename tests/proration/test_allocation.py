"""Tests for splitting a header discount across return lines."""

from __future__ import annotations

import pytest

from erp_ledger.proration.allocation import allocate_header_discount
from erp_ledger.proration.entities import ReturnLine


def create_return_line(net: float) -> ReturnLine:
    """Create a return line with only the net total set."""
    return ReturnLine(
        returned_quantity=1,
        unit_price=net,
        discount_for_returned_qty=0,
        tax_for_returned_qty=0,
        net_line_total=net,
        gross_line_total=net,
    )


class TestAllocateHeaderDiscount:
    def test_proportional_to_net_value(self) -> None:
        lines = [create_return_line(380), create_return_line(120)]

        shares = allocate_header_discount(lines, 10)

        assert shares == [7.6, 2.4]

    def test_shares_sum_exactly_with_remainders(self) -> None:
        lines = [create_return_line(10) for _ in range(3)]

        shares = allocate_header_discount(lines, 1)

        assert sorted(shares) == [0.33, 0.33, 0.34]
        assert round(sum(shares), 2) == 1.0

    def test_remainder_goes_to_largest_fraction(self) -> None:
        lines = [create_return_line(380), create_return_line(300)]

        shares = allocate_header_discount(lines, 20)

        assert shares == [11.18, 8.82]

    def test_zero_weights_split_evenly(self) -> None:
        lines = [create_return_line(0) for _ in range(3)]

        shares = allocate_header_discount(lines, 1)

        assert shares == [0.33, 0.33, 0.34]

    def test_negative_discount_allocates_nothing(self) -> None:
        lines = [create_return_line(50), create_return_line(50)]

        assert allocate_header_discount(lines, -5) == [0, 0]

    def test_no_lines(self) -> None:
        assert allocate_header_discount([], 10) == []

    def test_sum_matches_for_many_lines(self) -> None:
        nets = [19.99, 5.01, 123.45, 0.5, 77.77, 3.33, 41.0]
        lines = [create_return_line(n) for n in nets]

        shares = allocate_header_discount(lines, 17.29)

        assert round(sum(shares) * 100) == 1729
        assert sum(shares) == pytest.approx(17.29)
