"""Tests for whole-document return valuation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from erp_ledger.proration.entities import OrderLineItem, TaxStrategy
from erp_ledger.proration.logger import ProrationLogger
from erp_ledger.proration.valuation import ReturnLineInput, value_return


@pytest.fixture()
def two_line_return() -> list[ReturnLineInput]:
    return [
        ReturnLineInput(
            OrderLineItem(10, 100, total_discount=50, total_tax=95), returned_quantity=4
        ),
        ReturnLineInput(OrderLineItem(10, 50, tax_rate=10), returned_quantity=6),
    ]


class TestValueReturn:
    def test_lines_header_and_totals(self, two_line_return) -> None:
        # Act
        valuation = value_return(two_line_return, header_discount=40)

        # Assert
        first, second = valuation.lines
        assert first.gross_line_total == pytest.approx(418)
        assert second.tax_strategy is TaxStrategy.RATE
        assert second.gross_line_total == pytest.approx(330)
        assert valuation.header_discount == pytest.approx(20)
        assert valuation.totals.subtotal == pytest.approx(680)
        assert valuation.totals.discount == pytest.approx(40)
        assert valuation.totals.tax == pytest.approx(68)
        assert valuation.totals.total == pytest.approx(728)
        assert valuation.header_shares == (11.18, 8.82)
        assert valuation.mismatch is False

    def test_manual_discount_overrides_proration(self, two_line_return) -> None:
        valuation = value_return(two_line_return, header_discount=40, manual_discount=5)

        assert valuation.header_discount == 5
        assert valuation.totals.total == pytest.approx(743)
        assert sum(valuation.header_shares) == pytest.approx(5)

    def test_matching_reported_total(self, two_line_return) -> None:
        valuation = value_return(
            two_line_return, header_discount=40, reported_total=728
        )

        assert valuation.reported_total == 728
        assert valuation.mismatch is False

    def test_stale_reported_total_is_flagged(self, two_line_return) -> None:
        mock_logger = MagicMock(spec=ProrationLogger)

        valuation = value_return(
            two_line_return,
            header_discount=40,
            reported_total=800,
            proration_logger=mock_logger,
        )

        assert valuation.mismatch is True
        mock_logger.header_mismatch.assert_called_once()

    def test_over_return_is_clamped_before_header_proration(self) -> None:
        inputs = [ReturnLineInput(OrderLineItem(4, 10), returned_quantity=9)]

        valuation = value_return(inputs, header_discount=8)

        assert valuation.lines[0].returned_quantity == 4
        assert valuation.header_discount == pytest.approx(8)
        assert valuation.totals.total == pytest.approx(32)

    def test_empty_document(self) -> None:
        valuation = value_return([], header_discount=40)

        assert valuation.lines == ()
        assert valuation.header_discount == 0
        assert valuation.header_shares == ()
        assert valuation.totals.total == 0

    def test_header_share_never_exceeds_header_discount(self) -> None:
        inputs = [
            ReturnLineInput(OrderLineItem(10, 10), returned_quantity=5),
            ReturnLineInput(OrderLineItem(0, 10), returned_quantity=10),
        ]

        valuation = value_return(inputs, header_discount=100)

        assert valuation.header_discount == pytest.approx(100)
        assert sum(valuation.header_shares) == pytest.approx(100)
        assert valuation.totals.total == pytest.approx(50)
