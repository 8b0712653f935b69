"""Tests for the unified ledger builder."""

from __future__ import annotations

from datetime import datetime
import itertools
from unittest.mock import MagicMock

import pytest

from erp_ledger.core.clock import FixedClock
from erp_ledger.ledger.builder import build_ledger, classify_record, sort_chronologically
from erp_ledger.ledger.entities import (
    LedgerEntry,
    LedgerFilters,
    LedgerSourceRecord,
    RecordKind,
)
from erp_ledger.ledger.logger import LedgerLogger


def create_order(
    record_id: str,
    amount: object,
    date: object,
    status: str | None = "Received",
) -> LedgerSourceRecord:
    """Create an order record for testing."""
    return LedgerSourceRecord(
        kind=RecordKind.ORDER, id=record_id, date=date, status=status, amount=amount
    )


def create_return(
    record_id: str,
    amount: object,
    date: object,
    status: str | None = "Approved",
) -> LedgerSourceRecord:
    """Create a return record for testing."""
    return LedgerSourceRecord(
        kind=RecordKind.RETURN, id=record_id, date=date, status=status, amount=amount
    )


def create_payment(
    record_id: str,
    amount: object,
    date: object,
    status: str | None = "Paid",
) -> LedgerSourceRecord:
    """Create a payment record for testing."""
    return LedgerSourceRecord(
        kind=RecordKind.PAYMENT, id=record_id, date=date, status=status, amount=amount
    )


@pytest.fixture()
def mixed_records() -> tuple[
    list[LedgerSourceRecord], list[LedgerSourceRecord], list[LedgerSourceRecord]
]:
    return (
        [create_order("PO-1", 1000, "2024-01-10")],
        [create_return("PR-1", 200, "2024-01-15")],
        [create_payment("SP-1", 300, "2024-01-20")],
    )


class TestBuildLedgerScenarios:
    """End-to-end statement scenarios."""

    def test_mixed_records_produce_signed_sequence_and_balance(
        self, mixed_records
    ) -> None:
        orders, returns, payments = mixed_records

        entries = build_ledger(orders, returns, payments)

        assert [e.signed_amount for e in entries] == [1000, -200, -300]
        assert [e.running_balance for e in entries] == [1000, 800, 500]
        assert [e.kind for e in entries] == [
            RecordKind.ORDER,
            RecordKind.RETURN,
            RecordKind.PAYMENT,
        ]

    def test_draft_order_is_excluded(self, mixed_records) -> None:
        orders, returns, payments = mixed_records
        orders = [*orders, create_order("PO-2", 5000, "2024-01-12", status=" Draft ")]

        entries = build_ledger(orders, returns, payments)

        assert entries[-1].running_balance == 500
        assert "PO-2" not in [e.id for e in entries]

    def test_input_order_does_not_matter(self, mixed_records) -> None:
        orders, returns, payments = mixed_records

        # A later order listed first still sorts by date
        entries = build_ledger(
            [create_order("PO-9", 50, "2024-01-25"), *orders], returns, payments
        )

        assert [e.id for e in entries] == ["PO-1", "PR-1", "SP-1", "PO-9"]
        assert entries[-1].running_balance == 550

    def test_unfulfilled_order_is_visible_with_zero_effect(self) -> None:
        orders = [
            create_order("PO-1", 1000, "2024-01-10"),
            create_order("PO-2", 700, "2024-01-11", status="Pending"),
        ]

        entries = build_ledger(orders, [], [])

        pending = entries[1]
        assert pending.id == "PO-2"
        assert pending.signed_amount == 0
        assert pending.display_amount == 700
        assert pending.running_balance == 1000

    def test_sales_invoiced_status_counts_by_default(self) -> None:
        entries = build_ledger([create_order("SO-1", 400, "2024-03-01", "Invoiced")], [], [])

        assert entries[0].signed_amount == 400

    def test_custom_fulfilled_statuses_are_normalized(self) -> None:
        orders = [
            create_order("PO-1", 100, "2024-01-10", status="Received"),
            create_order("PO-2", 200, "2024-01-11", status="closed"),
        ]

        entries = build_ledger(orders, [], [], fulfilled_statuses=["  CLOSED "])

        assert [e.signed_amount for e in entries] == [0, 200]


class TestLedgerInvariants:
    """Properties that hold for every input arrangement."""

    RECORDS = (
        create_order("PO-1", 1000, "2024-01-10"),
        create_order("PO-2", 5000, "2024-01-11", status="draft"),
        create_order("PO-3", 250, "2024-01-12", status="Pending"),
        create_return("PR-1", 200, "2024-01-15"),
        create_return("PR-2", 75.5, "2024-01-15", status="DRAFT"),
        create_payment("SP-1", 300, "2024-01-20"),
        create_payment("SP-2", 20, None),
    )

    def _split(self, records):
        orders = [r for r in records if r.kind is RecordKind.ORDER]
        returns = [r for r in records if r.kind is RecordKind.RETURN]
        payments = [r for r in records if r.kind is RecordKind.PAYMENT]
        return orders, returns, payments

    def test_balance_signs_and_drafts_over_permutations(self) -> None:
        for perm in itertools.permutations(self.RECORDS, 4):
            entries = build_ledger(*self._split(perm))

            included = [r for r in perm if (r.status or "").lower() != "draft"]
            assert len(entries) == len(included)
            assert all(e.status.lower() != "draft" for e in entries)

            expected = sum(e.signed_amount for e in entries)
            closing = entries[-1].running_balance if entries else 0.0
            assert closing == pytest.approx(expected)

            for entry in entries:
                if entry.kind is RecordKind.ORDER:
                    assert entry.signed_amount >= 0
                else:
                    assert entry.signed_amount <= 0

    def test_negative_upstream_amounts_keep_signs(self) -> None:
        entries = build_ledger(
            [create_order("PO-1", -100, "2024-01-01")],
            [create_return("PR-1", -40, "2024-01-02")],
            [create_payment("SP-1", -10, "2024-01-03")],
        )

        assert [e.signed_amount for e in entries] == [100, -40, -10]

    def test_building_twice_is_identical(self, mixed_records) -> None:
        first = build_ledger(*mixed_records)
        second = build_ledger(*mixed_records)

        assert first == second

    def test_inputs_are_not_mutated(self, mixed_records) -> None:
        orders, returns, payments = mixed_records
        before = (list(orders), list(returns), list(payments))

        build_ledger(orders, returns, payments, LedgerFilters(search_text="PO"))

        assert (orders, returns, payments) == before

    def test_kind_is_taken_from_the_argument_position(self) -> None:
        mislabeled = LedgerSourceRecord(
            kind=RecordKind.ORDER, id="X-1", date="2024-01-01", status="ok", amount=10
        )

        entries = build_ledger([], [], [mislabeled])

        assert entries[0].kind is RecordKind.PAYMENT
        assert entries[0].signed_amount == -10


class TestLedgerFilters:
    """Date, kind and free-text filtering."""

    def test_date_range_is_inclusive(self, mixed_records) -> None:
        filters = LedgerFilters(date_from="2024-01-15", date_to="2024-01-20")

        entries = build_ledger(*mixed_records, filters)

        assert [e.id for e in entries] == ["PR-1", "SP-1"]
        assert [e.running_balance for e in entries] == [-200, -500]

    def test_date_to_covers_whole_day(self) -> None:
        payments = [create_payment("SP-1", 10, "2024-01-20 18:45")]

        entries = build_ledger([], [], payments, LedgerFilters(date_to="2024-01-20"))

        assert len(entries) == 1

    def test_inverted_range_is_empty(self, mixed_records) -> None:
        mock_logger = MagicMock(spec=LedgerLogger)
        filters = LedgerFilters(date_from="2024-02-01", date_to="2024-01-01")

        entries = build_ledger(*mixed_records, filters, ledger_logger=mock_logger)

        assert entries == []
        mock_logger.inverted_range.assert_called_once()

    def test_undated_entries_pass_date_filters(self) -> None:
        payments = [
            create_payment("SP-1", 10, "2023-12-01"),
            create_payment("SP-2", 20, None),
        ]

        entries = build_ledger(
            [], [], payments, LedgerFilters(date_from="2024-01-01")
        )

        assert [e.id for e in entries] == ["SP-2"]

    def test_kind_filter(self, mixed_records) -> None:
        entries = build_ledger(*mixed_records, LedgerFilters(kind=RecordKind.PAYMENT))

        assert [e.id for e in entries] == ["SP-1"]
        assert entries[0].running_balance == -300

    @pytest.mark.parametrize("kind", ["order", " Order ", RecordKind.ORDER])
    def test_kind_filter_accepts_plain_values(self, mixed_records, kind) -> None:
        entries = build_ledger(*mixed_records, LedgerFilters(kind=kind))

        assert [e.id for e in entries] == ["PO-1"]
        assert entries[0].running_balance == 1000

    def test_unknown_kind_value_raises(self, mixed_records) -> None:
        with pytest.raises(ValueError):
            build_ledger(*mixed_records, LedgerFilters(kind="refund"))

    def test_search_is_case_insensitive_over_status(self, mixed_records) -> None:
        entries = build_ledger(*mixed_records, LedgerFilters(search_text="RECEIVED"))

        assert [e.id for e in entries] == ["PO-1"]

    def test_search_matches_signed_amount_and_date(self, mixed_records) -> None:
        by_amount = build_ledger(*mixed_records, LedgerFilters(search_text="-200"))
        by_date = build_ledger(*mixed_records, LedgerFilters(search_text="2024-01-20"))

        assert [e.id for e in by_amount] == ["PR-1"]
        assert [e.id for e in by_date] == ["SP-1"]

    def test_search_matches_kind(self, mixed_records) -> None:
        entries = build_ledger(*mixed_records, LedgerFilters(search_text="return"))

        assert [e.id for e in entries] == ["PR-1"]

    def test_blank_search_is_ignored(self, mixed_records) -> None:
        entries = build_ledger(*mixed_records, LedgerFilters(search_text="   "))

        assert len(entries) == 3


class TestOrderingAndDates:
    """Sorting rules for equal, missing and unparseable dates."""

    def test_undated_entries_sort_last_in_input_order(self) -> None:
        orders = [
            create_order("PO-bad", 100, "not a date"),
            create_order("PO-1", 1000, "2024-01-10"),
        ]
        payments = [
            create_payment("SP-none", 50, None),
            create_payment("SP-1", 300, "10/01/2024"),
        ]

        entries = build_ledger(orders, [], payments)

        assert [e.id for e in entries] == ["PO-1", "SP-1", "PO-bad", "SP-none"]
        assert [e.running_balance for e in entries] == [1000, 700, 800, 750]

    def test_fallback_dates_with_time_sort_in_place(self) -> None:
        # Input
        orders = [create_order("PO-1", 1000, "10/01/2024 09:00")]
        returns = [create_return("PR-1", 200, "15/01/2024 10:30")]
        payments = [create_payment("SP-1", 300, "2024-01-12")]

        # Act
        entries = build_ledger(orders, returns, payments)

        # Assert
        assert [e.id for e in entries] == ["PO-1", "SP-1", "PR-1"]
        assert [e.running_balance for e in entries] == [1000, 700, 500]
        assert entries[2].date == datetime(2024, 1, 15, 10, 30)

    def test_equal_dates_keep_relative_order(self) -> None:
        entries = build_ledger(
            [create_order("PO-1", 100, "2024-01-10")],
            [create_return("PR-1", 10, "2024-01-10")],
            [create_payment("SP-1", 5, "2024-01-10")],
        )

        assert [e.id for e in entries] == ["PO-1", "PR-1", "SP-1"]

    def test_mixed_date_formats_sort_together(self) -> None:
        payments = [
            create_payment("A", 1, "2024/02/01"),
            create_payment("B", 1, "15/01/2024"),
            create_payment("C", 1, datetime(2024, 1, 20, 9, 0)),
        ]

        entries = build_ledger([], [], payments)

        assert [e.id for e in entries] == ["B", "C", "A"]

    def test_clock_fills_missing_dates_only(self) -> None:
        clock = FixedClock(datetime(2024, 1, 12))
        orders = [create_order("PO-1", 1000, "2024-01-10")]
        payments = [
            create_payment("SP-none", 100, None),
            create_payment("SP-blank", 50, "  "),
            create_payment("SP-bad", 25, "n/a"),
            create_payment("SP-1", 300, "2024-01-20"),
        ]

        entries = build_ledger(orders, [], payments, clock=clock)

        assert [e.id for e in entries] == [
            "PO-1",
            "SP-none",
            "SP-blank",
            "SP-1",
            "SP-bad",
        ]
        assert entries[1].date == datetime(2024, 1, 12)
        assert entries[-1].date is None

    def test_sort_chronologically_returns_new_list(self) -> None:
        entries = [
            LedgerEntry("b", RecordKind.ORDER, None, "", 1.0, 1.0),
            LedgerEntry("a", RecordKind.ORDER, datetime(2024, 1, 1), "", 1.0, 1.0),
        ]

        result = sort_chronologically(entries)

        assert [e.id for e in result] == ["a", "b"]
        assert [e.id for e in entries] == ["b", "a"]


class TestClassifyRecord:
    """Coercion of dirty amounts and dates."""

    def test_amount_strings_are_parsed(self) -> None:
        entry = classify_record(create_return("PR-1", "1,500.25", "2024-01-01"))

        assert entry.signed_amount == -1500.25
        assert entry.display_amount == 1500.25

    def test_non_numeric_amount_becomes_zero_and_is_logged(self) -> None:
        mock_logger = MagicMock(spec=LedgerLogger)

        entry = classify_record(
            create_payment("SP-1", "abc", "2024-01-01"), ledger_logger=mock_logger
        )

        assert entry.signed_amount == 0
        mock_logger.amount_coerced.assert_called_once_with(
            RecordKind.PAYMENT, "SP-1", "abc"
        )

    def test_missing_amount_is_zero_without_log(self) -> None:
        mock_logger = MagicMock(spec=LedgerLogger)

        entry = classify_record(
            create_order("PO-1", None, "2024-01-01"), ledger_logger=mock_logger
        )

        assert entry.display_amount == 0
        mock_logger.amount_coerced.assert_not_called()

    def test_unparseable_date_is_logged(self) -> None:
        mock_logger = MagicMock(spec=LedgerLogger)

        entry = classify_record(
            create_order("PO-1", 10, "someday"), ledger_logger=mock_logger
        )

        assert entry.date is None
        mock_logger.date_unparseable.assert_called_once_with(
            RecordKind.ORDER, "PO-1", "someday"
        )

    def test_missing_status_is_empty_string(self) -> None:
        entry = classify_record(create_payment("SP-1", 10, "2024-01-01", status=None))

        assert entry.status == ""

    def test_fulfilled_statuses_are_normalized(self) -> None:
        record = create_order("PO-1", 250, "2024-01-01", status="received")

        entry = classify_record(record, {" Received "})

        assert entry.signed_amount == 250
