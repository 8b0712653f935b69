"""Rich tables for statements and return valuations."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from erp_ledger.ledger.entities import LedgerEntry, LedgerSummary
from erp_ledger.proration.valuation import ReturnValuation


def fmt_money(value: float, places: int = 2) -> str:
    """Thousands separators, fixed decimals."""
    return f"{value:,.{places}f}"


def _fmt_date(entry: LedgerEntry) -> str:
    if entry.date is None:
        return "-"
    return entry.date.strftime("%d/%m/%Y %H:%M")


def render_statement(
    entries: list[LedgerEntry],
    summary: LedgerSummary,
    console: Console,
    *,
    title: str = "Account statement",
) -> None:
    """Print ledger rows with debit/credit columns, then the totals."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Ref")
    table.add_column("Status")
    table.add_column("Debit", justify="right")
    table.add_column("Credit", justify="right")
    table.add_column("Balance", justify="right")

    for idx, entry in enumerate(entries, start=1):
        debit = fmt_money(entry.signed_amount) if entry.signed_amount > 0 else ""
        credit = fmt_money(-entry.signed_amount) if entry.signed_amount < 0 else ""
        table.add_row(
            str(idx),
            _fmt_date(entry),
            entry.kind.value,
            "" if entry.id is None else str(entry.id),
            entry.status or "-",
            debit,
            credit,
            fmt_money(entry.running_balance),
        )

    console.print(table)
    console.print(f"Entries: {summary.count}")
    console.print(f"Orders total: {fmt_money(summary.orders_total)}")
    console.print(f"Returns total: {fmt_money(summary.returns_total)}")
    console.print(f"Payments total: {fmt_money(summary.payments_total)}")
    console.print(f"Debit total: {fmt_money(summary.debit_total)}")
    console.print(f"Credit total: {fmt_money(summary.credit_total)}")
    console.print(f"Closing balance: {fmt_money(summary.net)}")


def render_return_valuation(valuation: ReturnValuation, console: Console) -> None:
    """Print prorated return lines and document totals."""
    table = Table(title="Return valuation")
    table.add_column("#", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Unit price", justify="right")
    table.add_column("Discount", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Tax basis")
    table.add_column("Net", justify="right")
    table.add_column("Gross", justify="right")

    for idx, line in enumerate(valuation.lines, start=1):
        table.add_row(
            str(idx),
            f"{line.returned_quantity:g}",
            fmt_money(line.unit_price),
            fmt_money(line.discount_for_returned_qty),
            fmt_money(line.tax_for_returned_qty),
            line.tax_strategy.value,
            fmt_money(line.net_line_total),
            fmt_money(line.gross_line_total),
        )

    totals = valuation.totals
    console.print(table)
    console.print(f"Subtotal: {fmt_money(totals.subtotal)}")
    console.print(f"Order discount: {fmt_money(valuation.header_discount)}")
    console.print(f"Total discount: {fmt_money(totals.discount)}")
    console.print(f"Tax: {fmt_money(totals.tax)}")
    console.print(f"Total: {fmt_money(totals.total)}")
    if valuation.mismatch:
        console.print(
            f"[yellow]Stored total {fmt_money(valuation.reported_total)} "
            f"differs from computed total[/yellow]"
        )
