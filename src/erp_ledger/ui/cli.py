from __future__ import annotations

from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
import typer

from erp_ledger.adapters.upstream.snapshot import (
    load_return_document,
    load_statement_snapshot,
)
from erp_ledger.core.config import LedgerConfig, load_ledger_config_from_env
from erp_ledger.core.errors import LedgerEngineError
from erp_ledger.ledger.builder import build_ledger
from erp_ledger.ledger.entities import LedgerFilters, RecordKind
from erp_ledger.ledger.summary import summarize_ledger
from erp_ledger.proration.valuation import value_return
from erp_ledger.ui.render import render_return_valuation, render_statement

# Load environment variables from .env
load_dotenv()

app = typer.Typer(
    help="erp-ledger: counterparty statements and return valuation.",
    no_args_is_help=True,
)


def _setup() -> tuple[LedgerConfig, Console]:
    try:
        config = load_ledger_config_from_env()
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2) from e

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)

    console = Console()
    if not console.is_terminal:
        console = Console(width=120)
    return config, console


def _parse_kind(value: str | None) -> RecordKind | None:
    if value is None:
        return None
    try:
        return RecordKind(value.strip().lower())
    except ValueError:
        raise typer.BadParameter(
            "kind must be one of: order, return, payment"
        ) from None


@app.command("statement")
def statement(
    snapshot: Path = typer.Argument(..., help="JSON file with orders/returns/payments"),
    party: str = typer.Option(
        "supplier", help="supplier (purchase records) or client (sales records)"
    ),
    counterparty: str | None = typer.Option(
        None, help="Keep only records for this supplier/client id"
    ),
    date_from: str | None = typer.Option(None, "--from", help="yyyy-mm-dd"),
    date_to: str | None = typer.Option(None, "--to", help="yyyy-mm-dd"),
    kind: str | None = typer.Option(None, help="order, return or payment"),
    search: str | None = typer.Option(None, help="Free-text filter"),
) -> None:
    """Print a counterparty statement with running balance."""
    if party not in {"supplier", "client"}:
        raise typer.BadParameter("party must be one of: supplier, client")
    record_kind = _parse_kind(kind)
    config, console = _setup()

    try:
        snap = load_statement_snapshot(snapshot, party, counterparty)  # type: ignore[arg-type]
    except LedgerEngineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    entries = build_ledger(
        snap.orders,
        snap.returns,
        snap.payments,
        LedgerFilters(
            date_from=date_from,
            date_to=date_to,
            kind=record_kind,
            search_text=search,
        ),
        fulfilled_statuses=config.fulfilled_statuses_for(party),
        draft_status=config.draft_status,
    )
    title = "Supplier statement" if party == "supplier" else "Client statement"
    render_statement(entries, summarize_ledger(entries), console, title=title)


@app.command("return-value")
def return_value(
    document: Path = typer.Argument(..., help="JSON return document with items"),
    manual_discount: float | None = typer.Option(
        None, help="Override the prorated order discount"
    ),
) -> None:
    """Value a (partial) return: prorated discounts, tax and totals."""
    config, console = _setup()

    try:
        doc = load_return_document(document)
    except LedgerEngineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    valuation = value_return(
        doc.to_inputs(),
        doc.header_discount,
        manual_discount=manual_discount,
        reported_total=doc.reported_total,
        tolerance=config.mismatch_tolerance,
    )
    render_return_valuation(valuation, console)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
