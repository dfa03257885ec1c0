"""
Command-line interface for the bank/book reconciliation matcher.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ReconConfig, generate_default_config, load_config, resolve_settings
from .loaders.transaction_loader import TransactionLoader
from .models.transaction import (
    AccountInfo,
    DetailedReconciliationReport,
    MatchResults,
    ReconciliationData,
    StatementPeriod,
    Transaction,
)
from .reconciliation import build_detailed_report, reconcile, validate_all
from .utils.exceptions import DataValidationError, ReconciliationError
from .utils.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """Bank-to-book transaction reconciliation tool."""
    pass


def _common_inputs(func):
    func = click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Path to configuration file (YAML)",
    )(func)
    func = click.argument("book_file", type=click.Path(exists=True, path_type=Path))(func)
    func = click.argument("bank_file", type=click.Path(exists=True, path_type=Path))(func)
    return func


@main.command("reconcile")
@_common_inputs
@click.option("--threshold", type=click.FloatRange(0.0, 1.0), help="Override fuzzy match threshold")
@click.option("--date-tolerance", type=click.IntRange(min=0), help="Override date tolerance in days")
@click.option("--no-fuzzy", is_flag=True, help="Disable the fuzzy matching phase")
@click.option("--no-exact", is_flag=True, help="Disable the exact matching phase")
@click.option("--start", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Statement start date")
@click.option("--end", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Statement end date")
@click.option("--show-matches/--hide-matches", default=True, help="Print matched pairs")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def reconcile_command(
    bank_file: Path,
    book_file: Path,
    config: Optional[Path],
    threshold: Optional[float],
    date_tolerance: Optional[int],
    no_fuzzy: bool,
    no_exact: bool,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    show_matches: bool,
    verbose: bool,
):
    """
    Reconcile a bank statement export against book records.

    BANK_FILE: CSV export of the bank statement
    BOOK_FILE: CSV export of the internal ledger
    """
    try:
        recon_config = _load(config, verbose)

        overrides = recon_config.reconciliation.model_dump()
        if threshold is not None:
            overrides["fuzzy_threshold"] = threshold
        if date_tolerance is not None:
            overrides["date_tolerance"] = date_tolerance
        if no_fuzzy:
            overrides["fuzzy_matching"] = False
        if no_exact:
            overrides["auto_match_exact"] = False

        data = _build_data(recon_config, bank_file, book_file, start_date, end_date)
        data.settings = resolve_settings(overrides)

        validate_all(data).raise_for_errors()

        results = reconcile(data)
        report = build_detailed_report(
            data.account, results.matched, results.unmatched_bank, results.unmatched_book
        )

        _display_summary(results, report)
        if show_matches and results.matched:
            _display_matches(results)
        _display_unmatched("Unmatched Bank Transactions", results.unmatched_bank)
        _display_unmatched("Unmatched Book Transactions", results.unmatched_book)

    except DataValidationError as e:
        console.print("[red]Reconciliation data is invalid:[/red]")
        for error in e.errors:
            console.print(f"  - {error}")
        sys.exit(1)
    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("validate")
@_common_inputs
def validate_command(bank_file: Path, book_file: Path, config: Optional[Path]):
    """
    Check both files and the configured account without matching.

    BANK_FILE: CSV export of the bank statement
    BOOK_FILE: CSV export of the internal ledger
    """
    try:
        recon_config = _load(config, verbose=False)
        data = _build_data(recon_config, bank_file, book_file, None, None)
    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    result = validate_all(data)
    if result.valid:
        console.print(
            f"[green]Valid: {len(data.bank_transactions)} bank and "
            f"{len(data.book_transactions)} book transactions[/green]"
        )
        return

    console.print(f"[red]{len(result.errors)} validation error(s):[/red]")
    for error in result.errors:
        console.print(f"  - {error}")
    sys.exit(1)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _load(config: Optional[Path], verbose: bool) -> ReconConfig:
    recon_config = load_config(config)
    level = logging.DEBUG if verbose else recon_config.logging.level
    log_file = Path(recon_config.logging.file) if recon_config.logging.file else None
    setup_logging(
        level=level,
        log_file=log_file,
        log_format=recon_config.logging.format,
        max_bytes=recon_config.logging.max_bytes,
        backup_count=recon_config.logging.backup_count,
    )
    return recon_config


def _build_data(
    recon_config: ReconConfig,
    bank_file: Path,
    book_file: Path,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
) -> ReconciliationData:
    """Load both files and assemble the reconciliation input."""
    loader = TransactionLoader(recon_config)
    bank_transactions = loader.load_file(bank_file, source="bank")
    book_transactions = loader.load_file(book_file, source="book")

    # Statement period defaults to the bank transaction date range
    bank_dates = [t.date.date() for t in bank_transactions]
    period = StatementPeriod(
        start_date=start_date.date() if start_date else min(bank_dates, default=None),
        end_date=end_date.date() if end_date else max(bank_dates, default=None),
    )

    account_config = recon_config.account
    account = AccountInfo(
        name=account_config.name,
        number=account_config.number,
        bank=account_config.bank,
        currency=account_config.currency,
        opening_balance=account_config.opening_balance,
        closing_balance=account_config.closing_balance,
    )

    return ReconciliationData(
        account=account,
        period=period,
        bank_transactions=bank_transactions,
        book_transactions=book_transactions,
        settings=recon_config.reconciliation,
    )


def _display_summary(results: MatchResults, report: DetailedReconciliationReport) -> None:
    """Display reconciliation summary in console."""
    summary = results.summary
    currency = report.account.currency if report.account else ""

    table = Table(title="Reconciliation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Exact Matches", str(len(results.exact_matches)))
    table.add_row("Fuzzy Matches", str(len(results.fuzzy_matches)))
    table.add_row("Unmatched Bank", str(len(results.unmatched_bank)))
    table.add_row("Unmatched Book", str(len(results.unmatched_book)))
    table.add_row("Matched Amount", f"{summary.matched_amount:,.2f} {currency}")
    table.add_row("Unmatched Bank Amount", f"{summary.unmatched_bank_amount:,.2f} {currency}")
    table.add_row("Unmatched Book Amount", f"{summary.unmatched_book_amount:,.2f} {currency}")
    table.add_row("Discrepancy", f"{summary.discrepancy:,.2f} {currency}")
    table.add_row("Match Rate", f"{summary.match_percentage:.1f}%")

    status_style = "green" if summary.is_balanced else "red"
    table.add_row("Status", f"[{status_style}]{summary.status.value}[/{status_style}]")

    console.print(table)

    if report.matched_categories or report.unmatched_categories:
        categories = Table(title="By Category")
        categories.add_column("Category", style="cyan")
        categories.add_column("Matched", justify="right")
        categories.add_column("Unmatched", justify="right")
        names = sorted(set(report.matched_categories) | set(report.unmatched_categories))
        for name in names:
            categories.add_row(
                name,
                str(report.matched_categories.get(name, 0)),
                str(report.unmatched_categories.get(name, 0)),
            )
        console.print(categories)


def _display_matches(results: MatchResults) -> None:
    table = Table(title="Matched Transactions")
    table.add_column("Bank ID")
    table.add_column("Book ID")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    table.add_column("Variance", justify="right")
    table.add_column("Method")
    table.add_column("Confidence", justify="right")

    for pair in results.matched:
        table.add_row(
            pair.bank_transaction.id,
            pair.book_transaction.id,
            f"{pair.bank_transaction.date:%Y-%m-%d}",
            f"{pair.bank_transaction.amount:,.2f}",
            f"{pair.amount_variance:,.2f}",
            pair.match_method.value,
            f"{pair.confidence:.2f}",
        )

    console.print(table)


def _display_unmatched(title: str, transactions: list[Transaction]) -> None:
    if not transactions:
        return

    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Date")
    table.add_column("Reference")
    table.add_column("Amount", justify="right")
    table.add_column("Description")

    for txn in transactions[:20]:  # Show first 20
        table.add_row(
            txn.id,
            f"{txn.date:%Y-%m-%d}",
            txn.reference or "-",
            f"{txn.amount:,.2f}",
            txn.description[:40] + "..." if len(txn.description) > 40 else txn.description,
        )

    console.print(table)

    if len(transactions) > 20:
        console.print(f"... and {len(transactions) - 20} more transactions")


if __name__ == "__main__":
    main()
