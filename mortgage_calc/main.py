"""Command‑line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compute the amortization schedule (monthly or yearly),
view only the summary, or print the repayment plan comparing terms of 1 to 30
years. Results can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import click

from .data_models import CalculatorDefaults, LoanInputs, LoanResult, PeriodRecord, ViewMode, YearRecord
from .engine import calculate, term_sweep
from .formatter import CURRENCY_OPTIONS, print_schedule, print_summary, print_term_sweep
from .logging_config import configure_logging, get_logger
from .utils import parse_amount

logger = get_logger(__name__)

DEFAULTS = CalculatorDefaults()


def _amount(value: str, name: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}", param_hint=name)


def build_inputs_from_options(
    price: str,
    down_payment: Optional[str],
    rate: float,
    term: int,
    extra: Optional[str] = None,
) -> LoanInputs:
    """Validate raw option values and build ``LoanInputs``.

    The engine does not validate its inputs, so every contract it relies on
    is checked here.
    """
    price_value = _amount(price, "--price")
    down_value = _amount(down_payment, "--down-payment") if down_payment else Decimal("0")
    extra_value = _amount(extra, "--extra") if extra else Decimal("0")
    rate_value = Decimal(str(rate))
    if not rate_value.is_finite():
        raise click.BadParameter(f"Invalid interest rate: {rate}", param_hint="--rate")

    if price_value - down_value <= 0:
        raise click.BadParameter("Financed amount (price minus down payment) must be positive")
    if not 1 <= term <= DEFAULTS.max_term_years:
        raise click.BadParameter(
            f"Term must be between 1 and {DEFAULTS.max_term_years} years", param_hint="--term"
        )
    if rate_value < 0:
        raise click.BadParameter("Interest rate cannot be negative", param_hint="--rate")
    if extra_value < 0:
        raise click.BadParameter("Extra payment cannot be negative", param_hint="--extra")

    return LoanInputs.from_purchase(price_value, down_value, rate_value, term, extra_value)


def _row_to_dict(row: Union[PeriodRecord, YearRecord]) -> Dict[str, Any]:
    return {key: float(value) if isinstance(value, Decimal) else value for key, value in asdict(row).items()}


def result_to_dict(result: LoanResult, view: ViewMode) -> Dict[str, Any]:
    """Convert a result into JSON-serialisable dictionaries."""
    summary = {
        key: float(value) if isinstance(value, Decimal) else value
        for key, value in asdict(result.summary).items()
    }
    return {
        "inputs": {
            "principal": float(result.inputs.principal),
            "annual_rate_percent": float(result.inputs.annual_rate_percent),
            "term_years": result.inputs.term_years,
            "extra_monthly_principal": float(result.inputs.extra_monthly_principal),
        },
        "view": view.value,
        "summary": summary,
        "schedule": [_row_to_dict(row) for row in result.rows_for(view)],
        "term_sweep": [_row_to_dict(p) for p in result.term_sweep],
    }


def export_to_json(path: Path, result: LoanResult, view: ViewMode) -> None:
    """Export summary, schedule and repayment plan to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result, view), f, indent=2)


def export_to_csv(path: Path, rows: Sequence[Union[PeriodRecord, YearRecord]], view: ViewMode) -> None:
    """Export the schedule rows to a CSV file."""
    header: List[str] = [
        "Month" if view is ViewMode.MONTHLY else "Year",
        "Opening_Balance",
        "Principal",
        "Interest",
        "Total",
        "Cumulative_Principal",
        "Cumulative_Interest",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            index = row.period_index if isinstance(row, PeriodRecord) else row.year_index
            writer.writerow(
                [
                    index,
                    row.opening_balance,
                    row.principal_paid,
                    row.interest_paid,
                    row.total_paid,
                    row.cumulative_principal_paid,
                    row.cumulative_interest_paid,
                ]
            )


def loan_options(func):
    """Attach the shared loan input options to a command."""
    options = [
        click.option("--price", "-p", "price", default=str(DEFAULTS.price), show_default=True, help="House price"),
        click.option(
            "--down-payment",
            "-d",
            "down_payment",
            default=str(DEFAULTS.down_payment),
            show_default=True,
            help="Down payment amount",
        ),
        click.option(
            "--rate",
            "-r",
            "rate",
            type=float,
            default=float(DEFAULTS.annual_rate_percent),
            show_default=True,
            help="Annual interest rate (percent)",
        ),
        click.option(
            "--term", "-t", "term", type=int, default=DEFAULTS.term_years, show_default=True, help="Loan term in years"
        ),
        click.option("--extra", "-e", "extra", default="0", help="Extra principal paid every month"),
        click.option(
            "--currency",
            "currency",
            type=click.Choice(sorted(CURRENCY_OPTIONS), case_sensitive=False),
            default=DEFAULTS.currency,
            show_default=True,
            help="Currency used for display",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command‑line mortgage repayment calculator."""
    configure_logging("DEBUG" if verbose else None)


@cli.command()
@loan_options
@click.option(
    "--view",
    "view",
    type=click.Choice([m.value for m in ViewMode]),
    default=DEFAULTS.view.value,
    show_default=True,
    help="Show monthly rows or yearly totals",
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    price: str,
    down_payment: str,
    rate: float,
    term: int,
    extra: str,
    currency: str,
    view: str,
    output: Optional[str],
) -> None:
    """Compute and print the amortization schedule."""
    inputs = build_inputs_from_options(price, down_payment, rate, term, extra)
    view_mode = ViewMode(view)
    result = calculate(inputs)
    rows = result.rows_for(view_mode)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result, view_mode)
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, rows, view_mode)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        return

    print_summary(result.summary, currency)
    max_rows = DEFAULTS.max_rows
    if max_rows and len(rows) > max_rows:
        click.echo(f"Schedule has {len(rows)} rows; showing first {max_rows} rows.")
        rows = rows[:max_rows]
    print_schedule(rows, view_mode, currency)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    price: str,
    down_payment: str,
    rate: float,
    term: int,
    extra: str,
    currency: str,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    inputs = build_inputs_from_options(price, down_payment, rate, term, extra)
    result = calculate(inputs)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        data = result_to_dict(result, DEFAULTS.view)
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": data["summary"]}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result.summary, currency)


@cli.command()
@loan_options
def plan(
    price: str,
    down_payment: str,
    rate: float,
    term: int,
    extra: str,
    currency: str,
) -> None:
    """Print the repayment plan for terms of 1 to 30 years.

    The plan ignores the extra payment and the chosen term; it shows what the
    same loan would cost over each candidate term.
    """
    inputs = build_inputs_from_options(price, down_payment, rate, term, extra)
    logger.debug("Projecting terms for %s at %s%%", inputs.principal, inputs.annual_rate_percent)
    print_term_sweep(term_sweep(inputs.principal, inputs.annual_rate_percent), currency)


if __name__ == "__main__":
    cli()
