"""Output helpers for the mortgage calculator.

This module renders money amounts, schedules, summaries and the term plan as
plain text for the terminal. The web page reuses ``format_money`` and
``CURRENCY_OPTIONS`` so that both front ends display amounts the same way.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Sequence, Union

from .data_models import PeriodRecord, ScheduleSummary, TermProjectionRecord, ViewMode, YearRecord
from .utils import to_money

CURRENCY_OPTIONS: Dict[str, Dict[str, str]] = {
    "EUR": {"label": "Euro", "prefix": "€", "suffix": ""},
    "USD": {"label": "US dollar", "prefix": "$", "suffix": ""},
    "GBP": {"label": "British pound", "prefix": "£", "suffix": ""},
    "PLN": {"label": "Polish złoty", "prefix": "", "suffix": " zł"},
}
DEFAULT_CURRENCY = "EUR"


def format_money(value: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Format ``value`` with thousands separators and the currency symbol.

    >>> format_money(Decimal("1646.854"), "USD")
    '$1,646.85'
    """
    meta = CURRENCY_OPTIONS.get(currency.upper(), CURRENCY_OPTIONS[DEFAULT_CURRENCY])
    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{meta['prefix']}{abs(amount):,.2f}{meta['suffix']}"


def format_percent(value: Decimal) -> str:
    return f"{value:.2f}%"


def print_summary(summary: ScheduleSummary, currency: str = DEFAULT_CURRENCY) -> None:
    """Print a summary of loan metrics in a human‑readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly payment    : {format_money(summary.monthly_payment, currency)}")
    print(f"Total principal    : {format_money(summary.total_principal, currency)}")
    print(f"Total interest     : {format_money(summary.total_interest, currency)}")
    print(f"Total paid         : {format_money(summary.total_paid, currency)}")
    print(f"Payments made      : {summary.payments_made} of {summary.nominal_payments}")
    if summary.months_saved:
        print(f"Term reduction     : {summary.months_saved} months")
        print(f"Interest saved     : {format_money(summary.interest_saved, currency)}")
    print("-" * 72)


def print_schedule(
    rows: Iterable[Union[PeriodRecord, YearRecord]],
    view: ViewMode = ViewMode.MONTHLY,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """Print monthly rows or yearly aggregates as a simple table."""
    label = "Month" if view is ViewMode.MONTHLY else "Year"
    headers = [label, "Balance", "Principal", "Interest", "Total", "PrincipalToDate", "InterestToDate"]
    print("\t".join(headers))
    for row in rows:
        index = row.period_index if isinstance(row, PeriodRecord) else row.year_index
        print(
            "\t".join(
                [
                    str(index),
                    format_money(row.opening_balance, currency),
                    format_money(row.principal_paid, currency),
                    format_money(row.interest_paid, currency),
                    format_money(row.total_paid, currency),
                    format_money(row.cumulative_principal_paid, currency),
                    format_money(row.cumulative_interest_paid, currency),
                ]
            )
        )


def print_term_sweep(projections: Sequence[TermProjectionRecord], currency: str = DEFAULT_CURRENCY) -> None:
    """Print the repayment plan: payment and cost for each candidate term."""
    print("Repayment plan")
    print("=" * 72)
    print(f"{'Years':>5s} {'Monthly payment':>18s} {'Total paid':>18s} {'Interest':>10s}")
    for p in projections:
        print(
            f"{p.term_years:5d} {format_money(p.monthly_payment, currency):>18s} "
            f"{format_money(p.total_paid, currency):>18s} {format_percent(p.total_interest_percent):>10s}"
        )
    print("=" * 72)
