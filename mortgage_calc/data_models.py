"""Data models for the mortgage calculator.

This module defines dataclasses representing the different entities used by the
calculator: the loan inputs, individual monthly schedule rows, yearly
aggregates and term projections. All records are frozen so that a computed
schedule can be handed to the presentation layer without defensive copies.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional


class ViewMode(str, enum.Enum):
    """How the presentation layer lays out a schedule.

    The numeric core does not look at this value; the CLI and the web page use
    it to choose between the monthly rows and the yearly aggregates.
    """

    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class LoanInputs:
    """User inputs for a single calculation.

    The principal is the financed amount, i.e. price minus down payment.
    """

    principal: Decimal
    annual_rate_percent: Decimal  # e.g. Decimal("3.65") for 3.65 %
    term_years: int
    extra_monthly_principal: Decimal = Decimal("0")

    @classmethod
    def from_purchase(
        cls,
        price: Decimal,
        down_payment: Decimal,
        annual_rate_percent: Decimal,
        term_years: int,
        extra_monthly_principal: Decimal = Decimal("0"),
    ) -> "LoanInputs":
        return cls(
            principal=price - down_payment,
            annual_rate_percent=annual_rate_percent,
            term_years=term_years,
            extra_monthly_principal=extra_monthly_principal,
        )


@dataclass(frozen=True)
class PeriodRecord:
    """One month of the amortization schedule.

    Attributes
    ----------
    period_index: int
        1-based month number.
    year_index: int
        1-based loan year the month falls into (months 1-12 are year 1).
    opening_balance: Decimal
        Balance owed before this month's principal is applied.
    principal_paid, interest_paid: Decimal
        Split of this month's payment.
    total_paid: Decimal
        Scheduled payment plus extra principal. On the final month of an
        early payoff this is the scheduled amount, not the smaller cash amount
        actually needed to retire the loan.
    cumulative_principal_paid, cumulative_interest_paid: Decimal
        Running totals including this month.
    """

    period_index: int
    year_index: int
    opening_balance: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    total_paid: Decimal
    cumulative_principal_paid: Decimal
    cumulative_interest_paid: Decimal

    @property
    def closing_balance(self) -> Decimal:
        return self.opening_balance - self.principal_paid


@dataclass(frozen=True)
class YearRecord:
    """Aggregate of the months that fall into one loan year.

    ``principal_paid``, ``interest_paid`` and ``total_paid`` are sums over the
    year. ``opening_balance`` and the cumulative fields come from the last
    month of the year, or are zero when the loan was already retired.
    """

    year_index: int
    opening_balance: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    total_paid: Decimal
    cumulative_principal_paid: Decimal
    cumulative_interest_paid: Decimal


@dataclass(frozen=True)
class TermProjectionRecord:
    """What the loan would cost if it ran for ``term_years`` with no extras."""

    term_years: int
    monthly_payment: Decimal
    total_interest_percent: Decimal  # interest as a percentage of principal
    total_paid: Decimal


@dataclass(frozen=True)
class ScheduleSummary:
    """Aggregate metrics for a computed schedule.

    ``months_saved`` and ``interest_saved`` compare the schedule against the
    same loan without extra payments; both are zero when no baseline was
    supplied.
    """

    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal
    total_paid: Decimal
    payments_made: int
    nominal_payments: int
    months_saved: int = 0
    interest_saved: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanResult:
    """Everything the presentation layer needs to render one calculation."""

    inputs: LoanInputs
    monthly_rate: Decimal
    monthly_payment: Decimal
    schedule: List[PeriodRecord]
    yearly: List[YearRecord]
    term_sweep: List[TermProjectionRecord]
    summary: ScheduleSummary

    def rows_for(self, view: ViewMode) -> list:
        """Return the monthly rows or the yearly aggregates for ``view``."""
        if view is ViewMode.MONTHLY:
            return self.schedule
        return self.yearly


@dataclass
class CalculatorDefaults:
    """Default form values for the presentation layer.

    A non-numeric field is replaced by the matching default before the core is
    called.
    """

    price: Decimal = Decimal("400000")
    down_payment: Decimal = Decimal("40000")
    annual_rate_percent: Decimal = Decimal("3.65")
    term_years: int = 30
    extra_monthly_principal: Decimal = Decimal("0")
    view: ViewMode = ViewMode.YEARLY
    currency: str = "EUR"
    max_term_years: int = 50
    # Number of monthly rows shown before the table is truncated.
    max_rows: Optional[int] = 120
