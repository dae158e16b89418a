"""Core calculation engine for the mortgage calculator.

This module implements the financial logic for a fixed-rate, fixed-term loan
with an optional constant extra principal payment: rate conversion, the
annuity payment, the month-by-month amortization schedule (with early
payoff), yearly aggregation and the 1-30 year term sweep.

All functions are pure. Inputs may be ``Decimal``, ``int`` or ``float``;
arithmetic is done in ``Decimal`` and money is rounded to cents only when a
record is emitted. Callers are expected to validate their inputs
(``principal > 0``, ``term_years >= 1``, non-negative rate and extra).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from .data_models import (
    LoanInputs,
    LoanResult,
    PeriodRecord,
    ScheduleSummary,
    TermProjectionRecord,
    YearRecord,
)
from .logging_config import get_logger
from .utils import CENT, Number, as_decimal, to_money

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12
# Extra months allowed past the nominal term before the schedule is
# considered broken. A valid loan always retires on or before the term.
SAFETY_MARGIN = 5
TERM_SWEEP_RANGE = range(1, 31)

ZERO = Decimal("0")
# Balances below half a cent after a payment are decimal noise.
HALF_CENT = Decimal("0.005")


class ScheduleInvariantError(RuntimeError):
    """Raised when a schedule fails to retire the loan within its ceiling."""


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    """Convert an annual percentage rate (e.g. ``3.65``) to a monthly rate."""
    return as_decimal(annual_rate_percent) / Decimal(100) / Decimal(MONTHS_PER_YEAR)


def period_count(term_years: int) -> int:
    """Return the number of monthly payments in ``term_years``."""
    return term_years * MONTHS_PER_YEAR


def monthly_payment(principal: Number, monthly_rate: Number, period_count: int) -> Decimal:
    """Return the fixed monthly payment that fully amortizes the loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``. The result is not rounded.
    """
    principal = as_decimal(principal)
    rate = as_decimal(monthly_rate)
    if rate == 0:
        return principal / Decimal(period_count)
    factor = (1 + rate) ** period_count
    return principal * (rate * factor) / (factor - 1)


def schedule(
    principal: Number,
    monthly_rate: Number,
    monthly_payment: Number,
    period_count: int,
    extra_monthly_principal: Number = 0,
) -> List[PeriodRecord]:
    """Compute the month-by-month amortization schedule.

    Each month charges interest on the opening balance and applies the rest of
    the payment, plus ``extra_monthly_principal``, to the balance. The month
    whose payment would overshoot the balance pays exactly the balance and the
    schedule stops there, so extra payments shorten the list.

    Rounded principal amounts are the drop in the rounded balance from one
    month to the next. The emitted rows therefore chain exactly: every
    ``closing_balance`` is the next ``opening_balance`` and the principal
    column adds up to the loan amount.

    Raises
    ------
    ScheduleInvariantError
        If the loan is still outstanding ``SAFETY_MARGIN`` months after the
        nominal term, which cannot happen for valid inputs.
    """
    principal = as_decimal(principal)
    rate = as_decimal(monthly_rate)
    payment = as_decimal(monthly_payment)
    extra = as_decimal(extra_monthly_principal)

    balance = principal
    cumulative_interest = ZERO
    cumulative_principal_cents = ZERO
    # Shown on every row, including a clamped final one.
    total_cents = to_money(payment + extra)
    ceiling = period_count + SAFETY_MARGIN

    records: List[PeriodRecord] = []
    for period_index in range(1, ceiling + 1):
        if balance <= 0:
            break
        opening_balance = balance
        interest = balance * rate
        principal_due = payment - interest + extra
        if principal_due > balance:
            principal_due = balance
        balance -= principal_due
        if balance < HALF_CENT:
            balance = ZERO
        cumulative_interest += interest

        opening_cents = to_money(opening_balance)
        principal_cents = opening_cents - to_money(balance)
        cumulative_principal_cents += principal_cents
        records.append(
            PeriodRecord(
                period_index=period_index,
                year_index=(period_index - 1) // MONTHS_PER_YEAR + 1,
                opening_balance=opening_cents,
                principal_paid=principal_cents,
                interest_paid=to_money(interest),
                total_paid=total_cents,
                cumulative_principal_paid=cumulative_principal_cents,
                cumulative_interest_paid=to_money(cumulative_interest),
            )
        )

    if balance > 0:
        logger.error(
            "Balance %s still outstanding after %d months (term %d months)",
            to_money(balance),
            ceiling,
            period_count,
        )
        raise ScheduleInvariantError(
            f"Loan not retired within {ceiling} months; remaining balance {to_money(balance)}"
        )

    logger.debug(
        "Schedule retired %s in %d of %d months", to_money(principal), len(records), period_count
    )
    return records


def yearly_schedule(records: Sequence[PeriodRecord], term_years: int) -> List[YearRecord]:
    """Group a monthly schedule into one record per loan year.

    Months are grouped by position, twelve at a time. Years after an early
    payoff are still returned, with all fields zero.
    """
    years: List[YearRecord] = []
    for year_index in range(1, term_years + 1):
        window = records[(year_index - 1) * MONTHS_PER_YEAR : year_index * MONTHS_PER_YEAR]
        last: Optional[PeriodRecord] = window[-1] if window else None
        years.append(
            YearRecord(
                year_index=year_index,
                opening_balance=last.opening_balance if last else ZERO,
                principal_paid=to_money(sum((r.principal_paid for r in window), ZERO)),
                interest_paid=to_money(sum((r.interest_paid for r in window), ZERO)),
                total_paid=to_money(sum((r.total_paid for r in window), ZERO)),
                cumulative_principal_paid=last.cumulative_principal_paid if last else ZERO,
                cumulative_interest_paid=last.cumulative_interest_paid if last else ZERO,
            )
        )
    return years


def term_sweep(principal: Number, annual_rate_percent: Number) -> List[TermProjectionRecord]:
    """Project payment and total cost for every term in ``TERM_SWEEP_RANGE``.

    Extra payments are ignored: each projection runs the full term.
    ``total_interest_percent`` is the interest paid as a percentage of the
    principal (``20`` means 20 % on top of the principal).
    """
    principal = as_decimal(principal)
    rate = monthly_rate(annual_rate_percent)
    projections: List[TermProjectionRecord] = []
    for term_years in TERM_SWEEP_RANGE:
        periods = period_count(term_years)
        payment = monthly_payment(principal, rate, periods)
        total_paid = to_money(payment * periods)
        interest_percent = total_paid / principal * 100 - 100
        projections.append(
            TermProjectionRecord(
                term_years=term_years,
                monthly_payment=to_money(payment),
                total_interest_percent=interest_percent.quantize(CENT, rounding=ROUND_HALF_UP),
                total_paid=total_paid,
            )
        )
    return projections


def summarize(
    records: Sequence[PeriodRecord],
    monthly_payment: Number,
    period_count: int,
    baseline: Optional[Sequence[PeriodRecord]] = None,
) -> ScheduleSummary:
    """Return aggregate metrics for ``records``.

    When ``baseline`` (the same loan without extra payments) is given, the
    summary also reports how many months and how much interest the extra
    payments save.
    """
    last = records[-1] if records else None
    total_interest = last.cumulative_interest_paid if last else ZERO
    total_principal = last.cumulative_principal_paid if last else ZERO

    months_saved = 0
    interest_saved = ZERO
    if baseline:
        months_saved = len(baseline) - len(records)
        interest_saved = baseline[-1].cumulative_interest_paid - total_interest

    return ScheduleSummary(
        monthly_payment=to_money(as_decimal(monthly_payment)),
        total_interest=total_interest,
        total_principal=total_principal,
        total_paid=total_principal + total_interest,
        payments_made=len(records),
        nominal_payments=period_count,
        months_saved=months_saved,
        interest_saved=interest_saved,
    )


def calculate(inputs: LoanInputs) -> LoanResult:
    """Run the full pipeline for ``inputs``.

    Rate conversion, payment, schedule, yearly aggregation, the term sweep and
    the summary. The schedule without extra payments is only computed when an
    extra payment is set, to report the savings.
    """
    rate = monthly_rate(inputs.annual_rate_percent)
    periods = period_count(inputs.term_years)
    payment = monthly_payment(inputs.principal, rate, periods)
    logger.debug(
        "Calculating %s at %s%% over %d years: payment %s, extra %s",
        inputs.principal,
        inputs.annual_rate_percent,
        inputs.term_years,
        to_money(payment),
        inputs.extra_monthly_principal,
    )

    records = schedule(inputs.principal, rate, payment, periods, inputs.extra_monthly_principal)
    baseline = None
    if as_decimal(inputs.extra_monthly_principal) > 0:
        baseline = schedule(inputs.principal, rate, payment, periods)

    return LoanResult(
        inputs=inputs,
        monthly_rate=rate,
        monthly_payment=payment,
        schedule=records,
        yearly=yearly_schedule(records, inputs.term_years),
        term_sweep=term_sweep(inputs.principal, inputs.annual_rate_percent),
        summary=summarize(records, payment, periods, baseline),
    )
