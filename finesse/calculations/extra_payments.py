"""
Extra Payment Simulation

Month-by-month simulation of a fixed-payment loan with additional principal
payments. The same stepper drives both the aggregate simulator and the
schedule generator so the two always agree.
"""

import logging
from datetime import date
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from finesse.calculations.amortization import amortize, calculate_payment
from finesse.calculations.models import (
    AmortizationRow,
    ExtraPaymentKind,
    ExtraPaymentPolicy,
    ExtraPaymentResult,
    LoanTerms,
)

logger = logging.getLogger(__name__)

# Balance at or below this is treated as paid off
PAYOFF_EPSILON = 0.01
# Simulation stops after this many times the standard payment count
SAFETY_CAP_MULTIPLIER = 2
# 26 biweekly payments a year add up to 13 monthly payments, so the one
# extra payment is spread across the months of the year
MONTHS_PER_YEAR = 12


def extra_for_month(
    policy: Optional[ExtraPaymentPolicy], month: int, standard_payment: float
) -> float:
    """
    Return the extra principal paid in a given month.

    Args:
        policy: Extra payment policy, None for no extra payments
        month: 1-based month number since the first payment
        standard_payment: Scheduled monthly payment of the loan

    Returns:
        Extra amount for this month
    """
    if policy is None:
        return 0.0

    kind = ExtraPaymentKind(policy.kind)
    if kind == ExtraPaymentKind.EXTRA_MONTHLY:
        return policy.extra_monthly
    if kind == ExtraPaymentKind.BIWEEKLY:
        return standard_payment / MONTHS_PER_YEAR
    if kind == ExtraPaymentKind.EXTRA_YEARLY and month % 12 == policy.extra_yearly_month % 12:
        return policy.extra_yearly_amount
    return 0.0


def iterate_payments(
    principal: float,
    annual_rate: float,
    years: int,
    policy: Optional[ExtraPaymentPolicy] = None,
) -> Iterator[AmortizationRow]:
    """
    Yield one AmortizationRow per month until the loan is paid off.

    Each month accrues interest on the current balance, applies the standard
    payment (capped at balance plus interest) and the policy's extra amount.
    The principal portion never exceeds the balance, and a residual at or
    below PAYOFF_EPSILON is swept into the same month's principal so a
    finished loan always reports a zero balance.

    Stops when the balance is at or below PAYOFF_EPSILON or after
    SAFETY_CAP_MULTIPLIER times the standard number of payments.
    """
    terms = LoanTerms(principal=principal, annual_rate=annual_rate, years=years)
    if terms.principal <= 0 or terms.years <= 0:
        return

    monthly_rate = terms.monthly_rate
    standard_payment = calculate_payment(principal, monthly_rate, terms.payment_count)
    max_months = terms.payment_count * SAFETY_CAP_MULTIPLIER

    balance = principal
    total_principal = 0.0
    total_interest = 0.0
    month = 0

    while balance > PAYOFF_EPSILON and month < max_months:
        month += 1
        interest = balance * monthly_rate
        scheduled = min(standard_payment, balance + interest)
        extra = extra_for_month(policy, month, standard_payment)

        principal_paid = min(scheduled - interest + extra, balance)
        if 0 < balance - principal_paid <= PAYOFF_EPSILON:
            principal_paid = balance

        balance = max(0.0, balance - principal_paid)
        total_principal += principal_paid
        total_interest += interest

        yield AmortizationRow(
            period=month,
            payment=interest + principal_paid,
            principal=principal_paid,
            interest=interest,
            balance=balance,
            total_principal=total_principal,
            total_interest=total_interest,
        )


def simulate_extra_payments(
    principal: float,
    annual_rate: float,
    years: int,
    policy: ExtraPaymentPolicy,
) -> ExtraPaymentResult:
    """
    Compare a standard loan against the same loan with extra payments.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        years: Loan term in years
        policy: Extra payment policy to simulate

    Returns:
        ExtraPaymentResult; months_saved and interest_saved are never negative
    """
    if principal <= 0 or years <= 0:
        return ExtraPaymentResult(
            standard_monthly_payment=0.0,
            standard_total_payment=0.0,
            standard_total_interest=0.0,
            standard_months=0,
            actual_months=0,
            actual_total_payment=0.0,
            actual_total_interest=0.0,
            months_saved=0,
            interest_saved=0.0,
            effective_monthly_payment=0.0,
        )

    terms = LoanTerms(principal=principal, annual_rate=annual_rate, years=years)
    standard = amortize(terms)
    standard_months = terms.payment_count

    if ExtraPaymentKind(policy.kind) == ExtraPaymentKind.NONE:
        return ExtraPaymentResult(
            standard_monthly_payment=standard.monthly_payment,
            standard_total_payment=standard.total_payment,
            standard_total_interest=standard.total_interest,
            standard_months=standard_months,
            actual_months=standard_months,
            actual_total_payment=standard.total_payment,
            actual_total_interest=standard.total_interest,
            months_saved=0,
            interest_saved=0.0,
            effective_monthly_payment=standard.monthly_payment,
        )

    actual_months = 0
    total_paid = 0.0
    total_interest = 0.0
    balance = principal

    for row in iterate_payments(principal, annual_rate, years, policy):
        actual_months = row.period
        total_paid += row.payment
        total_interest = row.total_interest
        balance = row.balance

    converged = balance <= PAYOFF_EPSILON
    if not converged:
        logger.warning(
            f"Extra payment simulation stopped at {actual_months} months "
            f"with balance {balance:.2f} outstanding"
        )

    return ExtraPaymentResult(
        standard_monthly_payment=standard.monthly_payment,
        standard_total_payment=standard.total_payment,
        standard_total_interest=standard.total_interest,
        standard_months=standard_months,
        actual_months=actual_months,
        actual_total_payment=total_paid,
        actual_total_interest=total_interest,
        months_saved=max(0, standard_months - actual_months),
        interest_saved=max(0.0, standard.total_interest - total_interest),
        effective_monthly_payment=total_paid / actual_months if actual_months else 0.0,
        converged=converged,
    )


def payoff_date(start_date: date, months: int) -> date:
    """Date of the last payment when the first payment is due on start_date."""
    if months <= 0:
        return start_date
    return start_date + relativedelta(months=months - 1)
