"""
Amortization Schedules

Generates period-by-period loan schedules, monthly or aggregated by year.
"""

from itertools import groupby
from typing import Iterable, List, Optional

from finesse.calculations.extra_payments import iterate_payments
from finesse.calculations.models import (
    AmortizationRow,
    ExtraPaymentPolicy,
    PeriodType,
)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    years: int,
    period_type: PeriodType = PeriodType.YEARLY,
    policy: Optional[ExtraPaymentPolicy] = None,
) -> List[AmortizationRow]:
    """
    Generate a loan amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        years: Loan term in years
        period_type: One row per month, or one row per year
        policy: Optional extra payment policy

    Returns:
        List of amortization rows, empty when principal or years is not positive
    """
    monthly_rows = iterate_payments(principal, annual_rate, years, policy)

    if PeriodType(period_type) == PeriodType.MONTHLY:
        return list(monthly_rows)

    return aggregate_yearly(monthly_rows)


def aggregate_yearly(monthly_rows: Iterable[AmortizationRow]) -> List[AmortizationRow]:
    """
    Collapse monthly rows into yearly rows.

    Payment, principal and interest are summed over the year; balance and
    cumulative totals are taken from the year's last month. A year without
    any monthly row produces no yearly row.
    """
    schedule = []

    for year, rows in groupby(monthly_rows, key=lambda row: (row.period - 1) // 12 + 1):
        rows = list(rows)
        last = rows[-1]
        schedule.append(
            AmortizationRow(
                period=year,
                payment=sum(row.payment for row in rows),
                principal=sum(row.principal for row in rows),
                interest=sum(row.interest for row in rows),
                balance=last.balance,
                total_principal=last.total_principal,
                total_interest=last.total_interest,
            )
        )

    return schedule


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over a schedule."""
    return sum(row.interest for row in schedule)


def calculate_total_principal(schedule: List[AmortizationRow]) -> float:
    """Calculate total principal repaid over a schedule."""
    return sum(row.principal for row in schedule)
