"""
Investment Growth Calculations

Compounds an initial balance plus monthly contributions, either in closed
form (future value of a lump sum plus an ordinary annuity) or year by year.
"""

from typing import List

from finesse.calculations.models import (
    GrowthMilestone,
    InvestmentGrowthRow,
    InvestmentResult,
    InvestmentTerms,
    monthly_rate_for,
)

MILESTONE_YEARS = [5, 10, 15, 20, 25, 30, 40, 50]
DEFAULT_MAX_MILESTONES = 4


def compute_investment_growth(
    initial: float, monthly_contribution: float, annual_rate: float, years: int
) -> InvestmentResult:
    """
    Calculate the future value of an investment.

    Contributions are made at the end of each month (ordinary annuity), and
    interest compounds monthly.

    Args:
        initial: Starting balance
        monthly_contribution: Amount added every month
        annual_rate: Expected annual return in percent
        years: Time horizon in years

    Returns:
        InvestmentResult with future value, contributions and interest earned
    """
    return project_growth(
        InvestmentTerms(
            initial=initial,
            monthly_contribution=monthly_contribution,
            annual_rate=annual_rate,
            years=years,
        )
    )


def project_growth(terms: InvestmentTerms) -> InvestmentResult:
    """Closed-form future value for the given investment terms."""
    initial = terms.initial
    monthly_contribution = terms.monthly_contribution
    monthly_rate = terms.monthly_rate
    num_months = terms.month_count

    fv_initial = initial * (1 + monthly_rate) ** num_months

    if monthly_rate > 0:
        fv_contributions = monthly_contribution * (
            ((1 + monthly_rate) ** num_months - 1) / monthly_rate
        )
    else:
        fv_contributions = monthly_contribution * num_months

    future_value = fv_initial + fv_contributions
    total_contributions = initial + monthly_contribution * num_months

    return InvestmentResult(
        future_value=future_value,
        total_contributions=total_contributions,
        total_interest=future_value - total_contributions,
    )


def generate_investment_schedule(
    initial: float, monthly_contribution: float, annual_rate: float, years: int
) -> List[InvestmentGrowthRow]:
    """
    Generate a year-by-year investment growth schedule.

    Row 0 is the starting state. Every month interest accrues on the current
    balance before the contribution is added.
    """
    monthly_rate = monthly_rate_for(annual_rate)
    balance = initial
    total_contributions = initial

    schedule = [
        InvestmentGrowthRow(year=0, contributions=initial, interest=0.0, balance=initial)
    ]

    for year in range(1, years + 1):
        for _ in range(12):
            interest = balance * monthly_rate
            balance += interest + monthly_contribution
            total_contributions += monthly_contribution

        schedule.append(
            InvestmentGrowthRow(
                year=year,
                contributions=total_contributions,
                interest=balance - total_contributions,
                balance=balance,
            )
        )

    return schedule


def growth_milestones(
    initial: float,
    monthly_contribution: float,
    annual_rate: float,
    years: int,
    max_points: int = DEFAULT_MAX_MILESTONES,
) -> List[GrowthMilestone]:
    """
    Future value at round-number years within the time horizon.

    The final year is appended when it is not itself a milestone year; the
    list is then truncated to ``max_points`` entries.
    """
    check_years = [year for year in MILESTONE_YEARS if year <= years]

    points = [
        GrowthMilestone(
            year=year,
            value=compute_investment_growth(
                initial, monthly_contribution, annual_rate, year
            ).future_value,
        )
        for year in check_years
    ]

    if years > 0 and years not in check_years:
        final = compute_investment_growth(initial, monthly_contribution, annual_rate, years)
        points.append(GrowthMilestone(year=years, value=final.future_value))

    return points[:max_points]


def growth_multiple(result: InvestmentResult) -> float:
    """Future value per unit contributed; 0.0 when nothing was contributed."""
    if result.total_contributions <= 0:
        return 0.0
    return result.future_value / result.total_contributions
