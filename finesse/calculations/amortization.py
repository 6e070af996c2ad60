"""
Loan Payment Calculations

Implements the fixed-payment (annuity) formula and the alternate repayment
shapes built on it: grace periods, balloon and bullet loans, and the
mortgage monthly cost breakdown.

All functions are total: non-positive principal or term yields a zero result
instead of raising. Values are plain floats and are never rounded here.
"""

from finesse.calculations.models import (
    BalloonResult,
    BulletResult,
    GraceKind,
    GracePolicy,
    GraceResult,
    LoanTerms,
    MortgageResult,
    PaymentBreakdown,
    PaymentResult,
    monthly_rate_for,
)

def calculate_payment(principal: float, monthly_rate: float, num_payments: int) -> float:
    """
    Calculate the fixed monthly payment that fully repays a principal.

    Uses the annuity formula:

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Args:
        principal: Amount borrowed
        monthly_rate: Monthly interest rate as decimal (e.g., 0.005 for 6%/yr)
        num_payments: Number of monthly payments

    Returns:
        Monthly payment amount, 0.0 when there is nothing to repay
    """
    if principal <= 0 or num_payments <= 0:
        return 0.0

    if monthly_rate == 0:
        return principal / num_payments

    factor = (1 + monthly_rate) ** num_payments
    return principal * (monthly_rate * factor) / (factor - 1)


def compute_payment(principal: float, annual_rate: float, years: int) -> PaymentResult:
    """
    Calculate monthly payment and totals for a fully amortizing loan.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent (e.g., 7.5 for 7.5%)
        years: Loan term in years

    Returns:
        PaymentResult, all zeros when principal or years is not positive
    """
    return amortize(LoanTerms(principal=principal, annual_rate=annual_rate, years=years))


def amortize(terms: LoanTerms) -> PaymentResult:
    """Fixed-payment totals for the given loan terms."""
    if terms.principal <= 0 or terms.years <= 0:
        return PaymentResult(monthly_payment=0.0, total_payment=0.0, total_interest=0.0)

    monthly_payment = calculate_payment(terms.principal, terms.monthly_rate, terms.payment_count)

    if terms.monthly_rate == 0:
        return PaymentResult(
            monthly_payment=monthly_payment,
            total_payment=terms.principal,
            total_interest=0.0,
        )

    total_payment = monthly_payment * terms.payment_count
    return PaymentResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_payment - terms.principal,
    )


def compute_with_grace(
    principal: float,
    annual_rate: float,
    years: int,
    grace_months: int,
    grace_kind: GraceKind,
) -> GraceResult:
    """
    Calculate a loan that starts with a grace period.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        years: Amortization term in years (after the grace period)
        grace_months: Length of the grace period in months
        grace_kind: Grace period behaviour

    Returns:
        GraceResult; total_interest is measured against the original principal
    """
    return amortize_with_grace(
        LoanTerms(principal=principal, annual_rate=annual_rate, years=years),
        GracePolicy(kind=GraceKind(grace_kind), months=grace_months),
    )


def amortize_with_grace(terms: LoanTerms, grace: GracePolicy) -> GraceResult:
    """
    Amortize a loan after an initial grace period.

    During a NO_PAYMENT grace period interest is capitalized monthly; during
    an INTEREST_ONLY grace period the borrower pays the monthly interest on
    the unchanged principal. Either way the remaining balance is then
    amortized over the full term, so the loan runs for
    ``grace.months + terms.payment_count`` months in total.
    """
    principal = terms.principal
    if principal <= 0 or terms.years <= 0:
        return GraceResult(
            monthly_payment=0.0,
            total_payment=0.0,
            total_interest=0.0,
            grace_payment=0.0,
            principal_after_grace=0.0,
            grace_interest=0.0,
        )

    if not grace.is_active:
        standard = amortize(terms)
        return GraceResult(
            monthly_payment=standard.monthly_payment,
            total_payment=standard.total_payment,
            total_interest=standard.total_interest,
            grace_payment=0.0,
            principal_after_grace=principal,
            grace_interest=0.0,
        )

    monthly_rate = terms.monthly_rate

    if GraceKind(grace.kind) == GraceKind.NO_PAYMENT:
        principal_after_grace = principal * (1 + monthly_rate) ** grace.months
        grace_interest = principal_after_grace - principal
        grace_payment = 0.0
        total_grace_payments = 0.0
    else:
        principal_after_grace = principal
        grace_payment = principal * monthly_rate
        total_grace_payments = grace_payment * grace.months
        grace_interest = total_grace_payments

    monthly_payment = calculate_payment(principal_after_grace, monthly_rate, terms.payment_count)
    if monthly_rate == 0:
        total_regular_payments = principal_after_grace
    else:
        total_regular_payments = monthly_payment * terms.payment_count

    total_payment = total_grace_payments + total_regular_payments

    return GraceResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        grace_payment=grace_payment,
        principal_after_grace=principal_after_grace,
        grace_interest=grace_interest,
    )


def compute_balloon(principal: float, annual_rate: float, years: int) -> BalloonResult:
    """Interest-only payments for the whole term, principal due at maturity."""
    terms = LoanTerms(principal=principal, annual_rate=annual_rate, years=years)
    if terms.principal <= 0 or terms.years <= 0:
        return BalloonResult(
            monthly_payment=0.0, balloon_payment=0.0, total_payment=0.0, total_interest=0.0
        )

    monthly_payment = terms.principal * terms.monthly_rate
    total_interest = monthly_payment * terms.payment_count

    return BalloonResult(
        monthly_payment=monthly_payment,
        balloon_payment=terms.principal,
        total_payment=total_interest + terms.principal,
        total_interest=total_interest,
    )


def compute_bullet(principal: float, annual_rate: float, years: int) -> BulletResult:
    """No periodic payments; principal and compounded interest due at maturity."""
    terms = LoanTerms(principal=principal, annual_rate=annual_rate, years=years)
    if terms.principal <= 0 or terms.years <= 0:
        return BulletResult(
            monthly_payment=0.0, final_payment=0.0, total_payment=0.0, total_interest=0.0
        )

    final_payment = terms.principal * (1 + terms.monthly_rate) ** terms.payment_count

    return BulletResult(
        monthly_payment=0.0,
        final_payment=final_payment,
        total_payment=final_payment,
        total_interest=final_payment - terms.principal,
    )


def compute_mortgage(
    home_price: float,
    down_payment: float,
    annual_rate: float,
    years: int,
    annual_property_tax: float,
    annual_insurance: float,
    monthly_hoa: float = 0.0,
) -> MortgageResult:
    """
    Calculate the total monthly cost of a mortgage.

    Args:
        home_price: Purchase price
        down_payment: Cash paid upfront (in currency, not percent)
        annual_rate: Annual interest rate in percent
        years: Loan term in years
        annual_property_tax: Property tax per year
        annual_insurance: Homeowner's insurance per year
        monthly_hoa: HOA dues per month

    Returns:
        MortgageResult with P&I, escrow components and totals
    """
    loan_amount = home_price - down_payment
    monthly_pi = compute_payment(loan_amount, annual_rate, years).monthly_payment
    monthly_property_tax = annual_property_tax / 12
    monthly_insurance = annual_insurance / 12

    total_monthly = monthly_pi + monthly_property_tax + monthly_insurance + monthly_hoa

    return MortgageResult(
        monthly_principal_interest=monthly_pi,
        monthly_property_tax=monthly_property_tax,
        monthly_insurance=monthly_insurance,
        monthly_hoa=monthly_hoa,
        total_monthly=total_monthly,
        loan_amount=loan_amount,
        total_cost=total_monthly * years * 12 if years > 0 else 0.0,
    )


def first_payment_breakdown(
    principal: float, annual_rate: float, monthly_payment: float
) -> PaymentBreakdown:
    """Split the first monthly payment into its interest and principal parts."""
    interest = principal * monthly_rate_for(annual_rate)
    principal_part = monthly_payment - interest

    if monthly_payment > 0:
        interest_percent = interest / monthly_payment * 100
        principal_percent = principal_part / monthly_payment * 100
    else:
        interest_percent = 0.0
        principal_percent = 0.0

    return PaymentBreakdown(
        interest=interest,
        principal=principal_part,
        interest_percent=interest_percent,
        principal_percent=principal_percent,
    )
