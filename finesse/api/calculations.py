"""
Financial calculation API endpoints.

These endpoints accept validated inputs and return calculated results.
The calculation engine itself never raises on degenerate inputs; range
checks live in the request models.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from finesse.calculations import amortization, extra_payments, investment, schedule
from finesse.calculations.models import (
    ExtraPaymentKind,
    ExtraPaymentPolicy,
    GraceKind,
    GracePolicy,
    InvestmentTerms,
    LoanTerms,
    PeriodType,
)

router = APIRouter()


class ExtraPaymentInput(BaseModel):
    """Extra payment policy."""

    type: ExtraPaymentKind = ExtraPaymentKind.NONE
    extra_monthly: float = Field(0.0, ge=0)
    extra_yearly_amount: float = Field(0.0, ge=0)
    extra_yearly_month: int = Field(1, ge=1, le=12)

    def to_policy(self) -> ExtraPaymentPolicy:
        return ExtraPaymentPolicy(
            kind=self.type,
            extra_monthly=self.extra_monthly,
            extra_yearly_amount=self.extra_yearly_amount,
            extra_yearly_month=self.extra_yearly_month,
        )


class LoanInput(BaseModel):
    """Input for loan calculation."""

    principal: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)
    years: int = Field(..., gt=0)
    grace_period_months: int = Field(0, ge=0)
    grace_period_type: GraceKind = GraceKind.NONE

    def to_terms(self) -> LoanTerms:
        return LoanTerms(principal=self.principal, annual_rate=self.rate, years=self.years)

    def to_grace_policy(self) -> GracePolicy:
        return GracePolicy(kind=self.grace_period_type, months=self.grace_period_months)


@router.post("/loan")
async def calculate_loan(inputs: LoanInput):
    """Calculate standard, balloon and bullet repayment for a loan."""

    terms = inputs.to_terms()
    standard = amortization.amortize_with_grace(terms, inputs.to_grace_policy())

    # Amortization starts from the balance left after any grace period
    effective_principal = standard.principal_after_grace

    return {
        "standard": asdict(standard),
        "balloon": asdict(amortization.compute_balloon(terms.principal, terms.annual_rate, terms.years)),
        "bullet": asdict(amortization.compute_bullet(terms.principal, terms.annual_rate, terms.years)),
        "first_payment": asdict(
            amortization.first_payment_breakdown(
                effective_principal, terms.annual_rate, standard.monthly_payment
            )
        ),
        "schedule": [
            asdict(row)
            for row in schedule.generate_amortization_schedule(
                effective_principal, terms.annual_rate, terms.years
            )
        ],
    }


class AmortizationInput(BaseModel):
    """Input for amortization schedule generation."""

    principal: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)
    years: int = Field(..., gt=0)
    period_type: PeriodType = PeriodType.YEARLY
    extra_payment: Optional[ExtraPaymentInput] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""

    policy = inputs.extra_payment.to_policy() if inputs.extra_payment else None
    rows = schedule.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.rate,
        years=inputs.years,
        period_type=inputs.period_type,
        policy=policy,
    )

    return {
        "schedule": [asdict(row) for row in rows],
        "total_interest": schedule.calculate_total_interest(rows),
        "total_principal": schedule.calculate_total_principal(rows),
    }


class ExtraPaymentsInput(BaseModel):
    """Input for extra payment simulation."""

    principal: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)
    years: int = Field(..., gt=0)
    extra_payment: ExtraPaymentInput
    start_date: Optional[date] = None
    period_type: PeriodType = PeriodType.YEARLY


@router.post("/extra-payments")
async def calculate_extra_payments(inputs: ExtraPaymentsInput):
    """Compare a standard loan with the same loan paid down faster."""

    policy = inputs.extra_payment.to_policy()
    result = extra_payments.simulate_extra_payments(
        inputs.principal, inputs.rate, inputs.years, policy
    )

    response = {
        "result": asdict(result),
        "schedule": [
            asdict(row)
            for row in schedule.generate_amortization_schedule(
                inputs.principal, inputs.rate, inputs.years, inputs.period_type, policy
            )
        ],
    }

    if inputs.start_date is not None:
        response["standard_payoff_date"] = extra_payments.payoff_date(
            inputs.start_date, result.standard_months
        ).isoformat()
        response["payoff_date"] = extra_payments.payoff_date(
            inputs.start_date, result.actual_months
        ).isoformat()

    return response


class MortgageInput(BaseModel):
    """Input for mortgage calculation."""

    home_price: float = Field(..., ge=0)
    down_payment: float = Field(0.0, ge=0)
    rate: float = Field(..., ge=0)
    years: int = Field(..., gt=0)
    annual_property_tax: float = Field(0.0, ge=0)
    annual_insurance: float = Field(0.0, ge=0)
    monthly_hoa: float = Field(0.0, ge=0)


@router.post("/mortgage")
async def calculate_mortgage(inputs: MortgageInput):
    """Calculate monthly mortgage cost and loan schedule."""

    result = amortization.compute_mortgage(
        home_price=inputs.home_price,
        down_payment=inputs.down_payment,
        annual_rate=inputs.rate,
        years=inputs.years,
        annual_property_tax=inputs.annual_property_tax,
        annual_insurance=inputs.annual_insurance,
        monthly_hoa=inputs.monthly_hoa,
    )
    loan = amortization.compute_payment(result.loan_amount, inputs.rate, inputs.years)

    return {
        "result": asdict(result),
        "loan": asdict(loan),
        "first_payment": asdict(
            amortization.first_payment_breakdown(
                result.loan_amount, inputs.rate, result.monthly_principal_interest
            )
        ),
        "schedule": [
            asdict(row)
            for row in schedule.generate_amortization_schedule(
                result.loan_amount, inputs.rate, inputs.years
            )
        ],
    }


class InvestmentInput(BaseModel):
    """Input for investment growth projection."""

    initial: float = Field(..., ge=0)
    monthly: float = Field(0.0, ge=0)
    rate: float = Field(..., ge=0)
    years: int = Field(..., ge=0)

    def to_terms(self) -> InvestmentTerms:
        return InvestmentTerms(
            initial=self.initial,
            monthly_contribution=self.monthly,
            annual_rate=self.rate,
            years=self.years,
        )


class InvestmentResponse(BaseModel):
    """Response with investment projection."""

    future_value: float
    total_contributions: float
    total_interest: float
    growth_multiple: float
    milestones: List[dict]
    schedule: List[dict]


@router.post("/investment", response_model=InvestmentResponse)
async def calculate_investment(inputs: InvestmentInput):
    """Project investment growth with monthly contributions."""

    terms = inputs.to_terms()
    result = investment.project_growth(terms)

    return InvestmentResponse(
        future_value=result.future_value,
        total_contributions=result.total_contributions,
        total_interest=result.total_interest,
        growth_multiple=investment.growth_multiple(result),
        milestones=[
            asdict(point)
            for point in investment.growth_milestones(
                terms.initial, terms.monthly_contribution, terms.annual_rate, terms.years
            )
        ],
        schedule=[
            asdict(row)
            for row in investment.generate_investment_schedule(
                terms.initial, terms.monthly_contribution, terms.annual_rate, terms.years
            )
        ],
    )
