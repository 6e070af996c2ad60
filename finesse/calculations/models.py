"""
Calculation Value Types

Immutable inputs and results passed in and out of the calculation engine.
Every structure is created fresh by the function that produces it.
"""

from dataclasses import dataclass
from enum import Enum


def monthly_rate_for(annual_rate: float) -> float:
    """Convert an annual nominal rate in percent to a monthly decimal rate."""
    return annual_rate / 100 / 12


class GraceKind(str, Enum):
    """How payments behave during an initial grace period."""

    NONE = "none"
    INTEREST_ONLY = "interest_only"
    NO_PAYMENT = "no_payment"


class ExtraPaymentKind(str, Enum):
    """Which additional principal payment is applied."""

    NONE = "none"
    EXTRA_MONTHLY = "extra_monthly"
    EXTRA_YEARLY = "extra_yearly"
    BIWEEKLY = "biweekly"


class PeriodType(str, Enum):
    """Row granularity of a generated schedule."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class LoanTerms:
    """Principal, annual rate (percent) and term in years."""

    principal: float
    annual_rate: float
    years: int

    @property
    def monthly_rate(self) -> float:
        return monthly_rate_for(self.annual_rate)

    @property
    def payment_count(self) -> int:
        return self.years * 12


@dataclass(frozen=True)
class GracePolicy:
    """Initial period with reduced payments. Inactive for kind NONE or zero months."""

    kind: GraceKind = GraceKind.NONE
    months: int = 0

    @property
    def is_active(self) -> bool:
        return self.kind != GraceKind.NONE and self.months > 0


@dataclass(frozen=True)
class ExtraPaymentPolicy:
    """
    Additional principal payments on top of the scheduled payment.

    Only the amount matching ``kind`` is used: ``extra_monthly`` for
    EXTRA_MONTHLY, ``extra_yearly_amount`` in calendar month
    ``extra_yearly_month`` (1-12) for EXTRA_YEARLY. BIWEEKLY derives its
    extra from the scheduled payment itself.
    """

    kind: ExtraPaymentKind = ExtraPaymentKind.NONE
    extra_monthly: float = 0.0
    extra_yearly_amount: float = 0.0
    extra_yearly_month: int = 1


@dataclass(frozen=True)
class InvestmentTerms:
    initial: float
    monthly_contribution: float
    annual_rate: float
    years: int

    @property
    def monthly_rate(self) -> float:
        return monthly_rate_for(self.annual_rate)

    @property
    def month_count(self) -> int:
        return max(self.years, 0) * 12


@dataclass(frozen=True)
class PaymentResult:
    monthly_payment: float
    total_payment: float
    total_interest: float


@dataclass(frozen=True)
class GraceResult:
    monthly_payment: float
    total_payment: float
    total_interest: float
    grace_payment: float
    principal_after_grace: float
    grace_interest: float


@dataclass(frozen=True)
class BalloonResult:
    monthly_payment: float
    balloon_payment: float
    total_payment: float
    total_interest: float


@dataclass(frozen=True)
class BulletResult:
    monthly_payment: float
    final_payment: float
    total_payment: float
    total_interest: float


@dataclass(frozen=True)
class MortgageResult:
    monthly_principal_interest: float
    monthly_property_tax: float
    monthly_insurance: float
    monthly_hoa: float
    total_monthly: float
    loan_amount: float
    total_cost: float


@dataclass(frozen=True)
class PaymentBreakdown:
    """Interest/principal split of the first scheduled payment."""

    interest: float
    principal: float
    interest_percent: float
    principal_percent: float


@dataclass(frozen=True)
class ExtraPaymentResult:
    """
    Standard loan compared against the same loan with extra payments.

    ``converged`` is False when the simulation was stopped by the safety
    cap while a balance was still outstanding.
    """

    standard_monthly_payment: float
    standard_total_payment: float
    standard_total_interest: float
    standard_months: int
    actual_months: int
    actual_total_payment: float
    actual_total_interest: float
    months_saved: int
    interest_saved: float
    effective_monthly_payment: float
    converged: bool = True


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    total_principal: float
    total_interest: float


@dataclass(frozen=True)
class InvestmentGrowthRow:
    year: int
    contributions: float
    interest: float
    balance: float


@dataclass(frozen=True)
class InvestmentResult:
    future_value: float
    total_contributions: float
    total_interest: float


@dataclass(frozen=True)
class GrowthMilestone:
    year: int
    value: float
