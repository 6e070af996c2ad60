"""
Tests for extra payment simulation.
"""

import pytest
from datetime import date
from finesse.calculations.amortization import compute_payment
from finesse.calculations.extra_payments import (
    PAYOFF_EPSILON,
    extra_for_month,
    iterate_payments,
    payoff_date,
    simulate_extra_payments,
)
from finesse.calculations.models import ExtraPaymentKind, ExtraPaymentPolicy, PeriodType
from finesse.calculations.schedule import generate_amortization_schedule


def monthly_extra(amount):
    return ExtraPaymentPolicy(kind=ExtraPaymentKind.EXTRA_MONTHLY, extra_monthly=amount)


class TestExtraForMonth:
    """Test per-month extra amounts."""

    def test_no_policy(self):
        assert extra_for_month(None, 1, 1000) == 0

    def test_monthly(self):
        assert extra_for_month(monthly_extra(150), 7, 1000) == 150

    def test_biweekly_is_one_extra_payment_per_year(self):
        policy = ExtraPaymentPolicy(kind=ExtraPaymentKind.BIWEEKLY)
        assert extra_for_month(policy, 1, 1200) == pytest.approx(100)

    def test_yearly_matches_calendar_month(self):
        policy = ExtraPaymentPolicy(
            kind=ExtraPaymentKind.EXTRA_YEARLY, extra_yearly_amount=2000, extra_yearly_month=6
        )
        hits = [month for month in range(1, 37) if extra_for_month(policy, month, 1000)]
        assert hits == [6, 18, 30]

    def test_none_kind_ignores_amounts(self):
        policy = ExtraPaymentPolicy(kind=ExtraPaymentKind.NONE, extra_monthly=500)
        assert extra_for_month(policy, 1, 1000) == 0


class TestSimulateExtraPayments:
    """Test standard vs accelerated payoff comparison."""

    def test_none_mirrors_standard(self):
        standard = compute_payment(200000, 6.0, 30)
        result = simulate_extra_payments(200000, 6.0, 30, ExtraPaymentPolicy())
        assert result.standard_monthly_payment == standard.monthly_payment
        assert result.actual_months == result.standard_months == 360
        assert result.actual_total_payment == standard.total_payment
        assert result.actual_total_interest == standard.total_interest
        assert result.months_saved == 0
        assert result.interest_saved == 0
        assert result.effective_monthly_payment == standard.monthly_payment
        assert result.converged

    def test_extra_monthly_saves_time_and_interest(self):
        result = simulate_extra_payments(200000, 6.0, 30, monthly_extra(200))
        assert result.actual_months < 360
        assert result.months_saved == 360 - result.actual_months
        assert result.interest_saved == pytest.approx(
            result.standard_total_interest - result.actual_total_interest
        )
        assert result.interest_saved > 0
        assert result.converged

    def test_biweekly_saves_time(self):
        policy = ExtraPaymentPolicy(kind=ExtraPaymentKind.BIWEEKLY)
        result = simulate_extra_payments(300000, 7.0, 30, policy)
        assert 0 < result.months_saved < 120
        assert result.effective_monthly_payment > result.standard_monthly_payment

    def test_extra_yearly_saves_time(self):
        policy = ExtraPaymentPolicy(
            kind=ExtraPaymentKind.EXTRA_YEARLY, extra_yearly_amount=5000, extra_yearly_month=1
        )
        result = simulate_extra_payments(200000, 6.0, 30, policy)
        assert result.months_saved > 0
        assert result.interest_saved > 0

    def test_payoff_time_is_monotonic_in_extra(self):
        """More extra never lengthens the loan or produces negative savings."""
        previous_months = None
        for extra in [0, 25, 50, 100, 250, 500, 1000, 5000]:
            result = simulate_extra_payments(250000, 5.5, 30, monthly_extra(extra))
            assert result.months_saved >= 0
            assert result.interest_saved >= 0
            if previous_months is not None:
                assert result.actual_months <= previous_months
            previous_months = result.actual_months

    def test_total_payment_is_principal_plus_interest(self):
        result = simulate_extra_payments(100000, 4.0, 15, monthly_extra(300))
        assert result.actual_total_payment == pytest.approx(
            100000 + result.actual_total_interest
        )
        assert result.effective_monthly_payment == pytest.approx(
            result.actual_total_payment / result.actual_months
        )

    def test_overpaying_extra_pays_off_in_one_month(self):
        result = simulate_extra_payments(10000, 6.0, 5, monthly_extra(50000))
        assert result.actual_months == 1
        assert result.actual_total_payment == pytest.approx(10000 + 50.0)
        assert result.months_saved == 59

    @pytest.mark.parametrize("principal,years", [(0, 30), (-1, 30), (1000, 0)])
    def test_degenerate_inputs(self, principal, years):
        result = simulate_extra_payments(principal, 6.0, years, monthly_extra(100))
        assert result.actual_months == 0
        assert result.standard_months == 0
        assert result.months_saved == 0
        assert result.effective_monthly_payment == 0

    def test_safety_cap_reports_non_convergence(self):
        """A policy that grows the balance stops at twice the term."""
        payment = compute_payment(10000, 6.0, 1).monthly_payment
        result = simulate_extra_payments(10000, 6.0, 1, monthly_extra(-payment))
        assert result.actual_months == 24
        assert not result.converged
        assert result.months_saved == 0
        assert result.interest_saved == 0


class TestSimulatorScheduleConsistency:
    """The simulator and schedule generator must tell the same story."""

    @pytest.mark.parametrize(
        "policy",
        [
            monthly_extra(150),
            ExtraPaymentPolicy(kind=ExtraPaymentKind.BIWEEKLY),
            ExtraPaymentPolicy(
                kind=ExtraPaymentKind.EXTRA_YEARLY, extra_yearly_amount=3000, extra_yearly_month=7
            ),
        ],
    )
    def test_months_and_interest_agree(self, policy):
        result = simulate_extra_payments(180000, 6.25, 30, policy)
        rows = generate_amortization_schedule(180000, 6.25, 30, PeriodType.MONTHLY, policy)

        assert len(rows) == result.actual_months
        assert rows[-1].total_interest == result.actual_total_interest
        assert sum(row.payment for row in rows) == pytest.approx(result.actual_total_payment)
        assert rows[-1].balance == 0

    def test_yearly_totals_agree(self):
        policy = monthly_extra(400)
        result = simulate_extra_payments(150000, 5.0, 20, policy)
        yearly = generate_amortization_schedule(150000, 5.0, 20, PeriodType.YEARLY, policy)
        assert yearly[-1].total_interest == result.actual_total_interest
        assert len(yearly) == (result.actual_months + 11) // 12

    def test_no_residual_below_epsilon_is_reported(self):
        for extra in [1, 33.33, 77.7, 123.45]:
            rows = list(iterate_payments(50000, 6.0, 10, monthly_extra(extra)))
            assert rows[-1].balance == 0
            assert all(row.balance == 0 or row.balance > PAYOFF_EPSILON for row in rows)


class TestPayoffDate:
    """Test payoff date calculation."""

    def test_thirty_year_loan(self):
        assert payoff_date(date(2025, 1, 1), 360) == date(2054, 12, 1)

    def test_single_payment(self):
        assert payoff_date(date(2025, 3, 15), 1) == date(2025, 3, 15)

    def test_month_end_is_clamped(self):
        assert payoff_date(date(2025, 1, 31), 2) == date(2025, 2, 28)

    def test_no_payments(self):
        assert payoff_date(date(2025, 1, 1), 0) == date(2025, 1, 1)
