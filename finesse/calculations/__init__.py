"""
Financial Calculation Engine

Core calculation modules for loan, mortgage and investment projections.
Every function is pure: no I/O and no shared state between calls.
"""

from finesse.calculations import amortization, extra_payments, investment, schedule

__all__ = ["amortization", "extra_payments", "investment", "schedule"]
