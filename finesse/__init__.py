"""
Finesse Calculator: loan, mortgage and investment projections.
"""

__version__ = "0.1.0"
