"""
API routes for the calculator.
"""

from fastapi import APIRouter

from finesse.api import calculations, currency

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(currency.router, prefix="/currency", tags=["currency"])
