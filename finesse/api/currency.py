"""
Currency conversion API endpoints.

Handlers are plain functions so the blocking rate lookup runs in the
threadpool. A failed lookup is reported as 502, never converted at 1:1.
"""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from finesse.services.currency import (
    CurrencyService,
    CurrencyServiceError,
    get_currency_service,
)

router = APIRouter()


class CurrencyResponse(BaseModel):
    code: str
    name: str


class ConvertInput(BaseModel):
    """Amounts to convert between two currencies."""

    amounts: Dict[str, float]
    from_currency: str = Field(..., min_length=3, max_length=3)
    to_currency: str = Field(..., min_length=3, max_length=3)


@router.get("/currencies")
def list_currencies(service: CurrencyService = Depends(get_currency_service)):
    """List supported currencies."""
    return [
        CurrencyResponse(code=currency.code, name=currency.name)
        for currency in service.get_available_currencies()
    ]


@router.get("/rate")
def get_rate(
    from_currency: str,
    to_currency: str,
    service: CurrencyService = Depends(get_currency_service),
):
    """Get the exchange rate between two currencies."""
    try:
        rate = service.get_exchange_rate(from_currency.upper(), to_currency.upper())
    except CurrencyServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return {"from": from_currency.upper(), "to": to_currency.upper(), "rate": rate}


@router.post("/convert")
def convert(inputs: ConvertInput, service: CurrencyService = Depends(get_currency_service)):
    """Convert calculated amounts into another currency."""
    from_code = inputs.from_currency.upper()
    to_code = inputs.to_currency.upper()

    try:
        converted = service.convert_amounts(inputs.amounts, from_code, to_code)
    except CurrencyServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return {"from": from_code, "to": to_code, "amounts": converted}
