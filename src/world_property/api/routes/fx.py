"""
FX conversion routes
"""

from fastapi import APIRouter, HTTPException, Query

from world_property.services.fx_service import FX_BASE_CURRENCY, FX_RATES, convert, normalise_currency

router = APIRouter()


@router.get("/rates")
async def get_rates():
    return {"base": FX_BASE_CURRENCY, "rates": FX_RATES}


@router.get("/convert")
async def convert_amount(
    value: float = Query(..., description="Amount in the source currency"),
    from_currency: str = Query(..., alias="from", min_length=3, max_length=3),
    to_currency: str = Query(..., alias="to", min_length=3, max_length=3),
):
    converted = convert(value, from_currency, to_currency)
    if converted is None:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot convert {normalise_currency(from_currency)} to {normalise_currency(to_currency)}",
        )

    return {
        "value": value,
        "from": normalise_currency(from_currency),
        "to": normalise_currency(to_currency),
        "converted": converted,
    }
