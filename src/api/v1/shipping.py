"""Shipping API — live UPS rate quotes for parts orders."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.schemas.shipping import RateQuoteResponse, RateRequest
from src.shipping.ups import (
    UPSClient,
    UPSRatingError,
    destination_label,
    get_ups_client,
    origin_label,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/shipping", tags=["shipping"])


@router.post("/ups-rates", response_model=RateQuoteResponse)
async def ups_rates(
    data: RateRequest,
    ups: UPSClient = Depends(get_ups_client),
):
    """Rate one package from origin to destination across UPS services.

    Returns:
        {"rates": [...], "origin": str, "destination": str}, cheapest first
    """
    if not ups.account_number:
        return JSONResponse(status_code=500, content={"error": "UPS account not configured"})

    try:
        rates = await ups.shop_rates(data)
    except UPSRatingError:
        return JSONResponse(
            status_code=502,
            content={
                "error": "Unable to retrieve UPS rates. Please verify the addresses and try again."
            },
        )
    except Exception as e:
        logger.error("ups_rates_failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch UPS rates", "message": str(e)},
        )

    return RateQuoteResponse(
        rates=rates,
        origin=origin_label(data),
        destination=destination_label(data),
    )
