"""Shipping rate schemas."""

from typing import Optional

from pydantic import Field

from src.schemas.base import ApiModel


class RateRequest(ApiModel):
    origin_city: str = Field(min_length=1)
    origin_state: str = Field(min_length=1, max_length=5)
    origin_postal: str = Field(min_length=1)
    origin_country: str = Field("US", min_length=2, max_length=2)
    dest_city: str = Field(min_length=1)
    dest_state: str = Field("", max_length=5)
    dest_postal: str = Field(min_length=1)
    dest_country: str = Field("US", min_length=2, max_length=2)

    # Package (UPS small-package limits)
    weight_lbs: float = Field(gt=0, le=150)
    length_in: float = Field(gt=0, le=108)
    width_in: float = Field(gt=0, le=108)
    height_in: float = Field(gt=0, le=108)


class ShippingRate(ApiModel):
    service_code: str
    service_name: str
    total_charges: str
    currency: str = "USD"
    guaranteed_days: Optional[str] = None
    delivery_by_time: Optional[str] = None
    billing_weight: Optional[str] = None
    billing_weight_unit: str = "LBS"


class RateQuoteResponse(ApiModel):
    rates: list[ShippingRate]
    origin: str
    destination: str
