"""Customer portal schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.schemas.base import ApiModel


class PortalClaims(BaseModel):
    """Identity claims stored in the portal session (provider field names)."""

    sub: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class PortalUser(ApiModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class PortalCounts(ApiModel):
    quotes: int
    orders: int
    payments: int
    inquiries: int


class PortalProfile(ApiModel):
    user: PortalUser
    counts: PortalCounts


class CustomerOrderOut(ApiModel):
    id: int
    customer_id: str
    customer_email: str
    quote_request_id: Optional[int] = None
    item_type: Optional[str] = None
    item_description: Optional[str] = None
    total: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerPaymentOut(ApiModel):
    id: int
    customer_id: str
    customer_email: str
    order_id: Optional[int] = None
    amount: str
    status: str
    method: Optional[str] = None
    reference: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
