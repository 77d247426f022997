"""Lead schemas for forms, notifications and API."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from src.schemas.base import ApiModel


class QuoteRequestCreate(ApiModel):
    """Parts quote form body."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr = Field(max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    ship_to: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[str] = None


class QuoteRequestOut(ApiModel):
    id: int
    customer_id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    ship_to: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class ContactInquiryCreate(ApiModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr = Field(max_length=200)
    message: str = Field(min_length=1)


class ContactInquiryOut(ApiModel):
    id: int
    name: str
    email: str
    message: str
    created_at: Optional[datetime] = None


class LeadNotification(ApiModel):
    """Data for the sales-chat notification of a new lead."""

    lead_id: int
    kind: Literal["quote", "contact"]
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    ship_to: Optional[str] = None
    summary: Optional[str] = None


class QuoteEmailRequest(ApiModel):
    """Request to email a single-item quote with a PDF attachment."""

    email: EmailStr
    item_type: Literal["equipment", "power-unit"]
    item_id: str
    quote_number: str = Field(min_length=1, max_length=50)
    quote_date: datetime


class QuoteEmailResponse(ApiModel):
    success: bool
    email_id: Optional[str] = None
