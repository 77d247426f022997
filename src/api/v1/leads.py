"""Leads API — parts quote requests and contact inquiries from the website forms."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.notifications.email import ResendMailer, get_mailer
from src.notifications.leads import notify_contact_inquiry, notify_quote_request
from src.portal.dependencies import get_portal_claims
from src.repositories.lead import LeadRepository
from src.schemas.lead import (
    ContactInquiryCreate,
    ContactInquiryOut,
    QuoteRequestCreate,
    QuoteRequestOut,
)
from src.schemas.portal import PortalClaims

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["leads"])


@router.post("/quotes", response_model=QuoteRequestOut, status_code=201)
async def create_quote_request(
    data: QuoteRequestCreate,
    claims: Optional[PortalClaims] = Depends(get_portal_claims),
    db: AsyncSession = Depends(get_db),
    mailer: ResendMailer = Depends(get_mailer),
) -> QuoteRequestOut:
    """Save a parts quote request and notify sales and the customer.

    Signed-in portal customers get the request linked to their account.
    The row is committed before any email goes out; email failures are
    logged and the request is still created.
    """
    repo = LeadRepository(db)
    quote = await repo.create_quote_request(
        data, customer_id=claims.sub if claims else None
    )
    await db.commit()

    await notify_quote_request(quote, mailer=mailer)
    return QuoteRequestOut.model_validate(quote)


@router.post("/contact", response_model=ContactInquiryOut, status_code=201)
async def create_contact_inquiry(
    data: ContactInquiryCreate,
    db: AsyncSession = Depends(get_db),
    mailer: ResendMailer = Depends(get_mailer),
) -> ContactInquiryOut:
    repo = LeadRepository(db)
    inquiry = await repo.create_contact_inquiry(data)
    await db.commit()

    await notify_contact_inquiry(inquiry, mailer=mailer)
    return ContactInquiryOut.model_validate(inquiry)
