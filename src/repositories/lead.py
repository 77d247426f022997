"""Lead repository — creates and reads quote requests and contact inquiries."""

from __future__ import annotations

from typing import Optional, Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.lead import ContactInquiry, QuoteRequest
from src.schemas.lead import ContactInquiryCreate, QuoteRequestCreate

logger = structlog.get_logger()


class LeadRepository:
    """Manages lead creation and customer lookups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_quote_request(
        self,
        data: QuoteRequestCreate,
        customer_id: Optional[str] = None,
    ) -> QuoteRequest:
        """Persist a parts quote request.

        Args:
            data: Validated form body
            customer_id: Portal subject claim when the customer is signed in

        Returns:
            Created QuoteRequest
        """
        quote = QuoteRequest(
            customer_id=customer_id,
            name=data.name,
            email=str(data.email),
            phone=data.phone,
            ship_to=data.ship_to,
            notes=data.notes,
            items=data.items,
            status="pending",
        )

        self.db.add(quote)
        await self.db.flush()

        logger.info(
            "quote_request_created",
            quote_id=quote.id,
            customer_id=customer_id,
            has_items=bool(data.items),
        )

        return quote

    async def create_contact_inquiry(self, data: ContactInquiryCreate) -> ContactInquiry:
        """Persist a contact form submission."""
        inquiry = ContactInquiry(
            name=data.name,
            email=str(data.email),
            message=data.message,
        )

        self.db.add(inquiry)
        await self.db.flush()

        logger.info("contact_inquiry_created", inquiry_id=inquiry.id)

        return inquiry

    async def quotes_by_email(self, email: str) -> Sequence[QuoteRequest]:
        result = await self.db.execute(
            select(QuoteRequest)
            .where(QuoteRequest.email == email)
            .order_by(QuoteRequest.created_at.desc())
        )
        return result.scalars().all()

    async def quotes_by_customer(self, customer_id: str) -> Sequence[QuoteRequest]:
        result = await self.db.execute(
            select(QuoteRequest)
            .where(QuoteRequest.customer_id == customer_id)
            .order_by(QuoteRequest.created_at.desc())
        )
        return result.scalars().all()

    async def inquiries_by_email(self, email: str) -> Sequence[ContactInquiry]:
        result = await self.db.execute(
            select(ContactInquiry)
            .where(ContactInquiry.email == email)
            .order_by(ContactInquiry.created_at.desc())
        )
        return result.scalars().all()
