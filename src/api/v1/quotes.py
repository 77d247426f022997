"""Quote delivery API — emails a single-item quotation with a PDF attached."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database import get_db
from src.documents.pdf import render_quote_pdf
from src.documents.quote import QuoteDocument, equipment_quote, power_unit_quote
from src.notifications.email import (
    EmailAttachment,
    EmailDeliveryError,
    ResendMailer,
    get_mailer,
)
from src.notifications.templates import render
from src.repositories.catalog import CatalogRepository
from src.schemas.lead import QuoteEmailRequest, QuoteEmailResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["quotes"])


async def build_quote_document(
    data: QuoteEmailRequest,
    catalog: CatalogRepository,
) -> QuoteDocument:
    """Load the quoted item and build its document.

    Raises:
        HTTPException: 400 for a non-numeric power unit id, 404 if missing
    """
    if data.item_type == "equipment":
        item = await catalog.get_equipment(data.item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="Equipment not found")
        return equipment_quote(item, data.quote_number, data.quote_date)

    try:
        unit_id = int(data.item_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid power unit ID")
    unit = await catalog.get_power_unit(unit_id)
    if unit is None:
        raise HTTPException(status_code=404, detail="Power unit not found")
    return power_unit_quote(unit, data.quote_number, data.quote_date)


@router.post("/quotes/send-email", response_model=QuoteEmailResponse)
async def send_quote_email(
    data: QuoteEmailRequest,
    db: AsyncSession = Depends(get_db),
    mailer: ResendMailer = Depends(get_mailer),
):
    """Render the quote as PDF + HTML and email it to the customer."""
    doc = await build_quote_document(data, CatalogRepository(db))

    try:
        pdf = await asyncio.to_thread(render_quote_pdf, doc, logo_path=settings.quote_logo_path)
        email_id = await mailer.send(
            to=str(data.email),
            subject=f"Quote {doc.quote_number} — {doc.title} | {settings.company_name}",
            html=render("item_quote.html", doc=doc),
            attachments=[EmailAttachment(filename=doc.pdf_filename, content=pdf)],
        )
    except EmailDeliveryError as e:
        logger.error("quote_email_rejected", quote_number=doc.quote_number, error=str(e))
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send email", "details": str(e)},
        )
    except Exception as e:
        logger.error("quote_email_failed", quote_number=doc.quote_number, error=str(e))
        return JSONResponse(status_code=500, content={"error": "Failed to send quote email"})

    logger.info(
        "quote_email_sent",
        quote_number=doc.quote_number,
        item_type=data.item_type,
        item_id=data.item_id,
        email_id=email_id,
    )
    return QuoteEmailResponse(success=True, email_id=email_id)
