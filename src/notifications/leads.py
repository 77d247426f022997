"""Lead notifications — business notice, customer confirmation, sales ping.

Delivery problems are logged and swallowed: a lead is saved even when the
email provider or Telegram is down.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from src.config import settings
from src.models.lead import ContactInquiry, QuoteRequest
from src.notifications.email import ResendMailer, get_mailer
from src.notifications.telegram import TelegramNotifier, get_sales_bot
from src.notifications.templates import format_submitted_at, render
from src.schemas.lead import LeadNotification

logger = structlog.get_logger()


async def _ping_sales(notification: LeadNotification) -> None:
    bot = get_sales_bot()
    if bot is None or settings.telegram_sales_chat_id is None:
        return
    await TelegramNotifier().send_lead_notification(
        bot, settings.telegram_sales_chat_id, notification
    )


async def notify_quote_request(
    quote: QuoteRequest,
    mailer: Optional[ResendMailer] = None,
) -> bool:
    """Email the business and the customer about a new quote request.

    Returns:
        True if both emails were accepted by the provider
    """
    mailer = mailer or get_mailer()
    submitted_at = format_submitted_at()
    company = settings.company_name

    sent = True
    try:
        await asyncio.gather(
            mailer.send(
                to=settings.email_business_inbox,
                subject=f"New Parts Quote Request from {quote.name}",
                html=render("quote_business.html", quote=quote, submitted_at=submitted_at),
                reply_to=quote.email,
            ),
            mailer.send(
                to=quote.email,
                subject=f"Quote Request Received — {company}",
                html=render("quote_confirmation.html", quote=quote),
            ),
        )
        logger.info("quote_request_emails_sent", quote_id=quote.id, email=quote.email)
    except Exception as e:
        sent = False
        logger.error("quote_request_email_failed", quote_id=quote.id, error=str(e))

    await _ping_sales(
        LeadNotification(
            lead_id=quote.id,
            kind="quote",
            customer_name=quote.name,
            customer_email=quote.email,
            customer_phone=quote.phone,
            ship_to=quote.ship_to,
            summary=quote.items or quote.notes,
        )
    )
    return sent


async def notify_contact_inquiry(
    inquiry: ContactInquiry,
    mailer: Optional[ResendMailer] = None,
) -> bool:
    """Email the business and the customer about a new contact inquiry."""
    mailer = mailer or get_mailer()
    submitted_at = format_submitted_at()
    company = settings.company_name

    sent = True
    try:
        await asyncio.gather(
            mailer.send(
                to=settings.email_business_inbox,
                subject=f"New Contact Inquiry from {inquiry.name}",
                html=render("contact_business.html", inquiry=inquiry, submitted_at=submitted_at),
                reply_to=inquiry.email,
            ),
            mailer.send(
                to=inquiry.email,
                subject=f"We've Received Your Inquiry — {company}",
                html=render("contact_confirmation.html", inquiry=inquiry),
            ),
        )
        logger.info("contact_emails_sent", inquiry_id=inquiry.id, email=inquiry.email)
    except Exception as e:
        sent = False
        logger.error("contact_email_failed", inquiry_id=inquiry.id, error=str(e))

    await _ping_sales(
        LeadNotification(
            lead_id=inquiry.id,
            kind="contact",
            customer_name=inquiry.name,
            customer_email=inquiry.email,
            summary=inquiry.message,
        )
    )
    return sent
