"""Telegram notification service — sends new-lead cards to the sales chat."""

from __future__ import annotations

from html import escape
from typing import Optional

import structlog
from aiogram import Bot

from src.config import settings
from src.schemas.lead import LeadNotification

logger = structlog.get_logger()

LEAD_TEMPLATE = """🔔 <b>{title}</b>

👤 <b>Customer:</b> {customer_name}
✉️ <b>Email:</b> {customer_email}
📞 <b>Phone:</b> {customer_phone}
🚚 <b>Ship to:</b> {ship_to}

📝 {summary}

<i>{kind_label} #{lead_id}</i>"""

KIND_TITLES = {
    "quote": ("New parts quote request", "Quote"),
    "contact": ("New contact inquiry", "Inquiry"),
}

_bot: Optional[Bot] = None


def get_sales_bot() -> Optional[Bot]:
    """Bot for sales notifications, or None when Telegram is not configured."""
    global _bot
    if not settings.telegram_bot_token or settings.telegram_sales_chat_id is None:
        return None
    if _bot is None:
        _bot = Bot(token=settings.telegram_bot_token)
    return _bot


def format_lead_card(notification: LeadNotification) -> str:
    title, kind_label = KIND_TITLES[notification.kind]
    summary = notification.summary or "—"
    if len(summary) > 600:
        summary = summary[:600] + "…"

    return LEAD_TEMPLATE.format(
        title=title,
        customer_name=escape(notification.customer_name),
        customer_email=escape(notification.customer_email),
        customer_phone=escape(notification.customer_phone or "Not provided"),
        ship_to=escape(notification.ship_to or "Not provided"),
        summary=escape(summary),
        kind_label=kind_label,
        lead_id=notification.lead_id,
    )


class TelegramNotifier:
    """Sends formatted lead notifications via Telegram."""

    async def send_lead_notification(
        self,
        bot: Bot,
        chat_id: int,
        notification: LeadNotification,
    ) -> bool:
        """Send a lead notification to the sales chat.

        Args:
            bot: Telegram bot instance
            chat_id: Telegram chat ID of the sales team
            notification: Lead notification data

        Returns:
            True if sent successfully
        """
        try:
            await bot.send_message(
                chat_id=chat_id,
                text=format_lead_card(notification),
                parse_mode="HTML",
            )
            logger.info(
                "lead_notification_sent",
                chat_id=chat_id,
                lead_id=notification.lead_id,
                kind=notification.kind,
            )
            return True

        except Exception as e:
            logger.error(
                "lead_notification_failed",
                error=str(e),
                chat_id=chat_id,
                lead_id=notification.lead_id,
            )
            return False
