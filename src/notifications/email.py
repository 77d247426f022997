"""Transactional email via the Resend HTTP API."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

from src.config import settings

logger = structlog.get_logger()


class EmailDeliveryError(Exception):
    """The email provider rejected the message or could not be reached."""


@dataclass
class EmailAttachment:
    filename: str
    content: bytes


class ResendMailer:
    """Sends HTML email through Resend."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        base_url: str = "https://api.resend.com",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def send(
        self,
        to: str,
        subject: str,
        html: str,
        reply_to: Optional[str] = None,
        attachments: Optional[list[EmailAttachment]] = None,
    ) -> str:
        """Send one email.

        Args:
            to: Recipient address
            subject: Subject line
            html: Rendered HTML body
            reply_to: Optional Reply-To address
            attachments: Optional file attachments

        Returns:
            Provider message id

        Raises:
            EmailDeliveryError: on transport failure or a non-2xx response
        """
        payload: dict = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to
        if attachments:
            payload["attachments"] = [
                {
                    "filename": a.filename,
                    "content": base64.b64encode(a.content).decode("ascii"),
                }
                for a in attachments
            ]

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=30.0) as client:
                response = await client.post(
                    f"{self.base_url}/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(str(e)) from e

        if response.is_error:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise EmailDeliveryError(f"{response.status_code}: {message}")

        email_id = response.json().get("id", "")
        logger.info("email_sent", email_id=email_id, to=to, subject=subject)
        return email_id


_mailer: Optional[ResendMailer] = None


def get_mailer() -> ResendMailer:
    """Get or create the Resend mailer."""
    global _mailer
    if _mailer is None:
        _mailer = ResendMailer(
            api_key=settings.resend_api_key,
            sender=settings.email_from,
            base_url=settings.resend_api_url,
        )
    return _mailer
