"""Lead models — quote requests and contact inquiries."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, CreatedAtMixin, IntegerIdMixin


class QuoteRequest(Base, IntegerIdMixin, CreatedAtMixin):
    __tablename__ = "quote_requests"

    # Subject claim of the portal session, if the customer was signed in
    customer_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    # Customer info
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    ship_to: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    items: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[Optional[str]] = mapped_column(String(30), default="pending")  # pending|quoted|closed


class ContactInquiry(Base, IntegerIdMixin, CreatedAtMixin):
    __tablename__ = "contact_inquiries"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
