"""Customer orders and payments, keyed by the external identity subject."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, CreatedAtMixin, IntegerIdMixin, utcnow


class CustomerOrder(Base, IntegerIdMixin, CreatedAtMixin):
    __tablename__ = "customer_orders"

    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_email: Mapped[str] = mapped_column(String(200), nullable=False)
    quote_request_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    item_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    item_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    status: Mapped[str] = mapped_column(String(30), default="processing", nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class CustomerPayment(Base, IntegerIdMixin, CreatedAtMixin):
    __tablename__ = "customer_payments"

    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_email: Mapped[str] = mapped_column(String(200), nullable=False)
    order_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    amount: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(30), default="pending", nullable=False)
    method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    reference: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
