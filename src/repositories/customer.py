"""Customer repository — orders and payments for the portal."""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.customer import CustomerOrder, CustomerPayment


class CustomerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def orders_for(self, customer_id: str) -> Sequence[CustomerOrder]:
        result = await self.db.execute(
            select(CustomerOrder)
            .where(CustomerOrder.customer_id == customer_id)
            .order_by(CustomerOrder.created_at.desc())
        )
        return result.scalars().all()

    async def payments_for(self, customer_id: str) -> Sequence[CustomerPayment]:
        result = await self.db.execute(
            select(CustomerPayment)
            .where(CustomerPayment.customer_id == customer_id)
            .order_by(CustomerPayment.created_at.desc())
        )
        return result.scalars().all()
