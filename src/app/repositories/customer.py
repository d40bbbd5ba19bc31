"""Customer repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer
from app.repositories.base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    """Repository for Customer model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Customer)

    async def get_by_email(self, email: str) -> Customer | None:
        """Find a customer by its natural key."""
        result = await self.db.execute(select(Customer).where(Customer.email == email))
        return result.scalar_one_or_none()

    async def exists(self, customer_id: UUID) -> bool:
        result = await self.db.execute(select(Customer.id).where(Customer.id == customer_id))
        return result.scalar_one_or_none() is not None
