"""Transaction repository with range lookups and grouped-sum queries.

Every query takes optional ``start``/``end`` datetimes; a missing bound leaves
that side of the range open. Both bounds are inclusive.
"""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.rules import Category
from app.models.transaction import Transaction
from app.repositories.base import BaseRepository


def _in_range(query: Select, start: datetime | None, end: datetime | None) -> Select:
    if start is not None:
        query = query.where(Transaction.timestamp >= start)
    if end is not None:
        query = query.where(Transaction.timestamp <= end)
    return query


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with filtering and analytics queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_customer(
        self,
        customer_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Transaction]:
        """Get a customer's transactions in a time window, oldest first."""
        query = select(Transaction).where(Transaction.customer_id == customer_id)
        query = _in_range(query, start, end).order_by(
            Transaction.timestamp.asc(), Transaction.id.asc()
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def sum_by_category(
        self,
        customer_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple[Category, Decimal]]:
        """
        Total amount per category, optionally for a single customer.
        Rows are ordered by category name.
        """
        total = func.sum(Transaction.amount).label("total")
        query = select(Transaction.category, total).group_by(Transaction.category)
        if customer_id is not None:
            query = query.where(Transaction.customer_id == customer_id)
        query = _in_range(query, start, end).order_by(Transaction.category.asc())

        result = await self.db.execute(query)
        return [(row.category, Decimal(row.total)) for row in result]

    async def top_categories(
        self,
        limit: int,
        customer_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple[Category, Decimal]]:
        """
        Total amount per category, highest first, truncated to ``limit`` rows.
        Equal totals are ordered by category name.
        """
        total = func.sum(Transaction.amount).label("total")
        query = select(Transaction.category, total).group_by(Transaction.category)
        if customer_id is not None:
            query = query.where(Transaction.customer_id == customer_id)
        query = (
            _in_range(query, start, end)
            .order_by(total.desc(), Transaction.category.asc())
            .limit(limit)
        )

        result = await self.db.execute(query)
        return [(row.category, Decimal(row.total)) for row in result]

    async def top_customers(
        self,
        limit: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple[UUID, Decimal]]:
        """
        Total amount per customer, highest first, truncated to ``limit`` rows.
        """
        total = func.sum(Transaction.amount).label("total")
        query = select(Transaction.customer_id, total).group_by(Transaction.customer_id)
        query = (
            _in_range(query, start, end)
            .order_by(total.desc(), Transaction.customer_id.asc())
            .limit(limit)
        )

        result = await self.db.execute(query)
        return [(row.customer_id, Decimal(row.total)) for row in result]
