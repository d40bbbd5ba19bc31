"""Spending aggregation service.

Turns grouped-sum queries into summary and ranking responses. All operations
accept an optional calendar-date range: ``start`` covers its whole day from
midnight, ``end`` covers its whole day up to the last instant, and a missing
bound leaves that side open.
"""

from datetime import date, datetime, time
from decimal import Context, Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.rules import Category
from app.core.exceptions import CustomerNotFoundError
from app.models.transaction import Transaction
from app.models.types import MONEY_PRECISION
from app.repositories.customer import CustomerRepository
from app.repositories.transaction import TransactionRepository
from app.schemas.summary import (
    CategoryBreakdownEntry,
    CustomerSummary,
    OverallSummary,
    TopCategory,
    TopSpender,
)

# Category totals can carry every digit of a NUMERIC(38, 2) sum; the default
# 28-digit context would round them.
_TOTALS = Context(prec=2 * MONEY_PRECISION)


def period_bounds(
    start: date | None, end: date | None
) -> tuple[datetime | None, datetime | None]:
    """Expand calendar dates to inclusive datetime bounds."""
    start_dt = datetime.combine(start, time.min) if start is not None else None
    end_dt = datetime.combine(end, time.max) if end is not None else None
    return start_dt, end_dt


def describe_period(start: date | None, end: date | None) -> str:
    """Human-readable label for a date range."""
    if start is None and end is None:
        return "All time"
    if start is not None and end is not None:
        return f"{start.isoformat()} to {end.isoformat()}"
    if start is not None:
        return f"From {start.isoformat()}"
    return f"Until {end.isoformat()}"


def _summarize(
    rows: list[tuple[Category, Decimal]],
) -> tuple[Decimal, list[CategoryBreakdownEntry], Category | None]:
    total = Decimal("0")
    breakdown: list[CategoryBreakdownEntry] = []
    top_category: Category | None = None
    top_value = Decimal("0")

    for category, amount in rows:
        breakdown.append(CategoryBreakdownEntry(category=category, total=amount))
        total = _TOTALS.add(total, amount)
        # Strict comparison: on ties the first category seen wins.
        if amount > top_value:
            top_value = amount
            top_category = category

    return total, breakdown, top_category


class SummaryService:
    """Service for spend summaries and rankings."""

    def __init__(self, db: AsyncSession):
        """Initialize summary service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.customer_repo = CustomerRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def _ensure_customer(self, customer_id: UUID) -> None:
        if not await self.customer_repo.exists(customer_id):
            raise CustomerNotFoundError(customer_id)

    async def customer_summary(
        self, customer_id: UUID, start: date | None = None, end: date | None = None
    ) -> CustomerSummary:
        """Summarize one customer's spending by category.

        Args:
            customer_id: Customer ID
            start: Optional first day of the range
            end: Optional last day of the range (inclusive)

        Returns:
            CustomerSummary with total, breakdown and top category

        Raises:
            CustomerNotFoundError: If the customer does not exist
        """
        await self._ensure_customer(customer_id)
        start_dt, end_dt = period_bounds(start, end)
        rows = await self.transaction_repo.sum_by_category(customer_id, start_dt, end_dt)
        total, breakdown, top_category = _summarize(rows)

        return CustomerSummary(
            customer_id=customer_id,
            period_description=describe_period(start, end),
            total_spent=total,
            breakdown=breakdown,
            top_category=top_category,
        )

    async def overall_summary(
        self, start: date | None = None, end: date | None = None
    ) -> OverallSummary:
        """Summarize spending across all customers by category."""
        start_dt, end_dt = period_bounds(start, end)
        rows = await self.transaction_repo.sum_by_category(None, start_dt, end_dt)
        total, breakdown, top_category = _summarize(rows)

        return OverallSummary(
            period_description=describe_period(start, end),
            total_spent=total,
            breakdown=breakdown,
            top_category=top_category,
        )

    async def top_spenders(
        self, count: int, start: date | None = None, end: date | None = None
    ) -> list[TopSpender]:
        """Customers with the highest total spend, highest first."""
        start_dt, end_dt = period_bounds(start, end)
        rows = await self.transaction_repo.top_customers(count, start_dt, end_dt)
        return [
            TopSpender(customer_id=customer_id, total_spent=amount)
            for customer_id, amount in rows
        ]

    async def top_categories_for_customer(
        self,
        customer_id: UUID,
        count: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[TopCategory]:
        """A customer's categories with the highest spend, highest first."""
        start_dt, end_dt = period_bounds(start, end)
        rows = await self.transaction_repo.top_categories(
            count, customer_id, start_dt, end_dt
        )
        return [TopCategory(category=category, total_spent=amount) for category, amount in rows]

    async def top_categories_overall(
        self, count: int, start: date | None = None, end: date | None = None
    ) -> list[TopCategory]:
        """Categories with the highest spend across all customers."""
        start_dt, end_dt = period_bounds(start, end)
        rows = await self.transaction_repo.top_categories(count, None, start_dt, end_dt)
        return [TopCategory(category=category, total_spent=amount) for category, amount in rows]

    async def customer_transactions(
        self, customer_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Transaction]:
        """Raw transactions of one customer inside the range, oldest first."""
        start_dt, end_dt = period_bounds(start, end)
        return await self.transaction_repo.get_by_customer(customer_id, start_dt, end_dt)
