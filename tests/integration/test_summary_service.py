"""Integration tests for SummaryService against a real database."""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from app.categorization.rules import Category
from app.core.exceptions import CustomerNotFoundError
from app.services.summary import SummaryService


@pytest.fixture
async def spend(make_customer, make_transaction):
    """Three customers spending 100 / 50 / 10 in January 2024."""
    alice = await make_customer("Alice", "alice@example.com")
    bob = await make_customer("Bob", "bob@example.com")
    carol = await make_customer("Carol", "carol@example.com")

    await make_transaction(alice, "30.00", Category.FOOD, datetime(2024, 1, 5, 9, 0))
    await make_transaction(alice, "20.00", Category.TRANSPORT, datetime(2024, 1, 6, 9, 0))
    await make_transaction(alice, "50.00", Category.FOOD, datetime(2024, 1, 31, 23, 59, 59))
    await make_transaction(bob, "50.00", Category.TRAVEL, datetime(2024, 1, 10, 12, 0))
    await make_transaction(carol, "10.00", Category.FOOD, datetime(2024, 1, 1, 0, 0))

    return {"alice": alice, "bob": bob, "carol": carol}


class TestCustomerSummary:
    @pytest.mark.asyncio
    async def test_totals_breakdown_and_top(self, db_session, make_customer, make_transaction):
        customer = await make_customer("Dana", "dana@example.com")
        await make_transaction(customer, "30.00", Category.FOOD)
        await make_transaction(customer, "20.00", Category.TRANSPORT)

        summary = await SummaryService(db_session).customer_summary(customer.id)

        assert summary.customer_id == customer.id
        assert summary.period_description == "All time"
        assert summary.total_spent == Decimal("50")
        assert summary.top_category == Category.FOOD
        assert [(e.category, e.total) for e in summary.breakdown] == [
            (Category.FOOD, Decimal("30")),
            (Category.TRANSPORT, Decimal("20")),
        ]

    @pytest.mark.asyncio
    async def test_customer_without_transactions(self, db_session, test_customer):
        summary = await SummaryService(db_session).customer_summary(test_customer.id)

        assert summary.total_spent == Decimal("0")
        assert summary.breakdown == []
        assert summary.top_category is None

    @pytest.mark.asyncio
    async def test_unknown_customer(self, db_session):
        with pytest.raises(CustomerNotFoundError) as exc_info:
            await SummaryService(db_session).customer_summary(uuid4())

        assert exc_info.value.http_status == 404

    @pytest.mark.asyncio
    async def test_end_date_covers_whole_day(self, db_session, spend):
        summary = await SummaryService(db_session).customer_summary(
            spend["alice"].id, date(2024, 1, 31), date(2024, 1, 31)
        )

        assert summary.total_spent == Decimal("50")
        assert summary.period_description == "2024-01-31 to 2024-01-31"

    @pytest.mark.asyncio
    async def test_range_excludes_outside_days(self, db_session, spend):
        summary = await SummaryService(db_session).customer_summary(
            spend["alice"].id, date(2024, 1, 6), date(2024, 1, 30)
        )

        assert summary.total_spent == Decimal("20")
        assert summary.top_category == Category.TRANSPORT

    @pytest.mark.asyncio
    async def test_repeated_calls_identical(self, db_session, spend):
        service = SummaryService(db_session)

        first = await service.customer_summary(spend["alice"].id)
        second = await service.customer_summary(spend["alice"].id)

        assert first == second


class TestOverallSummary:
    @pytest.mark.asyncio
    async def test_all_customers(self, db_session, spend):
        summary = await SummaryService(db_session).overall_summary()

        assert summary.total_spent == Decimal("160")
        assert summary.top_category == Category.FOOD
        totals = {e.category: e.total for e in summary.breakdown}
        assert totals == {
            Category.FOOD: Decimal("90"),
            Category.TRANSPORT: Decimal("20"),
            Category.TRAVEL: Decimal("50"),
        }

    @pytest.mark.asyncio
    async def test_empty_store(self, db_session):
        summary = await SummaryService(db_session).overall_summary()

        assert summary.total_spent == Decimal("0")
        assert summary.top_category is None

    @pytest.mark.asyncio
    async def test_from_only(self, db_session, spend):
        summary = await SummaryService(db_session).overall_summary(start=date(2024, 1, 10))

        assert summary.period_description == "From 2024-01-10"
        assert summary.total_spent == Decimal("100")


class TestRankings:
    @pytest.mark.asyncio
    async def test_top_spenders(self, db_session, spend):
        ranking = await SummaryService(db_session).top_spenders(2)

        assert [(r.customer_id, r.total_spent) for r in ranking] == [
            (spend["alice"].id, Decimal("100")),
            (spend["bob"].id, Decimal("50")),
        ]

    @pytest.mark.asyncio
    async def test_top_spenders_count_larger_than_customers(self, db_session, spend):
        ranking = await SummaryService(db_session).top_spenders(10)

        assert len(ranking) == 3
        assert ranking[-1].customer_id == spend["carol"].id

    @pytest.mark.asyncio
    async def test_top_spenders_in_range(self, db_session, spend):
        ranking = await SummaryService(db_session).top_spenders(
            5, date(2024, 1, 1), date(2024, 1, 1)
        )

        assert [(r.customer_id, r.total_spent) for r in ranking] == [
            (spend["carol"].id, Decimal("10")),
        ]

    @pytest.mark.asyncio
    async def test_top_categories_overall(self, db_session, spend):
        ranking = await SummaryService(db_session).top_categories_overall(2)

        assert [(r.category, r.total_spent) for r in ranking] == [
            (Category.FOOD, Decimal("90")),
            (Category.TRAVEL, Decimal("50")),
        ]

    @pytest.mark.asyncio
    async def test_top_categories_for_customer(self, db_session, spend):
        ranking = await SummaryService(db_session).top_categories_for_customer(
            spend["alice"].id, 5
        )

        assert [(r.category, r.total_spent) for r in ranking] == [
            (Category.FOOD, Decimal("80")),
            (Category.TRANSPORT, Decimal("20")),
        ]

    @pytest.mark.asyncio
    async def test_customer_transactions_oldest_first(self, db_session, spend):
        transactions = await SummaryService(db_session).customer_transactions(spend["alice"].id)

        assert [t.amount for t in transactions] == [
            Decimal("30.00"),
            Decimal("20.00"),
            Decimal("50.00"),
        ]

    @pytest.mark.asyncio
    async def test_customer_transactions_unknown_customer(self, db_session, spend):
        assert await SummaryService(db_session).customer_transactions(uuid4()) == []
