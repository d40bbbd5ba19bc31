"""Pydantic schemas for spend summaries and rankings.

Monetary values are ``Decimal`` and serialize to JSON strings so no precision
is lost in transit.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.categorization.rules import Category


class CategoryBreakdownEntry(BaseModel):
    """Total spent in one category."""

    category: Category
    total: Decimal


class OverallSummary(BaseModel):
    """Spending across all customers within a period."""

    period_description: str = Field(description="Human-readable period, e.g. 'All time'")
    total_spent: Decimal = Field(description="Sum of all category totals")
    breakdown: list[CategoryBreakdownEntry] = Field(default_factory=list)
    top_category: Category | None = Field(
        None, description="Category with the highest total (null when there is no spend)"
    )


class CustomerSummary(OverallSummary):
    """Spending of a single customer within a period."""

    customer_id: UUID


class TopSpender(BaseModel):
    """A customer and their total spend."""

    customer_id: UUID
    total_spent: Decimal


class TopCategory(BaseModel):
    """A category and its total spend."""

    category: Category
    total_spent: Decimal
