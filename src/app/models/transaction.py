"""Transaction model representing a single ingested financial transaction."""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.categorization.rules import Category
from app.models.base import BaseModel
from app.models.types import Money


class Transaction(BaseModel):
    """Transaction owned by exactly one customer and assigned exactly one category."""

    __tablename__ = "transactions"

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Identifier from the source file; not unique across sources.
    external_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    merchant: Mapped[str | None] = mapped_column(String(255), nullable=True)
    merchant_category_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Money(), nullable=False)
    category: Mapped[Category] = mapped_column(
        Enum(Category, native_enum=False, length=20), nullable=False, index=True
    )

    __table_args__ = (
        Index("ix_transactions_customer_id_timestamp", "customer_id", "timestamp"),
    )

    # Relationships
    customer: Mapped["Customer"] = relationship("Customer", back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, merchant={self.merchant}, "
            f"amount={self.amount}, category={self.category})>"
        )
