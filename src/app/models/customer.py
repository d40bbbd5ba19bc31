"""Customer model: the owner of ingested transactions."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Customer(BaseModel):
    """Customer created on first encounter during ingestion, keyed by email."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    # Rely on DB-level ON DELETE CASCADE; prevent SQLAlchemy from NULLing FKs on delete.
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="customer", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, email={self.email})>"
