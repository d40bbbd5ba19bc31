"""Transaction response schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.categorization.rules import Category


class TransactionResponse(BaseModel):
    """A stored transaction as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    external_id: str | None
    timestamp: datetime
    description: str | None
    merchant: str | None
    merchant_category_code: str | None
    amount: Decimal
    category: Category
