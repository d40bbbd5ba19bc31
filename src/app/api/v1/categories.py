"""Category ranking endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.api.deps import ensure_customer_access, get_current_user, get_summary_service
from app.config import settings
from app.models.user import User
from app.schemas.summary import TopCategory
from app.services.summary import SummaryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "/top-categories",
    response_model=list[TopCategory],
    summary="Top spending categories",
    description="""
    Categories ranked by total spend (highest first).

    - Without **customerId**: across all customers (admin only)
    - With **customerId**: for that customer (self or admin)
    """,
)
async def get_top_categories(
    count: Annotated[int, Query(ge=1, description="Number of categories to return")] = (
        settings.default_top_count
    ),
    customer_id: Annotated[
        UUID | None, Query(alias="customerId", description="Restrict to one customer")
    ] = None,
    from_date: Annotated[
        date | None, Query(alias="from", description="Start date (inclusive)")
    ] = None,
    to_date: Annotated[date | None, Query(alias="to", description="End date (inclusive)")] = None,
    current_user: User = Depends(get_current_user),
    service: SummaryService = Depends(get_summary_service),
) -> list[TopCategory]:
    ensure_customer_access(current_user, customer_id)
    if customer_id is None:
        return await service.top_categories_overall(count, from_date, to_date)
    return await service.top_categories_for_customer(customer_id, count, from_date, to_date)
