"""Customer-scoped summary and transaction endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.api.deps import (
    ensure_customer_access,
    get_current_user,
    get_summary_service,
    require_admin,
)
from app.config import settings
from app.models.user import User
from app.schemas.summary import CustomerSummary, TopSpender
from app.schemas.transaction import TransactionResponse
from app.services.summary import SummaryService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get(
    "/top-spenders",
    response_model=list[TopSpender],
    summary="Top spending customers",
    description="""
    Customers ranked by total spend (highest first). Admin only.

    - **count**: number of customers to return (default 5, minimum 1)
    - **from**, **to**: optional inclusive date range
    """,
)
async def get_top_spenders(
    count: Annotated[int, Query(ge=1, description="Number of customers to return")] = (
        settings.default_top_count
    ),
    from_date: Annotated[
        date | None, Query(alias="from", description="Start date (inclusive)")
    ] = None,
    to_date: Annotated[date | None, Query(alias="to", description="End date (inclusive)")] = None,
    _: User = Depends(require_admin),
    service: SummaryService = Depends(get_summary_service),
) -> list[TopSpender]:
    return await service.top_spenders(count, from_date, to_date)


@router.get(
    "/{customer_id}/summary",
    response_model=CustomerSummary,
    summary="Customer spending summary",
    description="""
    Total spend, per-category breakdown and top category for one customer.

    Users may read their own customer only; admins may read any customer.
    """,
    responses={
        403: {"description": "Caller is not the owner or an admin"},
        404: {"description": "Customer not found"},
    },
)
async def get_customer_summary(
    customer_id: UUID,
    from_date: Annotated[
        date | None, Query(alias="from", description="Start date (inclusive)")
    ] = None,
    to_date: Annotated[date | None, Query(alias="to", description="End date (inclusive)")] = None,
    current_user: User = Depends(get_current_user),
    service: SummaryService = Depends(get_summary_service),
) -> CustomerSummary:
    """
    Summarize a customer's spending.

    Args:
        customer_id: Customer ID
        from_date: Optional start date
        to_date: Optional end date
        current_user: Authenticated user
        service: Summary service

    Returns:
        CustomerSummary for the requested period
    """
    ensure_customer_access(current_user, customer_id)
    return await service.customer_summary(customer_id, from_date, to_date)


@router.get(
    "/{customer_id}/transactions",
    response_model=list[TransactionResponse],
    summary="List a customer's transactions",
    description="Raw transactions for one customer, oldest first. Self or admin only.",
)
async def list_customer_transactions(
    customer_id: UUID,
    from_date: Annotated[
        date | None, Query(alias="from", description="Start date (inclusive)")
    ] = None,
    to_date: Annotated[date | None, Query(alias="to", description="End date (inclusive)")] = None,
    current_user: User = Depends(get_current_user),
    service: SummaryService = Depends(get_summary_service),
) -> list[TransactionResponse]:
    ensure_customer_access(current_user, customer_id)
    transactions = await service.customer_transactions(customer_id, from_date, to_date)
    return [TransactionResponse.model_validate(txn) for txn in transactions]
