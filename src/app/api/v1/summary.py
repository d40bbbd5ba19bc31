"""Overall (all-customer) summary endpoint."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_summary_service, require_admin
from app.models.user import User
from app.schemas.summary import OverallSummary
from app.services.summary import SummaryService

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get(
    "/overall",
    response_model=OverallSummary,
    summary="Overall spending summary",
    description="Total spend and per-category breakdown across all customers. Admin only.",
)
async def get_overall_summary(
    from_date: Annotated[
        date | None, Query(alias="from", description="Start date (inclusive)")
    ] = None,
    to_date: Annotated[date | None, Query(alias="to", description="End date (inclusive)")] = None,
    _: User = Depends(require_admin),
    service: SummaryService = Depends(get_summary_service),
) -> OverallSummary:
    return await service.overall_summary(from_date, to_date)
