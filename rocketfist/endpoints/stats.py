from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rocketfist.dependencies import get_db
from rocketfist.schemas.stats import RevenueStatsResponse
from rocketfist.services.revenue import RevenueService

router = APIRouter(prefix="/gyms/{gym_id}/stats", tags=["Stats"])


@router.get("/revenue", response_model=RevenueStatsResponse)
def get_revenue_stats_endpoint(
    gym_id: str,
    date_from: str = Query(None, alias="from", description="YYYY-MM-DD"),
    date_to: str = Query(None, alias="to", description="YYYY-MM-DD"),
    currency: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return RevenueService(db).get_revenue_stats(gym_id, date_from, date_to, currency)
