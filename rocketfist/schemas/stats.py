from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CurrencyRevenue(BaseModel):
    currency: str
    total_revenue_cents: int = Field(..., alias="totalRevenueCents")

    model_config = ConfigDict(populate_by_name=True)


class RevenueStatsResponse(BaseModel):
    total_revenue_cents: int = Field(..., alias="totalRevenueCents")
    currency: str
    by_currency: List[CurrencyRevenue] = Field(default_factory=list, alias="byCurrency")

    model_config = ConfigDict(populate_by_name=True)
