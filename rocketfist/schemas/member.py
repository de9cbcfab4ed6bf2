from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MemberResponse(BaseModel):
    """Gym user flattened with its profile."""
    id: str
    full_name: Optional[str] = None
    email: str
    role: str
    created_at: Optional[datetime] = None
    plan: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MembershipPlanResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price_cents: int
    billing_interval: str
    max_classes_per_interval: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
