from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from rocketfist.models.registration import RegistrationStatus


class RegistrationCreate(BaseModel):
    member_id: str


class RegistrationResponse(BaseModel):
    id: str
    class_instance_id: str
    member_id: str
    status: RegistrationStatus
    checked_in_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RosterEntry(BaseModel):
    reservation_id: str
    member_id: str
    member_name: Optional[str] = None
    status: RegistrationStatus
    checked_in_at: Optional[datetime] = None


class RosterResponse(BaseModel):
    class_instance_id: str
    max_capacity: int
    reserved_count: int
    checked_in_count: int
    entries: List[RosterEntry]
