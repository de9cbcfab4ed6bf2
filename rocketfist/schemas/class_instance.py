from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rocketfist.models.class_instance import InstanceStatus
from rocketfist.schemas.class_template import WeeklySlot

MAX_EXPANSION_WEEKS = 52


class ClassSummary(BaseModel):
    name: str
    discipline: str

    model_config = ConfigDict(from_attributes=True)


class ClassInstanceResponse(BaseModel):
    id: str
    class_template_id: str
    gym_id: str
    coach_user_id: Optional[str] = None
    start_time: datetime
    end_time: datetime
    max_capacity: int
    status: InstanceStatus
    created_at: Optional[datetime] = None
    class_template: ClassSummary
    reserved_count: int = 0
    checked_in_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class ClassInstanceCreate(BaseModel):
    """One-off instance scheduled by staff."""
    class_template_id: str
    start_time: datetime
    coach_user_id: Optional[str] = None
    max_capacity: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def require_timezone(self):
        if self.start_time.tzinfo is None:
            raise ValueError("start_time must include a UTC offset")
        return self


class ExpandScheduleRequest(BaseModel):
    """
    Week offsets are relative to the anchor week: -1 is last week, 0 this week.
    The stored weekly pattern is used when ``pattern`` is omitted.
    """
    start_week: int = -1
    end_week: int = 1
    anchor: Optional[datetime] = None
    pattern: Optional[List[WeeklySlot]] = None

    @model_validator(mode="after")
    def check_window(self):
        if self.start_week > self.end_week:
            raise ValueError("start_week must be less than or equal to end_week")
        if self.end_week - self.start_week + 1 > MAX_EXPANSION_WEEKS:
            raise ValueError(f"Cannot expand more than {MAX_EXPANSION_WEEKS} weeks at once")
        return self

    @property
    def week_offsets(self) -> List[int]:
        return list(range(self.start_week, self.end_week + 1))


class ExpandScheduleResponse(BaseModel):
    created: int
    skipped: int
    instances: List[ClassInstanceResponse]
