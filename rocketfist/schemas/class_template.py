from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WeeklySlot(BaseModel):
    """One weekly occurrence: day_of_week 0 = Sunday ... 6 = Saturday, local gym time."""
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday, 6 = Saturday")
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(0, ge=0, le=59)

    model_config = ConfigDict(from_attributes=True)


class ClassTemplateResponse(BaseModel):
    id: str
    gym_id: str
    name: str
    description: Optional[str] = None
    discipline: str
    skill_level: str
    default_duration_minutes: int
    default_capacity: Optional[int] = None
    default_coach_user_id: Optional[str] = None
    is_active: bool
    schedule: List[WeeklySlot] = Field(default_factory=list, validation_alias="schedule_slots")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ClassTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    discipline: str = Field(..., min_length=1)
    skill_level: str = Field(..., min_length=1)
    default_duration_minutes: int = Field(..., gt=0)
    default_capacity: Optional[int] = Field(None, gt=0)
    default_coach_user_id: Optional[str] = None
    is_active: bool = True
    schedule: List[WeeklySlot] = Field(default_factory=list)

    @field_validator("discipline", "skill_level")
    def normalize_category(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("must not be blank")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Beginner BJJ",
                    "discipline": "bjj",
                    "skill_level": "beginner",
                    "default_duration_minutes": 60,
                    "schedule": [
                        {"day_of_week": 1, "hour": 18, "minute": 0},
                        {"day_of_week": 3, "hour": 18, "minute": 0},
                        {"day_of_week": 5, "hour": 18, "minute": 0},
                    ],
                }
            ]
        }
    )


# Columns that are NOT NULL on the template
REQUIRED_TEMPLATE_FIELDS = ("name", "discipline", "skill_level", "default_duration_minutes", "is_active")


class ClassTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    discipline: Optional[str] = Field(None, min_length=1)
    skill_level: Optional[str] = Field(None, min_length=1)
    default_duration_minutes: Optional[int] = Field(None, gt=0)
    default_capacity: Optional[int] = Field(None, gt=0)
    default_coach_user_id: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("discipline", "skill_level")
    def normalize_category(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def reject_nulls(self):
        for field in REQUIRED_TEMPLATE_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
