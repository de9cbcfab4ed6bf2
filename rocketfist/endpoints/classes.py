from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rocketfist.auth.permissions import get_current_role
from rocketfist.dependencies import get_db
from rocketfist.models import MANAGER_ROLES, STAFF_ROLES
from rocketfist.schemas.class_instance import ExpandScheduleRequest, ExpandScheduleResponse
from rocketfist.schemas.class_template import (
    ClassTemplateCreate,
    ClassTemplateResponse,
    ClassTemplateUpdate,
    WeeklySlot,
)
from rocketfist.services.class_template import ClassTemplateService
from rocketfist.services.schedule import ScheduleService
from rocketfist.services.schedule_expansion import ScheduleExpansionService

router = APIRouter(prefix="/gyms/{gym_id}/classes", tags=["Classes"])


@router.get("", response_model=List[ClassTemplateResponse])
def list_classes_endpoint(gym_id: str, db: Session = Depends(get_db)):
    """Class templates of a gym with their weekly pattern."""
    return ClassTemplateService(db).list_templates(gym_id)


@router.post("", response_model=ClassTemplateResponse, status_code=201)
def create_class_endpoint(
    gym_id: str,
    template_data: ClassTemplateCreate,
    role: str = Depends(get_current_role(MANAGER_ROLES)),
    db: Session = Depends(get_db),
):
    return ClassTemplateService(db).create_template(gym_id, template_data)


@router.patch("/{class_id}", response_model=ClassTemplateResponse)
def update_class_endpoint(
    gym_id: str,
    class_id: str,
    update_data: ClassTemplateUpdate,
    role: str = Depends(get_current_role(MANAGER_ROLES)),
    db: Session = Depends(get_db),
):
    """Updates template fields. Setting is_active to false stops further scheduling."""
    return ClassTemplateService(db).update_template(gym_id, class_id, update_data)


@router.put("/{class_id}/schedule", response_model=ClassTemplateResponse)
def replace_class_schedule_endpoint(
    gym_id: str,
    class_id: str,
    slots: List[WeeklySlot],
    role: str = Depends(get_current_role(MANAGER_ROLES)),
    db: Session = Depends(get_db),
):
    return ClassTemplateService(db).replace_schedule(gym_id, class_id, slots)


@router.post("/{class_id}/expand", response_model=ExpandScheduleResponse)
def expand_class_schedule_endpoint(
    gym_id: str,
    class_id: str,
    request: ExpandScheduleRequest,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    """
    Creates class instances from the weekly pattern for weeks start_week..end_week
    around the anchor (default: now). Instances that already exist are skipped.
    """
    created, skipped, instances = ScheduleExpansionService(db).expand_template(gym_id, class_id, request)
    return ExpandScheduleResponse(
        created=created,
        skipped=skipped,
        instances=ScheduleService(db).with_counts(instances),
    )
