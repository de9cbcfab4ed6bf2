from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rocketfist.auth.permissions import get_current_role
from rocketfist.dependencies import get_db
from rocketfist.models import STAFF_ROLES
from rocketfist.schemas.class_instance import ClassInstanceCreate, ClassInstanceResponse
from rocketfist.schemas.registration import RegistrationCreate, RegistrationResponse, RosterResponse
from rocketfist.services.roster import RosterService
from rocketfist.services.schedule import ScheduleService

router = APIRouter(prefix="/gyms/{gym_id}/schedule", tags=["Schedule"])


@router.get("", response_model=List[ClassInstanceResponse])
def get_schedule_endpoint(
    gym_id: str,
    start: str = Query(None, description="YYYY-MM-DD"),
    end: str = Query(None, description="YYYY-MM-DD"),
    db: Session = Depends(get_db),
):
    """Class instances starting between start and end (inclusive local days), by start time."""
    return ScheduleService(db).get_schedule(gym_id, start, end)


@router.post("", response_model=ClassInstanceResponse, status_code=201)
def create_instance_endpoint(
    gym_id: str,
    instance_data: ClassInstanceCreate,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return ScheduleService(db).create_instance(gym_id, instance_data)


@router.post("/{instance_id}/cancel", response_model=ClassInstanceResponse)
def cancel_instance_endpoint(
    gym_id: str,
    instance_id: str,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return ScheduleService(db).cancel_instance(gym_id, instance_id)


@router.post("/{instance_id}/complete", response_model=ClassInstanceResponse)
def complete_instance_endpoint(
    gym_id: str,
    instance_id: str,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return ScheduleService(db).complete_instance(gym_id, instance_id)


@router.get("/{instance_id}/roster", response_model=RosterResponse)
def get_roster_endpoint(gym_id: str, instance_id: str, db: Session = Depends(get_db)):
    """Non-cancelled reservations in booking order with reserved/checked-in counts."""
    return RosterService(db).get_roster(gym_id, instance_id)


@router.post("/{instance_id}/registrations", response_model=RegistrationResponse, status_code=201)
def register_endpoint(
    gym_id: str,
    instance_id: str,
    registration_data: RegistrationCreate,
    role: str = Depends(get_current_role()),
    db: Session = Depends(get_db),
):
    return RosterService(db).register_member(gym_id, instance_id, registration_data)
