from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rocketfist.auth.permissions import get_current_role
from rocketfist.dependencies import get_db
from rocketfist.models import STAFF_ROLES
from rocketfist.schemas.registration import RegistrationResponse, RosterResponse
from rocketfist.services.roster import RosterService

router = APIRouter(prefix="/gyms/{gym_id}/registrations", tags=["Registrations"])


@router.post("/{registration_id}/check-in", response_model=RosterResponse)
def check_in_endpoint(
    gym_id: str,
    registration_id: str,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    """Marks the member present. Repeating the call is harmless."""
    return RosterService(db).mark_present(gym_id, registration_id)


@router.post("/{registration_id}/no-show", response_model=RosterResponse)
def no_show_endpoint(
    gym_id: str,
    registration_id: str,
    role: str = Depends(get_current_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return RosterService(db).mark_no_show(gym_id, registration_id)


@router.post("/{registration_id}/cancel", response_model=RegistrationResponse)
def cancel_registration_endpoint(
    gym_id: str,
    registration_id: str,
    role: str = Depends(get_current_role()),
    db: Session = Depends(get_db),
):
    return RosterService(db).cancel_registration(gym_id, registration_id)
