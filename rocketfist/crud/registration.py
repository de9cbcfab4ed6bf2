from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from rocketfist.models import (
    ClassInstance,
    Registration,
    RegistrationStatus,
    UserProfile,
    CAPACITY_STATUSES,
)
from rocketfist.utils.timeutils import utc_now


def get_registration(db: Session, gym_id: str, registration_id: str, *, for_update: bool = False) -> Optional[Registration]:
    """Registration scoped to the gym through its class instance."""
    query = (
        db.query(Registration)
        .join(ClassInstance, Registration.class_instance_id == ClassInstance.id)
        .filter(Registration.id == registration_id, ClassInstance.gym_id == gym_id)
    )
    if for_update:
        query = query.with_for_update(of=Registration)
    return query.first()


def get_active_registration(db: Session, instance_id: str, member_id: str) -> Optional[Registration]:
    return (
        db.query(Registration)
        .filter(
            Registration.class_instance_id == instance_id,
            Registration.member_id == member_id,
            Registration.status != RegistrationStatus.CANCELLED,
        )
        .first()
    )


def count_reserved(db: Session, instance_id: str) -> int:
    return (
        db.query(func.count(Registration.id))
        .filter(
            Registration.class_instance_id == instance_id,
            Registration.status.in_(CAPACITY_STATUSES),
        )
        .scalar()
    ) or 0


def get_roster_rows(db: Session, instance_id: str) -> List[Tuple[Registration, Optional[str]]]:
    """Non-cancelled registrations with member names, in reservation order."""
    return (
        db.query(Registration, UserProfile.full_name)
        .join(UserProfile, Registration.member_id == UserProfile.id)
        .filter(
            Registration.class_instance_id == instance_id,
            Registration.status != RegistrationStatus.CANCELLED,
        )
        .order_by(Registration.created_at, Registration.id)
        .all()
    )


def create_registration(db: Session, instance_id: str, member_id: str, status: RegistrationStatus = RegistrationStatus.RESERVED) -> Registration:
    registration = Registration(class_instance_id=instance_id, member_id=member_id, status=status)
    if status == RegistrationStatus.CHECKED_IN:
        registration.checked_in_at = utc_now()
    db.add(registration)
    db.flush()
    return registration


def cancel_open_registrations(db: Session, instance_id: str) -> int:
    """Cancels every reserved registration of an instance. Returns how many changed."""
    registrations = (
        db.query(Registration)
        .filter(
            Registration.class_instance_id == instance_id,
            Registration.status == RegistrationStatus.RESERVED,
        )
        .all()
    )
    now = utc_now()
    for registration in registrations:
        registration.status = RegistrationStatus.CANCELLED
        registration.cancelled_at = now
    db.flush()
    return len(registrations)
