import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rocketfist.config import config
from rocketfist.crud import class_instance as instance_crud
from rocketfist.crud import member as member_crud
from rocketfist.crud import registration as registration_crud
from rocketfist.database import transactional
from rocketfist.errors.gym_errors import MemberNotFoundError
from rocketfist.errors.registration_errors import (
    CapacityExceededError,
    CheckInTooEarlyError,
    DuplicateRegistrationError,
    RegistrationCancelledError,
    RegistrationNotFoundError,
    RegistrationStateError,
)
from rocketfist.errors.schedule_errors import ClassInstanceNotFoundError, InstanceNotScheduledError
from rocketfist.models import ClassInstance, InstanceStatus, Registration, RegistrationStatus
from rocketfist.schemas.registration import RegistrationCreate, RosterEntry, RosterResponse
from rocketfist.services.gym import require_gym
from rocketfist.utils.ids import parse_uuid
from rocketfist.utils.timeutils import as_utc, utc_now

logger = logging.getLogger(__name__)


class RosterService:
    """
    Reservations and attendance for class instances.

    Counts are always recomputed from the registrations table, so a roster
    read straight after a check-in reflects it.
    """

    def __init__(self, db: Session):
        self.db = db

    def build_roster(self, instance: ClassInstance) -> RosterResponse:
        rows = registration_crud.get_roster_rows(self.db, instance.id)
        entries = [
            RosterEntry(
                reservation_id=registration.id,
                member_id=registration.member_id,
                member_name=full_name,
                status=registration.status,
                checked_in_at=registration.checked_in_at,
            )
            for registration, full_name in rows
        ]
        checked_in = sum(1 for e in entries if e.status == RegistrationStatus.CHECKED_IN)
        reserved = sum(1 for e in entries if e.status in (RegistrationStatus.RESERVED, RegistrationStatus.CHECKED_IN))
        return RosterResponse(
            class_instance_id=instance.id,
            max_capacity=instance.max_capacity,
            reserved_count=reserved,
            checked_in_count=checked_in,
            entries=entries,
        )

    def get_roster(self, gym_id: str, instance_id: str) -> RosterResponse:
        instance_id = parse_uuid(instance_id, "Invalid class instance ID format")
        gym = require_gym(self.db, gym_id)
        instance = instance_crud.get_instance(self.db, gym.id, instance_id)
        if not instance:
            raise ClassInstanceNotFoundError()
        return self.build_roster(instance)

    def register_member(self, gym_id: str, instance_id: str, registration_data: RegistrationCreate) -> Registration:
        """
        Reserves a spot for a member.

        The instance row is locked while the capacity check and the insert run,
        so concurrent reservations cannot overfill the class.
        """
        instance_id = parse_uuid(instance_id, "Invalid class instance ID format")
        member_id = parse_uuid(registration_data.member_id, "Invalid member ID format")
        gym = require_gym(self.db, gym_id)

        try:
            with transactional(self.db):
                instance = instance_crud.get_instance(self.db, gym.id, instance_id, for_update=True)
                if not instance:
                    raise ClassInstanceNotFoundError()
                if instance.status != InstanceStatus.SCHEDULED:
                    raise InstanceNotScheduledError(instance.status.value)

                if not member_crud.get_gym_user(self.db, gym.id, member_id):
                    raise MemberNotFoundError()

                if registration_crud.get_active_registration(self.db, instance.id, member_id):
                    raise DuplicateRegistrationError()

                reserved = registration_crud.count_reserved(self.db, instance.id)
                if reserved >= instance.max_capacity:
                    logger.info(f"Class instance {instance.id} is full ({reserved}/{instance.max_capacity})")
                    raise CapacityExceededError(instance.max_capacity)

                registration = registration_crud.create_registration(self.db, instance.id, member_id)
        except IntegrityError:
            logger.warning(f"Concurrent reservation for member {member_id} on instance {instance_id}")
            raise DuplicateRegistrationError()

        logger.info(f"Member {member_id} reserved class instance {instance_id}")
        self.db.refresh(registration)
        return registration

    def mark_present(self, gym_id: str, registration_id: str) -> RosterResponse:
        """
        reserved -> checked_in.

        Marking an already checked-in reservation again changes nothing.
        """
        registration, instance = self._load_for_update(gym_id, registration_id)

        with transactional(self.db):
            if registration.status == RegistrationStatus.CHECKED_IN:
                logger.debug(f"Reservation {registration.id} already checked in")
            elif registration.status == RegistrationStatus.CANCELLED:
                raise RegistrationCancelledError()
            elif registration.status != RegistrationStatus.RESERVED:
                raise RegistrationStateError(registration.status.value, RegistrationStatus.CHECKED_IN.value)
            else:
                if instance.status == InstanceStatus.CANCELLED:
                    raise InstanceNotScheduledError(instance.status.value)
                now = utc_now()
                if config.ENFORCE_CHECK_IN_AFTER_START and now < as_utc(instance.start_time):
                    raise CheckInTooEarlyError()
                registration.status = RegistrationStatus.CHECKED_IN
                registration.checked_in_at = now
                logger.info(f"Reservation {registration.id} checked in to class instance {instance.id}")

        return self.build_roster(instance)

    def cancel_registration(self, gym_id: str, registration_id: str) -> Registration:
        """reserved -> cancelled; cancelling twice is a no-op."""
        registration, _ = self._load_for_update(gym_id, registration_id)

        with transactional(self.db):
            if registration.status == RegistrationStatus.RESERVED:
                registration.status = RegistrationStatus.CANCELLED
                registration.cancelled_at = utc_now()
                logger.info(f"Reservation {registration.id} cancelled")
            elif registration.status != RegistrationStatus.CANCELLED:
                raise RegistrationStateError(registration.status.value, RegistrationStatus.CANCELLED.value)

        self.db.refresh(registration)
        return registration

    def mark_no_show(self, gym_id: str, registration_id: str) -> RosterResponse:
        registration, instance = self._load_for_update(gym_id, registration_id)

        with transactional(self.db):
            if registration.status == RegistrationStatus.CANCELLED:
                raise RegistrationCancelledError()
            if registration.status == RegistrationStatus.RESERVED:
                registration.status = RegistrationStatus.NO_SHOW
                logger.info(f"Reservation {registration.id} marked as no-show")
            elif registration.status != RegistrationStatus.NO_SHOW:
                raise RegistrationStateError(registration.status.value, RegistrationStatus.NO_SHOW.value)

        return self.build_roster(instance)

    def _load_for_update(self, gym_id: str, registration_id: str):
        registration_id = parse_uuid(registration_id, "Invalid reservation ID format")
        gym = require_gym(self.db, gym_id)
        registration = registration_crud.get_registration(self.db, gym.id, registration_id, for_update=True)
        if not registration:
            raise RegistrationNotFoundError()
        return registration, registration.class_instance
