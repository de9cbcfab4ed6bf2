import logging
from datetime import timedelta
from typing import List

from sqlalchemy.orm import Session

from rocketfist.crud import class_instance as instance_crud
from rocketfist.crud import class_template as template_crud
from rocketfist.crud import registration as registration_crud
from rocketfist.database import transactional
from rocketfist.errors.base_errors import InvalidInputError
from rocketfist.errors.schedule_errors import (
    ClassInstanceNotFoundError,
    ClassTemplateNotFoundError,
    InactiveClassTemplateError,
    InstanceAlreadyExistsError,
    InstanceStateError,
)
from rocketfist.models import ClassInstance, InstanceStatus
from rocketfist.schemas.class_instance import ClassInstanceCreate, ClassInstanceResponse
from rocketfist.services.gym import require_gym
from rocketfist.services.schedule_expansion import capacity_for_template
from rocketfist.utils.ids import parse_uuid
from rocketfist.utils.timeutils import as_utc, local_day_window, parse_date_range

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, db: Session):
        self.db = db

    def with_counts(self, instances: List[ClassInstance]) -> List[ClassInstanceResponse]:
        """Attaches reserved/checked-in counts, recomputed from registrations."""
        counts = instance_crud.count_registrations_by_instance(self.db, [i.id for i in instances])
        result = []
        for instance in instances:
            reserved, checked_in = counts.get(instance.id, (0, 0))
            response = ClassInstanceResponse.model_validate(instance)
            result.append(response.model_copy(update={"reserved_count": reserved, "checked_in_count": checked_in}))
        return result

    def get_schedule(self, gym_id: str, start: str, end: str) -> List[ClassInstanceResponse]:
        """
        Instances starting within the full local days [start, end] of the gym's
        timezone, ordered by start time.
        """
        start_d, end_d = parse_date_range(start, end, "start", "end")
        gym = require_gym(self.db, gym_id)

        lower, upper = local_day_window(start_d, end_d, gym.timezone)
        logger.debug(f"Schedule for gym {gym.id} between {lower} and {upper}")
        instances = instance_crud.get_instances_in_window(self.db, gym.id, lower, upper)
        return self.with_counts(instances)

    def get_instance(self, gym_id: str, instance_id: str) -> ClassInstance:
        instance_id = parse_uuid(instance_id, "Invalid class instance ID format")
        gym = require_gym(self.db, gym_id)
        instance = instance_crud.get_instance(self.db, gym.id, instance_id)
        if not instance:
            raise ClassInstanceNotFoundError()
        return instance

    def create_instance(self, gym_id: str, instance_data: ClassInstanceCreate) -> ClassInstanceResponse:
        template_id = parse_uuid(instance_data.class_template_id, "Invalid class ID format")
        coach_id = None
        if instance_data.coach_user_id:
            coach_id = parse_uuid(instance_data.coach_user_id, "Invalid coach ID format")
        gym = require_gym(self.db, gym_id)

        template = template_crud.get_class_template(self.db, gym.id, template_id)
        if not template:
            raise ClassTemplateNotFoundError()
        if not template.is_active:
            raise InactiveClassTemplateError(template.name)

        try:
            start_time = as_utc(instance_data.start_time)
            end_time = start_time + timedelta(minutes=template.default_duration_minutes)
        except OverflowError:
            raise InvalidInputError("start_time is out of the supported date range")
        max_capacity = instance_data.max_capacity
        if max_capacity is None:
            max_capacity = capacity_for_template(template)

        with transactional(self.db):
            inserted = instance_crud.insert_instance_if_absent(
                self.db,
                class_template_id=template.id,
                gym_id=gym.id,
                coach_user_id=coach_id or template.default_coach_user_id,
                start_time=start_time,
                end_time=end_time,
                max_capacity=max_capacity,
            )
            if not inserted:
                raise InstanceAlreadyExistsError()

        instance = instance_crud.get_template_instances(self.db, template.id, [start_time])[0]
        logger.info(f"Scheduled class {template.name} at {start_time} for gym {gym.id}")
        return self.with_counts([instance])[0]

    def cancel_instance(self, gym_id: str, instance_id: str) -> ClassInstanceResponse:
        """scheduled -> cancelled. Open reservations are cancelled with it."""
        return self._transition(gym_id, instance_id, InstanceStatus.CANCELLED)

    def complete_instance(self, gym_id: str, instance_id: str) -> ClassInstanceResponse:
        return self._transition(gym_id, instance_id, InstanceStatus.COMPLETED)

    def _transition(self, gym_id: str, instance_id: str, target: InstanceStatus) -> ClassInstanceResponse:
        instance_id = parse_uuid(instance_id, "Invalid class instance ID format")
        gym = require_gym(self.db, gym_id)

        with transactional(self.db):
            instance = instance_crud.get_instance(self.db, gym.id, instance_id, for_update=True)
            if not instance:
                raise ClassInstanceNotFoundError()
            if instance.status != InstanceStatus.SCHEDULED:
                raise InstanceStateError(instance.status.value, target.value)

            instance_crud.set_instance_status(self.db, instance, target)
            if target == InstanceStatus.CANCELLED:
                cancelled = registration_crud.cancel_open_registrations(self.db, instance.id)
                logger.info(f"Cancelled class instance {instance.id}, {cancelled} reservations released")
            else:
                logger.info(f"Completed class instance {instance.id}")

        self.db.refresh(instance)
        return self.with_counts([instance])[0]
