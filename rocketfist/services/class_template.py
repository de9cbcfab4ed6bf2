import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rocketfist.crud import class_template as template_crud
from rocketfist.crud import member as member_crud
from rocketfist.database import transactional
from rocketfist.errors.gym_errors import CoachNotFoundError
from rocketfist.errors.schedule_errors import ClassTemplateNotFoundError, DuplicateClassNameError
from rocketfist.models import ClassTemplate, STAFF_ROLES
from rocketfist.schemas.class_template import ClassTemplateCreate, ClassTemplateUpdate, WeeklySlot
from rocketfist.services.gym import require_gym
from rocketfist.utils.ids import parse_uuid

logger = logging.getLogger(__name__)

# SQLite reports the columns, Postgres the constraint name
_DUPLICATE_NAME_MARKERS = ("uq_classes_gym_name", "classes.gym_id, classes.name")


def is_duplicate_name_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_NAME_MARKERS)


class ClassTemplateService:
    def __init__(self, db: Session):
        self.db = db

    def list_templates(self, gym_id: str) -> List[ClassTemplate]:
        gym = require_gym(self.db, gym_id)
        return template_crud.get_class_templates(self.db, gym.id)

    def create_template(self, gym_id: str, template_data: ClassTemplateCreate) -> ClassTemplate:
        if template_data.default_coach_user_id:
            template_data.default_coach_user_id = parse_uuid(
                template_data.default_coach_user_id, "Invalid coach ID format"
            )
        gym = require_gym(self.db, gym_id)
        self._check_coach(gym.id, template_data.default_coach_user_id)
        self._check_name_free(gym.id, template_data.name)

        try:
            with transactional(self.db):
                template = template_crud.create_class_template(self.db, gym.id, template_data)
        except IntegrityError as e:
            if is_duplicate_name_violation(e):
                raise DuplicateClassNameError(template_data.name)
            raise
        logger.info(f"Created class {template.name} for gym {gym.id}")
        self.db.refresh(template)
        return template

    def update_template(self, gym_id: str, template_id: str, update_data: ClassTemplateUpdate) -> ClassTemplate:
        if update_data.default_coach_user_id:
            update_data.default_coach_user_id = parse_uuid(
                update_data.default_coach_user_id, "Invalid coach ID format"
            )
        template = self._get(gym_id, template_id)
        self._check_coach(template.gym_id, update_data.default_coach_user_id)
        if update_data.name is not None and update_data.name != template.name:
            self._check_name_free(template.gym_id, update_data.name)

        try:
            with transactional(self.db):
                template_crud.update_class_template(self.db, template, update_data)
        except IntegrityError as e:
            if is_duplicate_name_violation(e):
                raise DuplicateClassNameError(update_data.name)
            raise
        self.db.refresh(template)
        return template

    def replace_schedule(self, gym_id: str, template_id: str, slots: List[WeeklySlot]) -> ClassTemplate:
        template = self._get(gym_id, template_id)
        with transactional(self.db):
            template_crud.replace_schedule_slots(self.db, template, slots)
        logger.info(f"Weekly schedule of class {template.id} set to {len(template.schedule_slots)} slots")
        self.db.refresh(template)
        return template

    def _get(self, gym_id: str, template_id: str) -> ClassTemplate:
        template_id = parse_uuid(template_id, "Invalid class ID format")
        gym = require_gym(self.db, gym_id)
        template = template_crud.get_class_template(self.db, gym.id, template_id)
        if not template:
            raise ClassTemplateNotFoundError()
        return template

    def _check_coach(self, gym_id: str, coach_id: Optional[str]) -> None:
        """The default coach has to be a staff user of the same gym."""
        if not coach_id:
            return
        gym_user = member_crud.get_gym_user(self.db, gym_id, coach_id)
        if not gym_user or gym_user.role.value not in STAFF_ROLES:
            raise CoachNotFoundError()

    def _check_name_free(self, gym_id: str, name: str) -> None:
        if template_crud.get_class_template_by_name(self.db, gym_id, name):
            raise DuplicateClassNameError(name)
