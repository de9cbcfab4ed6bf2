import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, joinedload

from rocketfist.models import (
    ClassInstance,
    InstanceStatus,
    Registration,
    RegistrationStatus,
    CAPACITY_STATUSES,
)
from rocketfist.utils.ids import new_uuid

logger = logging.getLogger(__name__)

_UPSERT_KEY = ["class_template_id", "start_time"]


def get_instances_in_window(
    db: Session,
    gym_id: str,
    lower: datetime,
    upper: datetime,
) -> List[ClassInstance]:
    """Instances with lower <= start_time < upper, template joined, ordered by start time."""
    return (
        db.query(ClassInstance)
        .options(joinedload(ClassInstance.class_template))
        .filter(
            ClassInstance.gym_id == gym_id,
            ClassInstance.start_time >= lower,
            ClassInstance.start_time < upper,
        )
        .order_by(ClassInstance.start_time, ClassInstance.id)
        .all()
    )


def get_instance(db: Session, gym_id: str, instance_id: str, *, for_update: bool = False) -> Optional[ClassInstance]:
    query = db.query(ClassInstance).filter(
        ClassInstance.gym_id == gym_id,
        ClassInstance.id == instance_id,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def get_template_instances(db: Session, template_id: str, start_times: List[datetime]) -> List[ClassInstance]:
    if not start_times:
        return []
    return (
        db.query(ClassInstance)
        .options(joinedload(ClassInstance.class_template))
        .filter(
            ClassInstance.class_template_id == template_id,
            ClassInstance.start_time.in_(start_times),
        )
        .order_by(ClassInstance.start_time, ClassInstance.id)
        .all()
    )


def insert_instance_if_absent(db: Session, **values) -> bool:
    """
    Inserts a class instance unless one already exists for (class_template_id, start_time).

    Returns True when a row was written.
    """
    values.setdefault("id", new_uuid())
    values.setdefault("status", InstanceStatus.SCHEDULED)
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        stmt = pg_insert(ClassInstance).values(**values).on_conflict_do_nothing(index_elements=_UPSERT_KEY)
    elif dialect == "sqlite":
        stmt = sqlite_insert(ClassInstance).values(**values).on_conflict_do_nothing(index_elements=_UPSERT_KEY)
    else:
        exists = db.query(ClassInstance.id).filter(
            ClassInstance.class_template_id == values["class_template_id"],
            ClassInstance.start_time == values["start_time"],
        ).first()
        if exists:
            return False
        db.add(ClassInstance(**values))
        db.flush()
        return True

    result = db.execute(stmt)
    return result.rowcount == 1


def count_registrations_by_instance(db: Session, instance_ids: List[str]) -> Dict[str, Tuple[int, int]]:
    """Maps instance id to (reserved_count, checked_in_count); checked-in members count as reserved."""
    if not instance_ids:
        return {}
    rows = (
        db.query(
            Registration.class_instance_id,
            func.sum(case((Registration.status.in_(CAPACITY_STATUSES), 1), else_=0)),
            func.sum(case((Registration.status == RegistrationStatus.CHECKED_IN, 1), else_=0)),
        )
        .filter(Registration.class_instance_id.in_(instance_ids))
        .group_by(Registration.class_instance_id)
        .all()
    )
    return {instance_id: (int(reserved or 0), int(checked_in or 0)) for instance_id, reserved, checked_in in rows}


def set_instance_status(db: Session, instance: ClassInstance, status: InstanceStatus) -> ClassInstance:
    instance.status = status
    db.flush()
    return instance
