from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from rocketfist.models import ClassScheduleSlot, ClassTemplate
from rocketfist.schemas.class_template import ClassTemplateCreate, ClassTemplateUpdate


def get_class_templates(db: Session, gym_id: str) -> List[ClassTemplate]:
    return (
        db.query(ClassTemplate)
        .options(selectinload(ClassTemplate.schedule_slots))
        .filter(ClassTemplate.gym_id == gym_id)
        .order_by(ClassTemplate.name, ClassTemplate.id)
        .all()
    )


def get_class_template(db: Session, gym_id: str, template_id: str) -> Optional[ClassTemplate]:
    return (
        db.query(ClassTemplate)
        .options(selectinload(ClassTemplate.schedule_slots))
        .filter(ClassTemplate.gym_id == gym_id, ClassTemplate.id == template_id)
        .first()
    )


def get_class_template_by_name(db: Session, gym_id: str, name: str) -> Optional[ClassTemplate]:
    return (
        db.query(ClassTemplate)
        .filter(ClassTemplate.gym_id == gym_id, ClassTemplate.name == name)
        .first()
    )


def create_class_template(db: Session, gym_id: str, template_data: ClassTemplateCreate) -> ClassTemplate:
    data = template_data.model_dump(exclude={"schedule"})
    template = ClassTemplate(gym_id=gym_id, **data)
    db.add(template)
    db.flush()
    replace_schedule_slots(db, template, template_data.schedule)
    return template


def update_class_template(db: Session, template: ClassTemplate, update_data: ClassTemplateUpdate) -> ClassTemplate:
    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(template, field, value)
    db.flush()
    return template


def replace_schedule_slots(db: Session, template: ClassTemplate, slots: Iterable) -> ClassTemplate:
    """Replaces the weekly pattern, dropping duplicate entries."""
    seen = set()
    new_slots = []
    for slot in slots:
        key = (slot.day_of_week, slot.hour, slot.minute)
        if key in seen:
            continue
        seen.add(key)
        new_slots.append(ClassScheduleSlot(day_of_week=slot.day_of_week, hour=slot.hour, minute=slot.minute))
    template.schedule_slots.clear()
    db.flush()
    template.schedule_slots.extend(new_slots)
    db.flush()
    return template
