from sqlalchemy import Boolean, Column, Integer, String, Text, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid
from rocketfist.utils.timeutils import utc_now


class ClassTemplate(Base):
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=new_uuid)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    discipline = Column(String, nullable=False)
    skill_level = Column(String, nullable=False)
    default_duration_minutes = Column(Integer, nullable=False)
    # NULL falls back to the discipline capacity rule
    default_capacity = Column(Integer, nullable=True)
    default_coach_user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    gym = relationship("Gym", back_populates="class_templates")
    default_coach = relationship("UserProfile")
    schedule_slots = relationship(
        "ClassScheduleSlot",
        back_populates="class_template",
        cascade="all, delete-orphan",
        order_by=lambda: [ClassScheduleSlot.day_of_week, ClassScheduleSlot.hour, ClassScheduleSlot.minute],
    )
    instances = relationship("ClassInstance", back_populates="class_template")

    __table_args__ = (
        CheckConstraint("default_duration_minutes > 0", name="ck_classes_duration_positive"),
        UniqueConstraint("gym_id", "name", name="uq_classes_gym_name"),
    )


class ClassScheduleSlot(Base):
    """One entry of a template's weekly pattern. day_of_week: 0 = Sunday ... 6 = Saturday."""
    __tablename__ = "class_schedule_slots"

    id = Column(String(36), primary_key=True, default=new_uuid)
    class_template_id = Column(String(36), ForeignKey("classes.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)
    hour = Column(Integer, nullable=False)
    minute = Column(Integer, nullable=False, default=0)

    class_template = relationship("ClassTemplate", back_populates="schedule_slots")

    __table_args__ = (
        UniqueConstraint("class_template_id", "day_of_week", "hour", "minute", name="uq_schedule_slot"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_slot_day"),
        CheckConstraint("hour BETWEEN 0 AND 23", name="ck_slot_hour"),
        CheckConstraint("minute BETWEEN 0 AND 59", name="ck_slot_minute"),
    )
