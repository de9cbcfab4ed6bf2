from enum import Enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid
from rocketfist.utils.timeutils import utc_now


class InstanceStatus(str, Enum):
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ClassInstance(Base):
    __tablename__ = "class_instances"

    id = Column(String(36), primary_key=True, default=new_uuid)
    class_template_id = Column(String(36), ForeignKey("classes.id"), nullable=False)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False)
    coach_user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    max_capacity = Column(Integer, nullable=False)
    status = Column(
        SQLEnum(InstanceStatus, name="instance_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=InstanceStatus.SCHEDULED,
    )
    created_at = Column(DateTime(timezone=True), default=utc_now)

    class_template = relationship("ClassTemplate", back_populates="instances")
    coach = relationship("UserProfile")
    registrations = relationship("Registration", back_populates="class_instance")

    __table_args__ = (
        # Expansion upserts on this key
        UniqueConstraint("class_template_id", "start_time", name="uq_instance_template_start"),
        CheckConstraint("end_time > start_time", name="ck_instance_time_order"),
        CheckConstraint("max_capacity >= 0", name="ck_instance_capacity"),
        Index("idx_instance_gym_start", "gym_id", "start_time"),
    )
