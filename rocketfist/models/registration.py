from enum import Enum

from sqlalchemy import Column, String, ForeignKey, DateTime, Index, text, Enum as SQLEnum
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid
from rocketfist.utils.timeutils import utc_now


class RegistrationStatus(str, Enum):
    RESERVED = "reserved"
    CHECKED_IN = "checked_in"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Statuses that hold a spot against max_capacity
CAPACITY_STATUSES = [RegistrationStatus.RESERVED, RegistrationStatus.CHECKED_IN]


class Registration(Base):
    """
    A member's reservation for a class instance.

    Attendance is recorded on the reservation itself (status checked_in plus
    checked_in_at) so there is a single record per member and class.
    """
    __tablename__ = "class_registrations"

    id = Column(String(36), primary_key=True, default=new_uuid)
    class_instance_id = Column(String(36), ForeignKey("class_instances.id"), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    status = Column(
        SQLEnum(RegistrationStatus, name="registration_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RegistrationStatus.RESERVED,
    )
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    class_instance = relationship("ClassInstance", back_populates="registrations")
    member = relationship("UserProfile")

    __table_args__ = (
        # At most one non-cancelled reservation per member and instance
        Index(
            "uq_active_registration",
            "class_instance_id",
            "member_id",
            unique=True,
            postgresql_where=text("status != 'cancelled'"),
            sqlite_where=text("status != 'cancelled'"),
        ),
    )
