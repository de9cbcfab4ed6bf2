from enum import Enum

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid
from rocketfist.utils.timeutils import utc_now


class GymRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    STAFF = "staff"
    COACH = "coach"
    MEMBER = "member"


STAFF_ROLES = [GymRole.OWNER.value, GymRole.ADMIN.value, GymRole.STAFF.value, GymRole.COACH.value]
MANAGER_ROLES = [GymRole.OWNER.value, GymRole.ADMIN.value, GymRole.STAFF.value]


class Gym(Base):
    __tablename__ = "gyms"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    timezone = Column(String, nullable=False, default="UTC")
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    users = relationship("GymUser", back_populates="gym")
    class_templates = relationship("ClassTemplate", back_populates="gym")

    def __repr__(self):
        return f"<Gym(id={self.id}, slug={self.slug})>"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=False, unique=True, index=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    gym_memberships = relationship("GymUser", back_populates="profile")


class GymUser(Base):
    """Links a user profile to a gym with a role."""
    __tablename__ = "gym_users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    role = Column(
        SQLEnum(GymRole, name="gym_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=GymRole.MEMBER,
    )
    created_at = Column(DateTime(timezone=True), default=utc_now)

    gym = relationship("Gym", back_populates="users")
    profile = relationship("UserProfile", back_populates="gym_memberships")

    __table_args__ = (
        UniqueConstraint("gym_id", "user_id", name="uq_gym_user"),
    )
