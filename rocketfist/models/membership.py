from enum import Enum

from sqlalchemy import Boolean, Column, Date, Integer, String, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid


class MembershipStatus(str, Enum):
    ACTIVE = "active"
    FROZEN = "frozen"
    CANCELLED = "cancelled"
    DELINQUENT = "delinquent"


class MembershipPlan(Base):
    __tablename__ = "membership_plans"

    id = Column(String(36), primary_key=True, default=new_uuid)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price_cents = Column(Integer, nullable=False)
    billing_interval = Column(String, nullable=False, default="month")
    # NULL means unlimited
    max_classes_per_interval = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(String(36), primary_key=True, default=new_uuid)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    membership_plan_id = Column(String(36), ForeignKey("membership_plans.id"), nullable=False)
    status = Column(
        SQLEnum(MembershipStatus, name="membership_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=MembershipStatus.ACTIVE,
    )
    start_date = Column(Date, nullable=False)

    plan = relationship("MembershipPlan")
