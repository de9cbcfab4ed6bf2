from enum import Enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from rocketfist.database import Base
from rocketfist.utils.ids import new_uuid
from rocketfist.utils.timeutils import utc_now


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REFUNDED = "refunded"


class Payment(Base):
    """Payment recorded by the billing integration. Amounts are integer minor units."""
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=new_uuid)
    gym_id = Column(String(36), ForeignKey("gyms.id"), nullable=False)
    member_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False)
    membership_id = Column(String(36), ForeignKey("memberships.id"), nullable=True)
    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(
        SQLEnum(PaymentStatus, name="payment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    paid_at = Column(DateTime(timezone=True), nullable=True)
    # Billing provider id, e.g. a payment intent
    external_reference = Column(String, nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    member = relationship("UserProfile")

    __table_args__ = (
        CheckConstraint("amount_cents >= 0", name="ck_payment_amount"),
        Index("idx_payment_gym_status_paid", "gym_id", "status", "paid_at"),
    )

    def __repr__(self):
        return f"<Payment(id={self.id}, gym_id={self.gym_id}, amount_cents={self.amount_cents} {self.currency})>"
