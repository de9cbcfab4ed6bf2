from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from rocketfist.models import Payment, PaymentStatus


def sum_succeeded_by_currency(
    db: Session,
    gym_id: str,
    lower: datetime,
    upper: datetime,
    currency: Optional[str] = None,
) -> List[Tuple[str, int]]:
    """
    Sums succeeded payments with lower <= paid_at < upper, one row per currency.

    The sum runs in the database over integer cents.
    """
    query = (
        db.query(Payment.currency, func.sum(Payment.amount_cents))
        .filter(
            Payment.gym_id == gym_id,
            Payment.status == PaymentStatus.SUCCEEDED,
            Payment.paid_at.isnot(None),
            Payment.paid_at >= lower,
            Payment.paid_at < upper,
        )
    )
    if currency:
        query = query.filter(Payment.currency == currency)
    rows = query.group_by(Payment.currency).order_by(Payment.currency).all()
    return [(row_currency, int(total or 0)) for row_currency, total in rows]


def get_payment_by_reference(db: Session, external_reference: str) -> Optional[Payment]:
    return db.query(Payment).filter(Payment.external_reference == external_reference).first()


def create_payment(db: Session, **values) -> Payment:
    payment = Payment(**values)
    db.add(payment)
    db.flush()
    return payment
