from datetime import datetime, timezone

from rocketfist.models import ClassInstance, Payment, Registration, RegistrationStatus
from rocketfist.services.demo_seed import seed_demo_data
from rocketfist.services.revenue import RevenueService
from rocketfist.utils.timeutils import as_utc

ANCHOR = datetime(2024, 1, 10, 17, 0, tzinfo=timezone.utc)


def test_seed_creates_demo_gym(db_session):
    result = seed_demo_data(db_session, anchor=ANCHOR)

    assert result.gym.slug == "nova-combat-academy"
    assert len(result.templates) == 4
    # 8 weekly slots over last, current and next week
    assert result.instances_created == 24
    assert db_session.query(ClassInstance).count() == 24
    assert result.payments_created == 12
    assert result.registrations_created > 0


def test_seed_is_idempotent(db_session):
    first = seed_demo_data(db_session, anchor=ANCHOR)
    second = seed_demo_data(db_session, anchor=ANCHOR)

    assert second.gym.id == first.gym.id
    assert second.instances_created == 0
    assert second.payments_created == 0
    assert second.registrations_created == 0
    assert db_session.query(ClassInstance).count() == 24
    assert db_session.query(Payment).count() == 12
    assert db_session.query(Registration).count() == first.registrations_created


def test_past_classes_have_attendance(db_session):
    seed_demo_data(db_session, anchor=ANCHOR)

    registrations = db_session.query(Registration).join(ClassInstance).all()
    for registration in registrations:
        start = as_utc(registration.class_instance.start_time)
        if start < ANCHOR:
            assert registration.status in (RegistrationStatus.CHECKED_IN, RegistrationStatus.NO_SHOW)
        else:
            assert registration.status == RegistrationStatus.RESERVED


def test_seeded_revenue(db_session):
    result = seed_demo_data(db_session, anchor=ANCHOR)

    stats = RevenueService(db_session).get_revenue_stats(result.gym.id, "2024-01-01", "2024-01-31")

    assert stats.currency == "USD"
    assert stats.total_revenue_cents == 3 * 14900 + 3 * 9900
