import os
from datetime import datetime, timedelta, timezone

# Point the app at SQLite before anything imports rocketfist.database
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_database.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from rocketfist.main import app
from rocketfist.database import Base
from rocketfist.dependencies import get_db
from rocketfist.models import (
    ClassInstance,
    ClassTemplate,
    Gym,
    GymRole,
    GymUser,
    InstanceStatus,
    Payment,
    PaymentStatus,
    Registration,
    RegistrationStatus,
    UserProfile,
)

DATABASE_URL = "sqlite:///./test_database.db"

# Tuesday 2030-01-08, far enough ahead that "future" classes stay in the future
FUTURE_START = datetime(2030, 1, 8, 18, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db_session():
    """
    Fresh schema for every test.
    """
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """
    FastAPI test client using the test session for `get_db`.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def staff_headers():
    return {"X-Gym-Role": "owner"}


@pytest.fixture
def coach_headers():
    return {"X-Gym-Role": "coach"}


@pytest.fixture
def member_headers():
    return {"X-Gym-Role": "member"}


@pytest.fixture
def test_gym(db_session: Session) -> Gym:
    gym = Gym(name="Nova Combat Academy", slug="nova-combat-academy", timezone="UTC")
    db_session.add(gym)
    db_session.commit()
    db_session.refresh(gym)
    return gym


@pytest.fixture
def other_gym(db_session: Session) -> Gym:
    gym = Gym(name="Harbor Boxing Club", slug="harbor-boxing-club", timezone="UTC")
    db_session.add(gym)
    db_session.commit()
    db_session.refresh(gym)
    return gym


@pytest.fixture
def make_user(db_session: Session):
    """
    Factory: creates a profile attached to a gym with the given role.
    """
    def _make_user(gym: Gym, full_name: str, role: GymRole = GymRole.MEMBER, email: str = None) -> UserProfile:
        email = email or f"{full_name.lower().replace(' ', '.')}@example.com"
        profile = UserProfile(full_name=full_name, email=email)
        db_session.add(profile)
        db_session.flush()
        db_session.add(GymUser(gym_id=gym.id, user_id=profile.id, role=role))
        db_session.commit()
        db_session.refresh(profile)
        return profile

    return _make_user


@pytest.fixture
def test_coach(test_gym, make_user) -> UserProfile:
    return make_user(test_gym, "Maria Coach", GymRole.COACH)


@pytest.fixture
def test_members(test_gym, make_user):
    names = ["Chris Member", "Jordan Member", "Lee Member", "Morgan Member", "Robin Member"]
    return [make_user(test_gym, name) for name in names]


@pytest.fixture
def test_template(db_session: Session, test_gym: Gym, test_coach: UserProfile) -> ClassTemplate:
    template = ClassTemplate(
        gym_id=test_gym.id,
        name="Beginner BJJ",
        description="Introduction to Brazilian Jiu-Jitsu fundamentals for beginners.",
        discipline="bjj",
        skill_level="beginner",
        default_duration_minutes=60,
        default_coach_user_id=test_coach.id,
        is_active=True,
    )
    db_session.add(template)
    db_session.commit()
    db_session.refresh(template)
    return template


@pytest.fixture
def make_instance(db_session: Session):
    def _make_instance(
        template: ClassTemplate,
        start_time: datetime = FUTURE_START,
        max_capacity: int = 20,
        status: InstanceStatus = InstanceStatus.SCHEDULED,
    ) -> ClassInstance:
        instance = ClassInstance(
            class_template_id=template.id,
            gym_id=template.gym_id,
            coach_user_id=template.default_coach_user_id,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=template.default_duration_minutes),
            max_capacity=max_capacity,
            status=status,
        )
        db_session.add(instance)
        db_session.commit()
        db_session.refresh(instance)
        return instance

    return _make_instance


@pytest.fixture
def test_instance(make_instance, test_template) -> ClassInstance:
    return make_instance(test_template)


@pytest.fixture
def make_registration(db_session: Session):
    def _make_registration(
        instance: ClassInstance,
        member: UserProfile,
        status: RegistrationStatus = RegistrationStatus.RESERVED,
        created_at: datetime = None,
    ) -> Registration:
        registration = Registration(
            class_instance_id=instance.id,
            member_id=member.id,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )
        if status == RegistrationStatus.CHECKED_IN:
            registration.checked_in_at = instance.start_time
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)
        return registration

    return _make_registration


@pytest.fixture
def make_payment(db_session: Session):
    def _make_payment(
        gym: Gym,
        member: UserProfile,
        amount_cents: int,
        paid_at: datetime = None,
        status: PaymentStatus = PaymentStatus.SUCCEEDED,
        currency: str = "USD",
    ) -> Payment:
        payment = Payment(
            gym_id=gym.id,
            member_id=member.id,
            amount_cents=amount_cents,
            currency=currency,
            status=status,
            paid_at=paid_at,
        )
        db_session.add(payment)
        db_session.commit()
        db_session.refresh(payment)
        return payment

    return _make_payment
