"""
Demo data for local development: one gym, staff and members, four classes with
weekly patterns expanded around the anchor date, plans, payments and
reservations.

Everything is keyed so the seed can be re-run without duplicating rows. Each
step returns what it created and the next step receives it explicitly.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from rocketfist.crud import class_template as template_crud
from rocketfist.crud import gym as gym_crud
from rocketfist.crud import member as member_crud
from rocketfist.crud import payment as payment_crud
from rocketfist.crud import registration as registration_crud
from rocketfist.database import transactional
from rocketfist.models import (
    ClassInstance,
    ClassTemplate,
    Gym,
    GymRole,
    Membership,
    MembershipPlan,
    MembershipStatus,
    PaymentStatus,
    RegistrationStatus,
    UserProfile,
)
from rocketfist.schemas.class_template import ClassTemplateCreate, WeeklySlot
from rocketfist.services.schedule_expansion import ScheduleExpansionService
from rocketfist.utils.timeutils import as_utc, get_zone, utc_now

logger = logging.getLogger(__name__)

DEMO_GYM = {
    "name": "Nova Combat Academy",
    "slug": "nova-combat-academy",
    "timezone": "America/New_York",
}

DEMO_USERS = [
    ("dylan.owner@example.com", "Dylan Owner", GymRole.OWNER),
    ("alex.owner@example.com", "Alex Owner", GymRole.OWNER),
    ("maria.coach@example.com", "Maria Coach", GymRole.COACH),
    ("jake.coach@example.com", "Jake Coach", GymRole.COACH),
    ("sam.employee@example.com", "Sam Employee", GymRole.STAFF),
    ("taylor.employee@example.com", "Taylor Employee", GymRole.STAFF),
    ("chris.member@example.com", "Chris Member", GymRole.MEMBER),
    ("jordan.member@example.com", "Jordan Member", GymRole.MEMBER),
    ("lee.member@example.com", "Lee Member", GymRole.MEMBER),
    ("morgan.member@example.com", "Morgan Member", GymRole.MEMBER),
    ("robin.member@example.com", "Robin Member", GymRole.MEMBER),
    ("casey.member@example.com", "Casey Member", GymRole.MEMBER),
]

# coach index refers to the coaches in DEMO_USERS order; day 0 = Sunday
DEMO_CLASSES = [
    {
        "name": "Beginner BJJ",
        "description": "Introduction to Brazilian Jiu-Jitsu fundamentals for beginners.",
        "discipline": "bjj",
        "skill_level": "beginner",
        "default_duration_minutes": 60,
        "coach": 0,
        "schedule": [(1, 18, 0), (3, 18, 0), (5, 18, 0)],
    },
    {
        "name": "All-Levels BJJ",
        "description": "BJJ training for all skill levels with rolling sessions.",
        "discipline": "bjj",
        "skill_level": "all-levels",
        "default_duration_minutes": 90,
        "coach": 0,
        "schedule": [(2, 19, 30), (4, 19, 30)],
    },
    {
        "name": "Muay Thai Fundamentals",
        "description": "Learn the art of eight limbs - punches, kicks, elbows, and knees.",
        "discipline": "muay_thai",
        "skill_level": "beginner",
        "default_duration_minutes": 60,
        "coach": 1,
        "schedule": [(1, 19, 30), (3, 19, 30)],
    },
    {
        "name": "Striking Conditioning",
        "description": "High-intensity conditioning focused on striking cardio and technique.",
        "discipline": "striking",
        "skill_level": "all-levels",
        "default_duration_minutes": 45,
        "coach": 1,
        "schedule": [(6, 11, 0)],
    },
]

DEMO_PLANS = [
    {
        "name": "Unlimited Training",
        "description": "Unlimited access to all classes and open mat sessions.",
        "price_cents": 14900,
        "billing_interval": "month",
        "max_classes_per_interval": None,
    },
    {
        "name": "8 Classes / Month",
        "description": "Eight classes per month, any discipline.",
        "price_cents": 9900,
        "billing_interval": "month",
        "max_classes_per_interval": 8,
    },
]

ATTENDANCE_RATE = 0.8


@dataclass
class SeedResult:
    gym: Gym
    users: Dict[GymRole, List[UserProfile]] = field(default_factory=dict)
    templates: List[ClassTemplate] = field(default_factory=list)
    instances: List[ClassInstance] = field(default_factory=list)
    plans: List[MembershipPlan] = field(default_factory=list)
    instances_created: int = 0
    payments_created: int = 0
    registrations_created: int = 0


def seed_gym(db: Session) -> Gym:
    gym = gym_crud.get_gym_by_slug(db, DEMO_GYM["slug"])
    if gym:
        return gym
    with transactional(db):
        gym = gym_crud.create_gym(db, **DEMO_GYM)
    logger.info(f"Created gym {gym.name}")
    return gym


def seed_users(db: Session, gym: Gym) -> Dict[GymRole, List[UserProfile]]:
    users: Dict[GymRole, List[UserProfile]] = {}
    with transactional(db):
        for email, full_name, role in DEMO_USERS:
            profile = member_crud.get_profile_by_email(db, email)
            if not profile:
                profile = member_crud.create_profile(db, email=email, full_name=full_name)
            if not member_crud.get_gym_user(db, gym.id, profile.id):
                member_crud.add_gym_user(db, gym_id=gym.id, user_id=profile.id, role=role)
            users.setdefault(role, []).append(profile)
    logger.info(f"Seeded {sum(len(v) for v in users.values())} users")
    return users


def seed_classes(db: Session, gym: Gym, coaches: List[UserProfile]) -> List[ClassTemplate]:
    templates = []
    with transactional(db):
        for class_data in DEMO_CLASSES:
            template = template_crud.get_class_template_by_name(db, gym.id, class_data["name"])
            if not template:
                template = template_crud.create_class_template(
                    db,
                    gym.id,
                    ClassTemplateCreate(
                        name=class_data["name"],
                        description=class_data["description"],
                        discipline=class_data["discipline"],
                        skill_level=class_data["skill_level"],
                        default_duration_minutes=class_data["default_duration_minutes"],
                        default_coach_user_id=coaches[class_data["coach"]].id if coaches else None,
                        schedule=[WeeklySlot(day_of_week=d, hour=h, minute=m) for d, h, m in class_data["schedule"]],
                    ),
                )
            templates.append(template)
    logger.info(f"Seeded {len(templates)} classes")
    return templates


def seed_instances(db: Session, gym: Gym, templates: List[ClassTemplate], anchor: datetime):
    """Last week, this week and next week for every class."""
    service = ScheduleExpansionService(db)
    created_total = 0
    instances: List[ClassInstance] = []
    for template in templates:
        created, _, expanded = service.expand(template, template.schedule_slots, [-1, 0, 1], anchor, gym.timezone)
        created_total += created
        instances.extend(expanded)
    instances.sort(key=lambda i: (as_utc(i.start_time), i.id))
    logger.info(f"Seeded {created_total} class instances ({len(instances)} in window)")
    return instances, created_total


def seed_plans(db: Session, gym: Gym) -> List[MembershipPlan]:
    existing = {p.name: p for p in db.query(MembershipPlan).filter(MembershipPlan.gym_id == gym.id).all()}
    plans = []
    with transactional(db):
        for plan_data in DEMO_PLANS:
            plan = existing.get(plan_data["name"])
            if not plan:
                plan = MembershipPlan(gym_id=gym.id, **plan_data)
                db.add(plan)
                db.flush()
            plans.append(plan)
    return plans


def _month_start(day: date, months_ago: int) -> date:
    year, month = day.year, day.month - months_ago
    while month < 1:
        month += 12
        year -= 1
    return date(year, month, 1)


def seed_memberships_and_payments(
    db: Session,
    gym: Gym,
    members: List[UserProfile],
    plans: List[MembershipPlan],
    anchor: datetime,
    rng: random.Random,
) -> int:
    """First half of the members on the first plan, the rest on the second; two monthly payments each."""
    zone = get_zone(gym.timezone)
    today = as_utc(anchor).astimezone(zone).date()
    created = 0
    with transactional(db):
        for index, member in enumerate(members):
            plan = plans[0] if index < len(members) / 2 else plans[1]
            membership = (
                db.query(Membership)
                .filter(Membership.gym_id == gym.id, Membership.member_id == member.id)
                .first()
            )
            if not membership:
                membership = Membership(
                    gym_id=gym.id,
                    member_id=member.id,
                    membership_plan_id=plan.id,
                    status=MembershipStatus.ACTIVE,
                    start_date=_month_start(today, 0),
                )
                db.add(membership)
                db.flush()

            for months_ago in (1, 0):
                month_start = _month_start(today, months_ago)
                reference = f"pi_mock_{member.id[:8]}_{month_start:%Y%m}"
                if payment_crud.get_payment_by_reference(db, reference):
                    continue
                paid_on = month_start + timedelta(days=rng.randrange(5))
                paid_at = zone.localize(datetime(paid_on.year, paid_on.month, paid_on.day, 12, 0))
                payment_crud.create_payment(
                    db,
                    gym_id=gym.id,
                    member_id=member.id,
                    membership_id=membership.id,
                    amount_cents=plan.price_cents,
                    currency="USD",
                    status=PaymentStatus.SUCCEEDED,
                    paid_at=as_utc(paid_at),
                    external_reference=reference,
                )
                created += 1
    logger.info(f"Seeded {created} payments")
    return created


def seed_registrations(
    db: Session,
    instances: List[ClassInstance],
    members: List[UserProfile],
    now: datetime,
    rng: random.Random,
) -> int:
    """
    Three to five members per instance. Past classes get checked_in (or no_show
    for roughly one in five), upcoming ones stay reserved.
    """
    created = 0
    with transactional(db):
        for instance in instances:
            picked = rng.sample(members, min(len(members), 3 + rng.randrange(3)))
            is_past = as_utc(instance.start_time) < now
            for member in picked[: instance.max_capacity]:
                # Drawn before the skip so re-runs consume the same sequence
                attended = rng.random() < ATTENDANCE_RATE
                if registration_crud.get_active_registration(db, instance.id, member.id):
                    continue
                if is_past:
                    status = RegistrationStatus.CHECKED_IN if attended else RegistrationStatus.NO_SHOW
                else:
                    status = RegistrationStatus.RESERVED
                registration = registration_crud.create_registration(db, instance.id, member.id, status)
                if status == RegistrationStatus.CHECKED_IN:
                    registration.checked_in_at = instance.start_time
                created += 1
    logger.info(f"Seeded {created} class registrations")
    return created


def seed_demo_data(db: Session, anchor: Optional[datetime] = None, seed: int = 42) -> SeedResult:
    anchor = as_utc(anchor) if anchor else utc_now()
    payment_rng = random.Random(seed)
    registration_rng = random.Random(seed + 1)

    gym = seed_gym(db)
    result = SeedResult(gym=gym)
    result.users = seed_users(db, gym)
    coaches = result.users.get(GymRole.COACH, [])
    members = result.users.get(GymRole.MEMBER, [])

    result.templates = seed_classes(db, gym, coaches)
    result.instances, result.instances_created = seed_instances(db, gym, result.templates, anchor)
    result.plans = seed_plans(db, gym)
    result.payments_created = seed_memberships_and_payments(db, gym, members, result.plans, anchor, payment_rng)
    result.registrations_created = seed_registrations(db, result.instances, members, anchor, registration_rng)
    return result
