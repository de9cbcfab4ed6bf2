from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from rocketfist.models import (
    GymRole,
    GymUser,
    Membership,
    MembershipPlan,
    MembershipStatus,
    UserProfile,
)


def get_gym_members(db: Session, gym_id: str) -> List[GymUser]:
    """Gym users with the member role, profile loaded, ordered by name."""
    return (
        db.query(GymUser)
        .join(UserProfile, GymUser.user_id == UserProfile.id)
        .options(joinedload(GymUser.profile))
        .filter(GymUser.gym_id == gym_id, GymUser.role == GymRole.MEMBER)
        .order_by(UserProfile.full_name, UserProfile.email)
        .all()
    )


def get_gym_user(db: Session, gym_id: str, user_id: str) -> Optional[GymUser]:
    return (
        db.query(GymUser)
        .options(joinedload(GymUser.profile))
        .filter(GymUser.gym_id == gym_id, GymUser.user_id == user_id)
        .first()
    )


def get_active_plan_names(db: Session, gym_id: str, member_ids: List[str]) -> Dict[str, str]:
    """Maps member id to the name of their active plan (latest start date wins)."""
    if not member_ids:
        return {}
    rows: List[Tuple[str, str]] = (
        db.query(Membership.member_id, MembershipPlan.name)
        .join(MembershipPlan, Membership.membership_plan_id == MembershipPlan.id)
        .filter(
            Membership.gym_id == gym_id,
            Membership.member_id.in_(member_ids),
            Membership.status == MembershipStatus.ACTIVE,
        )
        .order_by(Membership.start_date)
        .all()
    )
    return {member_id: plan_name for member_id, plan_name in rows}


def get_membership_plans(db: Session, gym_id: str) -> List[MembershipPlan]:
    return (
        db.query(MembershipPlan)
        .filter(MembershipPlan.gym_id == gym_id, MembershipPlan.is_active.is_(True))
        .order_by(MembershipPlan.price_cents.desc(), MembershipPlan.name)
        .all()
    )


def get_profile_by_email(db: Session, email: str) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.email == email).first()


def create_profile(db: Session, *, email: str, full_name: Optional[str]) -> UserProfile:
    profile = UserProfile(email=email, full_name=full_name)
    db.add(profile)
    db.flush()
    return profile


def add_gym_user(db: Session, *, gym_id: str, user_id: str, role: GymRole) -> GymUser:
    gym_user = GymUser(gym_id=gym_id, user_id=user_id, role=role)
    db.add(gym_user)
    db.flush()
    return gym_user
