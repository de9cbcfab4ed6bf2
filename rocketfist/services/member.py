from typing import List

from sqlalchemy.orm import Session

from rocketfist.crud import member as member_crud
from rocketfist.errors.gym_errors import MemberNotFoundError
from rocketfist.models import GymUser, MembershipPlan
from rocketfist.schemas.member import MemberResponse
from rocketfist.services.gym import require_gym
from rocketfist.utils.ids import parse_uuid


def to_member_response(gym_user: GymUser, plan: str = None) -> MemberResponse:
    profile = gym_user.profile
    return MemberResponse(
        id=profile.id if profile else gym_user.user_id,
        full_name=profile.full_name if profile else None,
        email=profile.email if profile else "",
        role=gym_user.role.value,
        created_at=gym_user.created_at,
        plan=plan,
    )


class MemberService:
    def __init__(self, db: Session):
        self.db = db

    def list_members(self, gym_id: str) -> List[MemberResponse]:
        gym = require_gym(self.db, gym_id)
        gym_users = member_crud.get_gym_members(self.db, gym.id)
        plans = member_crud.get_active_plan_names(self.db, gym.id, [u.user_id for u in gym_users])
        return [to_member_response(u, plans.get(u.user_id)) for u in gym_users]

    def get_member(self, gym_id: str, member_id: str) -> MemberResponse:
        member_id = parse_uuid(member_id, "Invalid member ID format")
        gym = require_gym(self.db, gym_id)
        gym_user = member_crud.get_gym_user(self.db, gym.id, member_id)
        if not gym_user:
            raise MemberNotFoundError()
        plans = member_crud.get_active_plan_names(self.db, gym.id, [member_id])
        return to_member_response(gym_user, plans.get(member_id))

    def list_membership_plans(self, gym_id: str) -> List[MembershipPlan]:
        gym = require_gym(self.db, gym_id)
        return member_crud.get_membership_plans(self.db, gym.id)
