from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rocketfist.dependencies import get_db
from rocketfist.schemas.member import MemberResponse, MembershipPlanResponse
from rocketfist.services.member import MemberService

router = APIRouter(prefix="/gyms/{gym_id}", tags=["Members"])


@router.get("/members", response_model=List[MemberResponse])
def list_members_endpoint(gym_id: str, db: Session = Depends(get_db)):
    return MemberService(db).list_members(gym_id)


@router.get("/members/{member_id}", response_model=MemberResponse)
def get_member_endpoint(gym_id: str, member_id: str, db: Session = Depends(get_db)):
    return MemberService(db).get_member(gym_id, member_id)


@router.get("/membership-plans", response_model=List[MembershipPlanResponse])
def list_membership_plans_endpoint(gym_id: str, db: Session = Depends(get_db)):
    return MemberService(db).list_membership_plans(gym_id)
