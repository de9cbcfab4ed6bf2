from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rocketfist.dependencies import get_db
from rocketfist.schemas.gym import GymResponse
from rocketfist.services.gym import GymService

router = APIRouter(prefix="/gyms", tags=["Gyms"])


@router.get("", response_model=List[GymResponse])
def list_gyms_endpoint(db: Session = Depends(get_db)):
    return GymService(db).list_gyms()


@router.get("/{gym_id}", response_model=GymResponse)
def get_gym_endpoint(gym_id: str, db: Session = Depends(get_db)):
    return GymService(db).get_gym(gym_id)
