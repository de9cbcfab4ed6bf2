import logging
from typing import List

from sqlalchemy.orm import Session

from rocketfist.crud import gym as gym_crud
from rocketfist.errors.gym_errors import GymNotFoundError
from rocketfist.models import Gym
from rocketfist.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


def require_gym(db: Session, gym_id: str) -> Gym:
    """
    Existence guard for every per-gym operation.

    Validates the id format, then issues exactly one query. Nothing that
    depends on the gym may run before this returns.
    """
    gym_id = parse_uuid(gym_id, "Invalid gym ID format")
    gym = gym_crud.get_gym(db, gym_id)
    if not gym:
        logger.debug(f"Gym {gym_id} not found")
        raise GymNotFoundError()
    return gym


class GymService:
    def __init__(self, db: Session):
        self.db = db

    def list_gyms(self) -> List[Gym]:
        return gym_crud.get_gyms(self.db)

    def get_gym(self, gym_id: str) -> Gym:
        return require_gym(self.db, gym_id)
