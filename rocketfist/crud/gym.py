from typing import List, Optional

from sqlalchemy.orm import Session

from rocketfist.models import Gym


def get_gyms(db: Session) -> List[Gym]:
    return db.query(Gym).order_by(Gym.name, Gym.id).all()


def get_gym(db: Session, gym_id: str) -> Optional[Gym]:
    return db.query(Gym).filter(Gym.id == gym_id).first()


def get_gym_by_slug(db: Session, slug: str) -> Optional[Gym]:
    return db.query(Gym).filter(Gym.slug == slug).first()


def create_gym(db: Session, *, name: str, slug: str, timezone: str) -> Gym:
    gym = Gym(name=name, slug=slug, timezone=timezone)
    db.add(gym)
    db.flush()
    return gym
