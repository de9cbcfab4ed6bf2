import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from rocketfist.config import config

logger = logging.getLogger(__name__)

engine = create_engine(config.SQLALCHEMY_DATABASE_URI, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


@contextmanager
def transactional(db: Session):
    """
    Commits the session when the block exits cleanly and rolls it back otherwise.

    Multi-statement mutations (registering against capacity, expanding a
    schedule, marking attendance) run inside one of these blocks so they land
    as a single transaction.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Rolling back transaction")
        db.rollback()
        raise
