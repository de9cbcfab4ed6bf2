#!/usr/bin/env python3
"""
Seeds the database with demo data (gym, users, classes, schedule, payments,
reservations). Safe to run more than once.
"""

import logging

from rocketfist.database import SessionLocal
from rocketfist.services.demo_seed import seed_demo_data

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def main():
    db = SessionLocal()
    try:
        result = seed_demo_data(db)
        logger.info(
            f"Seeded gym {result.gym.name} ({result.gym.id}): "
            f"{result.instances_created} new class instances, "
            f"{result.payments_created} payments, "
            f"{result.registrations_created} registrations"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
