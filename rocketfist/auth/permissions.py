"""
Role-based access for mutating endpoints.

Authentication happens upstream; the caller's gym role arrives as a trusted
``X-Gym-Role`` header.
"""

import logging
from typing import List, Optional

from fastapi import Header, HTTPException, status

from rocketfist.config import config
from rocketfist.models.gym import GymRole

logger = logging.getLogger(__name__)


def get_current_role(allowed_roles: Optional[List[str]] = None):
    """
    Dependency factory returning the caller's role after checking it against allowed_roles.

    Args:
        allowed_roles: Role strings allowed to call the endpoint. None allows any
                       known role.

    Example:
        @router.post("/classes")
        def create_class(role: str = Depends(get_current_role(STAFF_ROLES))):
            ...

    In the dev environment a missing header falls back to ``DEV_ROLE`` so the
    frontend role switcher can drive the API without a session.
    """
    def dependency(x_gym_role: Optional[str] = Header(default=None)) -> str:
        role = x_gym_role
        if not role and config.ENVIRONMENT == "dev":
            logger.debug(f"No role header, using dev role {config.DEV_ROLE}")
            role = config.DEV_ROLE

        if not role:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Role required",
            )

        role = role.strip().lower()
        if role not in [r.value for r in GymRole]:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Unknown role: {role}",
            )

        if allowed_roles is not None and role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role {role}",
            )

        return role

    return dependency
