"""Resource-level authorization.

Rules, in order:
1. reading the "App" resource is always allowed
2. any non-read action needs an authenticated profile
3. the target resource must exist

There is no ownership check: any authenticated user may act on any
existing resource. One lookup per call, no state kept between calls.
"""

from typing import Optional

import structlog

from pointage.auth.exceptions import NotFoundError, UnauthorizedError
from pointage.auth.interfaces import EntityLookup
from pointage.auth.models import Action, AuthProfile

logger = structlog.get_logger()

APP_RESOURCE = "App"


class AuthorizationService:
    def __init__(self, entity_lookup: EntityLookup, current_user: Optional[AuthProfile] = None):
        self.entity_lookup = entity_lookup
        self.current_user = current_user

    async def authorize(
        self,
        resource_type: str,
        resource_id: int,
        action: Action | str = Action.READ,
    ) -> None:
        """Raise UnauthorizedError or NotFoundError unless the action is allowed."""
        action = Action(action)

        if resource_type == APP_RESOURCE and action is Action.READ:
            return

        if action is not Action.READ and self.current_user is None:
            logger.info(
                "auth.denied",
                resource_type=resource_type,
                resource_id=resource_id,
                action=action.value,
            )
            raise UnauthorizedError()

        found = await self.entity_lookup.find_by_id(resource_type, resource_id)
        if found is None:
            raise NotFoundError(f"{resource_type} with id {resource_id} not found")
