"""FastAPI auth dependencies.

Learn: used as Depends() in route handlers. The authenticated profile is also
stored on request.state.user for anything further down the request.

- get_current_user_optional: anonymous callers get None
- get_current_user: missing or bad credentials raise a 401
- get_authorization_service: AuthorizationService bound to the caller
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pointage.auth.authorization import AuthorizationService
from pointage.auth.jwt import JWTService, get_token_service
from pointage.auth.models import AuthenticationMetadata, AuthProfile
from pointage.auth.service import UserService
from pointage.auth.strategy import JWTAuthenticationStrategy
from pointage.config import settings
from pointage.db.engine import get_db
from pointage.db.lookups import SqlEntityLookup, SqlUserLookup


def get_strategy(
    db: AsyncSession = Depends(get_db),
    token_service: JWTService = Depends(get_token_service),
) -> JWTAuthenticationStrategy:
    return JWTAuthenticationStrategy(
        token_service,
        user_lookup=SqlUserLookup(db),
        cookie_name=settings.token_cookie_name,
    )


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlUserLookup(db))


async def _authenticate(
    request: Request,
    strategy: JWTAuthenticationStrategy,
    metadata: AuthenticationMetadata,
) -> Optional[AuthProfile]:
    profile = await strategy.authenticate(request.headers, metadata)
    request.state.user = profile
    return profile


async def get_current_user_optional(
    request: Request,
    strategy: JWTAuthenticationStrategy = Depends(get_strategy),
) -> Optional[AuthProfile]:
    """Soft auth: returns None when the request carries no valid token."""
    return await _authenticate(
        request, strategy, AuthenticationMetadata(throw_error=False)
    )


async def get_current_user(
    request: Request,
    strategy: JWTAuthenticationStrategy = Depends(get_strategy),
) -> AuthProfile:
    """Hard auth: raises an AuthenticationError (401) on failure."""
    return await _authenticate(request, strategy, AuthenticationMetadata())


def get_authorization_service(
    db: AsyncSession = Depends(get_db),
    current_user: Optional[AuthProfile] = Depends(get_current_user_optional),
) -> AuthorizationService:
    return AuthorizationService(SqlEntityLookup(db), current_user=current_user)
