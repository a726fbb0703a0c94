"""User API — registration, login/logout, current user.

- POST /users → create an account (password stored as bcrypt digest)
- POST /users/login → login or email + password → JWT (body + cookie)
- POST /users/logout → clear the token cookie
- GET /users/me → the authenticated user
- GET/PATCH /users/{id} → read any user, update only yourself
- PUT/DELETE /users/{id} → not allowed
"""

import secrets

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pointage.auth.dependencies import get_current_user, get_user_service
from pointage.auth.exceptions import UnauthorizedError
from pointage.auth.jwt import JWTService, get_token_service
from pointage.auth.models import AuthProfile
from pointage.auth.password import hash_password
from pointage.auth.service import UserService
from pointage.config import settings
from pointage.db.engine import get_db
from pointage.db.lookups import SqlUserLookup
from pointage.db.models import User
from pointage.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserRead,
    UserUpdate,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/users")

ALREADY_REGISTERED = "Login or email already registered"


def set_token_cookie(response: Response, token: str | None = None) -> None:
    """Hand the token to the browser, or reset the cookie when token is None."""
    response.set_cookie(
        key=settings.token_cookie_name,
        value=token or "",
        path="/",
        max_age=settings.token_expires_in if token else 0,
        httponly=True,
    )


# ─── Register ───────────────────────────────────────────


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    svc: UserService = Depends(get_user_service),
):
    """Create a new user account."""
    svc.validate_credentials(body.email, body.password)

    if await SqlUserLookup(db).find_conflict(body.login, body.email):
        raise HTTPException(status_code=409, detail=ALREADY_REGISTERED)

    user = User(
        login=body.login,
        email=body.email,
        password=hash_password(body.password),
        confirmation_code=100000 + secrets.randbelow(900000),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("users.created", user_id=user.id)
    return user


# ─── Login / logout ─────────────────────────────────────


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    response: Response,
    svc: UserService = Depends(get_user_service),
    token_service: JWTService = Depends(get_token_service),
):
    """Login with login (or email) and password → JWT."""
    user = await svc.verify_credentials(body.login, body.password)
    profile = svc.convert_to_user_profile(user)
    token = token_service.generate_token(profile)
    set_token_cookie(response, token)
    return TokenResponse(token=token)


@router.post("/logout", status_code=204)
async def logout():
    """Logging out only clears the cookie; issued tokens stay valid until expiry."""
    response = Response(status_code=204)
    set_token_cookie(response)
    return response


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(
    profile: AuthProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's record."""
    user = await db.get(User, int(profile.security_id))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ─── By id ──────────────────────────────────────────────


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.patch("/{user_id}", status_code=204)
async def update_user(
    user_id: int,
    body: UserUpdate,
    profile: AuthProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Users may only update their own record."""
    if profile.id != user_id:
        raise UnauthorizedError()
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    changes = body.model_dump(exclude_unset=True)
    conflict = await SqlUserLookup(db).find_conflict(
        changes.get("login", user.login),
        changes.get("email", user.email),
        exclude_id=user.id,
    )
    if conflict:
        raise HTTPException(status_code=409, detail=ALREADY_REGISTERED)
    for key, value in changes.items():
        setattr(user, key, value)
    await db.commit()
    return Response(status_code=204)


@router.put("/{user_id}", status_code=204)
async def replace_user(user_id: int):
    raise UnauthorizedError()


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: int):
    raise UnauthorizedError()
