"""Stored user → AuthProfile conversion."""

from pointage.auth.models import AuthProfile
from pointage.db.models import User


def to_user_profile(user: User) -> AuthProfile:
    """Build the profile embedded in tokens.

    security_id is derived from the primary key alone so it survives
    login/email changes, and is the same whether the profile is built
    at login or rebuilt while verifying a token.
    """
    return AuthProfile(
        security_id=str(user.id),
        name=user.login,
        id=user.id,
        email=user.email,
    )
