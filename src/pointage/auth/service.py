"""Credential verification for the login flow."""

import structlog

from pointage.auth.exceptions import (
    InvalidCredentialsError,
    MissingCredentialsError,
    UserNotFoundError,
)
from pointage.auth.interfaces import UserLookup
from pointage.auth.models import AuthProfile
from pointage.auth.password import verify_password
from pointage.auth.profile import to_user_profile
from pointage.db.models import User

logger = structlog.get_logger()


class UserService:
    """Checks login/password pairs against stored users."""

    def __init__(self, user_lookup: UserLookup):
        self.user_lookup = user_lookup

    def validate_credentials(self, login: str | None, password: str | None) -> None:
        """Fail fast on empty input, before any lookup happens."""
        if not login or not password:
            raise MissingCredentialsError()

    async def verify_credentials(self, login: str | None, password: str | None) -> User:
        """Return the stored user matching `login` (login or email) and `password`.

        The returned record still holds the password digest; callers
        convert it with convert_to_user_profile before passing it on.
        """
        self.validate_credentials(login, password)

        user = await self.user_lookup.find_by_login_or_email(login)
        if not user:
            logger.info("auth.login_failed", reason="user_not_found")
            raise UserNotFoundError(login)

        if not verify_password(password, user.password):
            logger.info("auth.login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialsError()

        logger.info("auth.login_succeeded", user_id=user.id)
        return user

    def convert_to_user_profile(self, user: User) -> AuthProfile:
        return to_user_profile(user)
